"""
Git repository crawler.

Builds a FileTree from a git work tree by asking the ``git`` executable:
- ``git ls-tree -r -l -z HEAD`` for tracked paths and blob sizes
- one ``git log -z --name-only`` pass for the commits touching each path

Both commands run with ``-z`` so paths arrive unquoted and NUL-terminated.

Files are added in git's path order, so the same commit always produces the
same tree.
"""

import logging
import re
import subprocess
from collections import defaultdict
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Sequence, Tuple, Union

from repoman.core.tree import Commit, FileTree
from repoman.exceptions import CrawlError

logger = logging.getLogger(__name__)

DEFAULT_GIT_TIMEOUT = 120.0

# Separators for the log format: record per commit, unit per field
RECORD_SEP = "\x1e"
UNIT_SEP = "\x1f"
LOG_FORMAT = f"{RECORD_SEP}%H{UNIT_SEP}%an{UNIT_SEP}%aI{UNIT_SEP}%s"

# The header ends at the first newline or NUL; names follow NUL-terminated
_HEADER_END = re.compile("[\n\0]")


class GitRepoCrawler:
    """
    Crawl a git work tree into a FileTree.

    Usage:
        crawler = GitRepoCrawler("/path/to/repo")
        tree = crawler.crawl()
    """

    def __init__(self, repo_path: Union[str, Path], timeout: float = DEFAULT_GIT_TIMEOUT):
        self.repo_path = Path(repo_path)
        self.timeout = timeout

    def crawl(self) -> FileTree:
        """
        Build the tree for HEAD.

        Raises:
            CrawlError: If the path is not a git work tree or git fails
        """
        if not self.repo_path.is_dir():
            raise CrawlError("Repository path is not a directory", repo_path=str(self.repo_path))

        inside = self._git("rev-parse", "--is-inside-work-tree").strip()
        if inside != "true":
            raise CrawlError("Not inside a git work tree", repo_path=str(self.repo_path))

        entries = self.list_files()
        history = self.file_history()

        tree = FileTree()
        for path, size in entries:
            tree.add_file(path, size, history.get(path, ()))

        logger.info(f"Crawled {len(tree)} files from {self.repo_path}")
        return tree

    def list_files(self) -> List[Tuple[str, int]]:
        """Tracked blobs at HEAD as (path, size) pairs, in git's order."""
        output = self._git("ls-tree", "-r", "-l", "-z", "HEAD")
        entries: List[Tuple[str, int]] = []
        for record in output.split("\0"):
            if not record:
                continue
            # <mode> SP <type> SP <object> SP+ <size> TAB <path>
            meta, _, path = record.partition("\t")
            fields = meta.split()
            if len(fields) != 4 or fields[1] != "blob":
                logger.debug(f"Skipping non-blob entry: {path}")
                continue
            try:
                size = int(fields[3])
            except ValueError:
                logger.debug(f"Skipping entry with unreadable size: {path}")
                continue
            entries.append((path, size))
        return entries

    def file_history(self) -> Dict[str, List[Commit]]:
        """Commits touching each path, newest first."""
        output = self._git(
            "log",
            "-z",
            "--name-only",
            "--no-renames",
            f"--pretty=format:{LOG_FORMAT}",
            "HEAD",
        )
        history: Dict[str, List[Commit]] = defaultdict(list)
        for record in output.split(RECORD_SEP):
            if not record.strip():
                continue
            header, *rest = _HEADER_END.split(record, maxsplit=1)
            commit = self._parse_commit(header)
            if commit is None:
                continue
            for name in "".join(rest).split("\0"):
                name = name.strip("\n")
                if name:
                    history[name].append(commit)
        return history

    @staticmethod
    def _parse_commit(header: str) -> "Commit | None":
        fields = header.split(UNIT_SEP)
        if len(fields) != 4:
            logger.debug(f"Skipping malformed log header: {header!r}")
            return None
        sha, author, date, subject = fields
        try:
            timestamp = datetime.fromisoformat(date)
        except ValueError:
            logger.debug(f"Skipping commit {sha[:8]} with unparsable date {date!r}")
            return None
        return Commit(sha=sha, author=author, timestamp=timestamp, message=subject)

    def _git(self, *args: str) -> str:
        command: Sequence[str] = ["git", "-c", "core.quotepath=off", *args]
        display = " ".join(["git", *args])
        try:
            proc = subprocess.run(
                command,
                cwd=str(self.repo_path),
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                timeout=self.timeout,
                check=False,
            )
        except FileNotFoundError as e:
            raise CrawlError("git executable not found", repo_path=str(self.repo_path), command=display) from e
        except subprocess.TimeoutExpired as e:
            raise CrawlError(
                f"git timed out after {self.timeout}s",
                repo_path=str(self.repo_path),
                command=display,
            ) from e
        except OSError as e:
            raise CrawlError(f"Could not run git: {e}", repo_path=str(self.repo_path), command=display) from e

        if proc.returncode != 0:
            raise CrawlError(
                proc.stderr.strip() or f"git exited with status {proc.returncode}",
                repo_path=str(self.repo_path),
                command=display,
            )
        return proc.stdout
