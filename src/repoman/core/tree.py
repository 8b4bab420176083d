"""
File tree model for repository diagrams.

This module defines the in-memory tree the diagram engine consumes:
- Commit: one commit touching a file
- GitFile: a tracked file with its size, history and risk index
- Folder: an implicit directory derived from file path prefixes
- FileTree: the ordered collection, built one file at a time

Folders are built once, when files are added, so layout never has to
re-parse path strings.
"""

import logging
import math
import os
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Iterable, Iterator, List, Optional, Tuple, Union

from ..exceptions import InvalidAttributeError

__all__ = [
    "Commit",
    "GitFile",
    "Folder",
    "FileTree",
    "file_key",
    "normalize_path",
]

logger = logging.getLogger(__name__)

Number = Union[int, float]


def normalize_path(path: str) -> str:
    """
    Normalize a repository-relative path to slash-separated form.

    Raises:
        InvalidAttributeError: If the path is empty or has an empty segment
    """
    normalized = (path or "").replace("\\", "/")
    while normalized.startswith("./"):
        normalized = normalized[2:]
    normalized = normalized.lstrip("/")

    if not normalized or any(part == "" for part in normalized.split("/")):
        raise InvalidAttributeError(
            "File path must be a non-empty relative path",
            attribute="path",
            value=path,
        )
    return normalized


def _is_non_negative(value: Optional[Number]) -> bool:
    return value is not None and math.isfinite(value) and value >= 0


def file_key(name: str) -> str:
    """
    Color lookup key for a file name.

    The extension including its dot (``.cs``), or the whole name for
    dotfiles and extensionless names (``.gitignore``, ``CODEOWNERS``).
    """
    _, extension = os.path.splitext(name)
    return extension or name


@dataclass(frozen=True)
class Commit:
    """A single commit that touched a file."""
    sha: str
    author: str
    timestamp: datetime
    message: str = ""


@dataclass
class GitFile:
    """
    A tracked file.

    ``path``, ``size`` and ``commits`` are fixed at ingestion. ``risk_index``
    is owned by the tree and only changes through FileTree.set_risk_index.
    """
    path: str
    size: int
    commits: Tuple[Commit, ...] = ()
    risk_index: Number = 0

    @property
    def name(self) -> str:
        return self.path.rsplit("/", 1)[-1]

    @property
    def folder_path(self) -> str:
        if "/" not in self.path:
            return ""
        return self.path.rsplit("/", 1)[0]

    @property
    def key(self) -> str:
        return file_key(self.name)

    @property
    def commit_count(self) -> int:
        return len(self.commits)

    @property
    def is_top_level(self) -> bool:
        return "/" not in self.path


@dataclass
class Folder:
    """An implicit directory: direct files plus nested folders, in insertion order."""
    name: str
    path: str = ""
    files: List[GitFile] = field(default_factory=list)
    folders: Dict[str, "Folder"] = field(default_factory=dict)

    def child(self, name: str) -> "Folder":
        """Get or create the nested folder called ``name``."""
        folder = self.folders.get(name)
        if folder is None:
            child_path = f"{self.path}/{name}" if self.path else name
            folder = Folder(name=name, path=child_path)
            self.folders[name] = folder
        return folder

    def all_files(self) -> List[GitFile]:
        """Every descendant file: own files first, then each subfolder in order."""
        result = list(self.files)
        for folder in self.folders.values():
            result.extend(folder.all_files())
        return result

    @property
    def is_empty(self) -> bool:
        return not self.files and not self.folders


class FileTree:
    """
    Ordered collection of repository files.

    Usage:
        tree = FileTree()
        tree.add_file("src/Program.cs", 100, commits)
        tree.top_level_files()   # files with no directory component
        tree.foldered()          # {"src": Folder(...)}
    """

    def __init__(self) -> None:
        self._files: Dict[str, GitFile] = {}
        self._root = Folder(name="")

    def add_file(
        self,
        path: str,
        size: int,
        commits: Iterable[Commit] = (),
    ) -> GitFile:
        """
        Append a file to the tree.

        Callers are responsible for path uniqueness.

        Raises:
            InvalidAttributeError: If size is negative, NaN or infinite, or the path is malformed
        """
        normalized = normalize_path(path)
        if not _is_non_negative(size):
            raise InvalidAttributeError(
                "File size must be a finite non-negative number",
                attribute="size",
                value=size,
                path=normalized,
            )

        git_file = GitFile(path=normalized, size=size, commits=tuple(commits))
        self._files[normalized] = git_file

        folder = self._root
        for segment in normalized.split("/")[:-1]:
            folder = folder.child(segment)
        folder.files.append(git_file)

        logger.debug(f"Added {normalized} ({size} bytes, {git_file.commit_count} commits)")
        return git_file

    def set_risk_index(self, path: str, value: Number) -> GitFile:
        """
        Annotate a file with its risk index.

        Raises:
            KeyError: If no file has this path
            InvalidAttributeError: If value is negative, NaN or infinite
        """
        git_file = self._files[normalize_path(path)]
        if not _is_non_negative(value):
            raise InvalidAttributeError(
                "Risk index must be a finite non-negative number",
                attribute="risk_index",
                value=value,
                path=git_file.path,
            )
        git_file.risk_index = value
        return git_file

    @property
    def root(self) -> Folder:
        return self._root

    @property
    def files(self) -> List[GitFile]:
        return list(self._files.values())

    def get(self, path: str) -> Optional[GitFile]:
        return self._files.get(normalize_path(path))

    def top_level_files(self) -> List[GitFile]:
        return [git_file for git_file in self._files.values() if git_file.is_top_level]

    def foldered(self) -> Dict[str, Folder]:
        return dict(self._root.folders)

    @property
    def is_empty(self) -> bool:
        return self._root.is_empty

    def __len__(self) -> int:
        return len(self._files)

    def __iter__(self) -> Iterator[GitFile]:
        return iter(self.files)

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, str):
            return False
        try:
            return normalize_path(path) in self._files
        except InvalidAttributeError:
            return False
