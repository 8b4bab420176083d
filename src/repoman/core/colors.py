"""
File color mapping.

Maps a file's lookup key (extension, or the whole name for dotfiles and
extensionless files) to a display color. The table is configuration and is
never mutated after the mapper is built.

Two coloring modes exist. The mapper does not know which one is active;
the layout engine is told the mode and passes an intensity per file:
- SIZE: map(key), every file of an extension gets the configured color
- RISK: map(key, intensity), with intensity in [65, 100] from the bounded
  calculator over every file's risk index
"""

import logging
import re
from enum import Enum
from types import MappingProxyType
from typing import Dict, Mapping, Optional

__all__ = [
    "ColorMode",
    "FileColorMapper",
    "DEFAULT_COLOR",
    "DEFAULT_COLOR_MAPPINGS",
    "FULL_INTENSITY",
    "shade",
]

logger = logging.getLogger(__name__)

FULL_INTENSITY = 100

DEFAULT_COLOR = "lightgrey"

DEFAULT_COLOR_MAPPINGS: Dict[str, str] = {
    # Source code
    ".cs": "#178600",
    ".py": "#3572a5",
    ".js": "#f1e05a",
    ".jsx": "#f1e05a",
    ".ts": "#3178c6",
    ".tsx": "#3178c6",
    ".java": "#b07219",
    ".go": "#00add8",
    ".rs": "#dea584",
    ".rb": "#701516",
    ".c": "#555555",
    ".h": "#555555",
    ".cpp": "#f34b7d",
    ".sh": "#89e051",
    # Markup and styles
    ".html": "#e34c26",
    ".css": "#563d7c",
    ".xaml": "#0c54c2",
    ".xml": "#0060ac",
    ".svg": "#ff9900",
    # Data and configuration
    ".json": "#292929",
    ".yaml": "#cb171e",
    ".yml": "#cb171e",
    ".toml": "#9c4221",
    ".csproj": "#68217a",
    ".sln": "#68217a",
    # Documentation
    ".md": "#083fa1",
    ".txt": "#a0a0a0",
    # Repository metadata
    ".gitignore": "#f44d27",
    ".gitattributes": "#f44d27",
    ".editorconfig": "#fff1f2",
    "LICENSE": "#d0d0d0",
    "CODEOWNERS": "#ffffe0",
    "Dockerfile": "#384d54",
    "Makefile": "#427819",
}

_HEX_COLOR = re.compile(r"^#([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


class ColorMode(Enum):
    """What drives file color."""
    SIZE = "size"   # Extension color only
    RISK = "risk"   # Extension color shaded by relative risk

    @classmethod
    def from_value(cls, value: "str | ColorMode") -> "ColorMode":
        """Convert a config string to ColorMode with validation."""
        if isinstance(value, ColorMode):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ValueError(
                f"Invalid color mode: {value!r}. Must be one of: "
                f"{', '.join(m.value for m in cls)}"
            ) from None


def shade(color: str, intensity: int) -> str:
    """
    Blend a hex color toward white by ``(100 - intensity)`` percent.

    Non-hex colors (CSS names) are returned unchanged.
    """
    if intensity >= FULL_INTENSITY:
        return color
    match = _HEX_COLOR.match(color)
    if not match:
        return color

    digits = match.group(1)
    if len(digits) == 3:
        digits = "".join(d * 2 for d in digits)

    intensity = max(intensity, 0)
    channels = []
    for i in range(0, 6, 2):
        value = int(digits[i:i + 2], 16)
        # Integer blend: 255 - (255 - v) * intensity / 100, rounded half up
        blended = 255 - ((255 - value) * intensity * 2 + FULL_INTENSITY) // (2 * FULL_INTENSITY)
        channels.append(blended)
    return "#" + "".join(f"{c:02x}" for c in channels)


class FileColorMapper:
    """
    Extension to color lookup with a default for unknown keys.

    Usage:
        mapper = FileColorMapper({".cs": "#001122"})
        mapper.map(".cs")        # "#001122"
        mapper.map(".cs", 65)    # lighter shade of #001122
        mapper.map(".zzz")       # DEFAULT_COLOR
    """

    def __init__(
        self,
        mappings: Optional[Mapping[str, str]] = None,
        default_color: str = DEFAULT_COLOR,
    ):
        table = DEFAULT_COLOR_MAPPINGS if mappings is None else mappings
        self._mappings = MappingProxyType(dict(table))
        self._lowered = MappingProxyType({k.lower(): v for k, v in table.items()})
        self.default_color = default_color

    @property
    def mappings(self) -> Mapping[str, str]:
        return self._mappings

    def lookup(self, key: str) -> Optional[str]:
        """Configured color for key, or None."""
        color = self._mappings.get(key)
        if color is None:
            color = self._lowered.get(key.lower())
        return color

    def map(self, key: str, intensity: int = FULL_INTENSITY) -> str:
        color = self.lookup(key)
        if color is None:
            logger.debug(f"No color mapping for {key!r}, using {self.default_color}")
            color = self.default_color
        return shade(color, intensity)
