from __future__ import annotations
from enum import Enum


class OutputFormat(Enum):
    """The closed set of codecs picpress can write."""
    JPEG = "jpeg"
    PNG = "png"
    WEBP = "webp"
    AVIF = "avif"

    @property
    def pil_format(self) -> str:
        """Format name Pillow's ``Image.save`` expects."""
        return self.name

    @classmethod
    def lookup(cls, name: str) -> OutputFormat | None:
        """Case-insensitive lookup of a format name or file extension."""
        return _ALIASES.get(name.strip().lower())


_ALIASES = {
    "jpeg": OutputFormat.JPEG,
    "jpg": OutputFormat.JPEG,
    "png": OutputFormat.PNG,
    "webp": OutputFormat.WEBP,
    "avif": OutputFormat.AVIF,
}
