"""Error taxonomy for WAD decoding.

Every decode boundary raises one of these instead of terminating the
process, so callers can recover per map or per lump.
"""

from __future__ import annotations

from typing import Optional


class WadError(Exception):
    """Base class for everything this package raises."""


class WadIOError(WadError, OSError):
    """The container could not be opened, or a seek/read came up short."""


class FormatError(WadError, ValueError):
    """
    The bytes do not follow the WAD layout: bad signature, undecodable
    name, or a record index that points outside its table.
    """

    def __init__(
        self,
        message: str,
        *,
        lump: Optional[str] = None,
        index: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> None:
        context = []
        if lump is not None:
            context.append(f"lump={lump}")
        if index is not None:
            context.append(f"index={index}")
        if offset is not None:
            context.append(f"offset={offset}")
        if context:
            message = f"{message} ({', '.join(context)})"
        super().__init__(message)
        self.lump = lump
        self.index = index
        self.offset = offset


class InvalidSignature(FormatError):
    """The 4-byte header tag is neither IWAD nor PWAD."""

    def __init__(self, signature: bytes) -> None:
        super().__init__(
            f"Not a valid WAD file: identification is {signature!r}, "
            f"expected b'IWAD' or b'PWAD'",
            offset=0,
        )
        self.signature = signature


class MalformedLump(FormatError):
    """A fixed-record lump whose byte size is not a whole number of records."""

    def __init__(self, lump: str, size: int, record_size: int, offset: Optional[int] = None) -> None:
        super().__init__(
            f"{lump} lump is {size} bytes, not a multiple of its "
            f"{record_size}-byte record size ({size % record_size} bytes left over)",
            lump=lump,
            offset=offset,
        )
        self.size = size
        self.record_size = record_size


class MapNotFound(WadError, KeyError):
    """The requested map name is not in the assembled map list."""

    def __init__(self, name: str, available: tuple[str, ...] = ()) -> None:
        super().__init__(name)
        self.name = name
        self.available = available

    def __str__(self) -> str:
        if self.available:
            return f"Map not found: {self.name!r} (available: {', '.join(self.available)})"
        return f"Map not found: {self.name!r}"
