"""
WAD container header and directory reader.

WAD header layout (12 bytes):
    4s  identification  "IWAD" or "PWAD"
    i   numlumps
    i   infotableofs

Lump directory entry (16 bytes each):
    i   filepos
    i   size
    8s  name  (null-padded)

All reads are explicit seek + read calls on a caller-owned binary
stream; nothing is cached beyond the returned values.
"""

from __future__ import annotations

import logging
import struct
from typing import BinaryIO, Optional

from wadmap.defs import NAME_SIZE, NO_TEXTURE, WAD_SIGNATURES, DirectoryEntry, WadHeader
from wadmap.errors import FormatError, InvalidSignature, WadIOError

log = logging.getLogger(__name__)

HEADER_FMT = "<4sii"
HEADER_SIZE = struct.calcsize(HEADER_FMT)  # 12

DIR_ENTRY_FMT = "<ii8s"
DIR_ENTRY_SIZE = struct.calcsize(DIR_ENTRY_FMT)  # 16


# ---------------------------------------------------------------------------
# Low-level helpers
# ---------------------------------------------------------------------------

def read_exact(stream: BinaryIO, offset: int, size: int, what: str) -> bytes:
    """Seek to *offset* and read exactly *size* bytes, or raise WadIOError."""
    if offset < 0:
        raise FormatError(f"Negative offset for {what}", offset=offset)
    try:
        stream.seek(offset)
        data = stream.read(size)
    except OSError as e:
        raise WadIOError(f"Failed to read {what} at offset {offset}: {e}") from e
    if len(data) != size:
        raise WadIOError(
            f"Short read for {what}: expected {size} bytes at offset {offset}, "
            f"got {len(data)}"
        )
    return data


def decode_name(
    raw: bytes,
    *,
    lump: Optional[str] = None,
    index: Optional[int] = None,
    offset: Optional[int] = None,
) -> str:
    """
    Convert a fixed-width name field to a string.

    The field is cut at the first NUL or other control byte; what is left
    must be valid UTF-8.
    """
    end = len(raw)
    for i, b in enumerate(raw):
        if b < 0x20 or b == 0x7F:
            end = i
            break
    try:
        return raw[:end].decode("utf-8")
    except UnicodeDecodeError as e:
        raise FormatError(
            f"Invalid name bytes {raw!r}", lump=lump, index=index, offset=offset
        ) from e


def decode_texture_name(
    raw: bytes,
    *,
    lump: Optional[str] = None,
    index: Optional[int] = None,
    offset: Optional[int] = None,
) -> Optional[str]:
    """Like decode_name, but the "-" placeholder means no texture (None)."""
    name = decode_name(raw, lump=lump, index=index, offset=offset)
    return None if name == NO_TEXTURE else name


# ---------------------------------------------------------------------------
# Header and directory
# ---------------------------------------------------------------------------

def read_header(stream: BinaryIO) -> WadHeader:
    """Read and validate the 12-byte WAD header at the start of *stream*."""
    data = read_exact(stream, 0, HEADER_SIZE, "WAD header")
    ident, numlumps, infotableofs = struct.unpack(HEADER_FMT, data)

    if ident not in WAD_SIGNATURES:
        raise InvalidSignature(ident)
    if numlumps < 0:
        raise FormatError(f"Negative directory entry count {numlumps}", offset=4)

    header = WadHeader(
        wad_type=ident.decode("ascii"),
        entry_count=numlumps,
        directory_offset=infotableofs,
    )
    log.debug("%s with %d lumps, directory at %d",
              header.wad_type, header.entry_count, header.directory_offset)
    return header


def read_directory(stream: BinaryIO, header: WadHeader) -> tuple[DirectoryEntry, ...]:
    """Read every directory entry listed by *header*, in directory order."""
    entries = []
    for i in range(header.entry_count):
        entry_offset = header.directory_offset + i * DIR_ENTRY_SIZE
        data = read_exact(stream, entry_offset, DIR_ENTRY_SIZE, f"directory entry {i}")
        filepos, size, raw_name = struct.unpack(DIR_ENTRY_FMT, data)
        name = decode_name(raw_name, index=i, offset=entry_offset)
        entries.append(DirectoryEntry(name=name, offset=filepos, size=size, index=i))
    return tuple(entries)


def encode_directory_entry(entry: DirectoryEntry) -> bytes:
    """Pack *entry* into its 16-byte on-disk form."""
    raw_name = entry.name.encode("utf-8")
    if len(raw_name) > NAME_SIZE:
        raise FormatError(f"Lump name {entry.name!r} is longer than {NAME_SIZE} bytes", index=entry.index)
    return struct.pack(DIR_ENTRY_FMT, entry.offset, entry.size, raw_name)
