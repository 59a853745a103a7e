"""
Fixed-size record decoders for the map lumps.

On-disk layouts (little-endian, no padding):
    VERTEXES  4 bytes   x:h, y:h
    LINEDEFS  14 bytes  v1:h, v2:h, flags:h, type:h, tag:h, right:h, left:h
    SIDEDEFS  30 bytes  xoff:h, yoff:h, upper:8s, lower:8s, middle:8s, sector:H
    SECTORS   26 bytes  floor:h, ceiling:h, floorpic:8s, ceilpic:8s,
                        light:h, special:H, tag:H
    THINGS    10 bytes  x:h, y:h, angle:h, type:h, flags:h
"""

from __future__ import annotations

import logging
import struct
from typing import BinaryIO, Callable, Generic, Mapping, TypeVar

from wadmap.defs import (
    LUMP_LINEDEFS, LUMP_SECTORS, LUMP_SIDEDEFS, LUMP_THINGS, LUMP_VERTEXES,
    DirectoryEntry, LineDef, Sector, SideDef, Thing, Vertex,
)
from wadmap.errors import FormatError, MalformedLump, WadIOError
from wadmap.perf import perf
from wadmap.wad import decode_texture_name

log = logging.getLogger(__name__)

T = TypeVar("T")

_VERTEX_FMT = "<hh"
_LINEDEF_FMT = "<7h"
_SIDEDEF_FMT = "<hh8s8s8sH"
_SECTOR_FMT = "<hh8s8shHH"
_THING_FMT = "<5h"

VERTEX_SIZE = struct.calcsize(_VERTEX_FMT)    # 4
LINEDEF_SIZE = struct.calcsize(_LINEDEF_FMT)  # 14
SIDEDEF_SIZE = struct.calcsize(_SIDEDEF_FMT)  # 30
SECTOR_SIZE = struct.calcsize(_SECTOR_FMT)    # 26
THING_SIZE = struct.calcsize(_THING_FMT)      # 10


class RecordDecoder(Generic[T]):
    """
    Reads a lump as a run of fixed-size records.

    *decode_fn* receives the raw record bytes, the record's index within
    the lump and its absolute byte offset (for error context).
    """

    def __init__(self, lump_name: str, record_size: int,
                 decode_fn: Callable[[bytes, int, int], T]) -> None:
        self.lump_name = lump_name
        self.record_size = record_size
        self.decode_fn = decode_fn

    def __repr__(self) -> str:
        return f"RecordDecoder({self.lump_name!r}, {self.record_size})"

    def count(self, entry: DirectoryEntry) -> int:
        if entry.size < 0 or entry.size % self.record_size != 0:
            raise MalformedLump(entry.name, entry.size, self.record_size, offset=entry.offset)
        return entry.size // self.record_size

    def decode(self, stream: BinaryIO, entry: DirectoryEntry) -> tuple[T, ...]:
        n = self.count(entry)
        if n == 0:
            return ()
        if entry.offset < 0:
            raise FormatError(f"Negative offset for {entry.name}", lump=entry.name, offset=entry.offset)
        try:
            stream.seek(entry.offset)
        except (OSError, ValueError) as e:
            raise WadIOError(f"Failed to seek to {entry.name} at offset {entry.offset}: {e}") from e

        records = []
        for i in range(n):
            offset = entry.offset + i * self.record_size
            try:
                buf = stream.read(self.record_size)
            except OSError as e:
                raise WadIOError(f"Failed to read {entry.name} record {i}: {e}") from e
            if len(buf) != self.record_size:
                raise WadIOError(
                    f"Short read in {entry.name}: record {i} at offset {offset} "
                    f"needs {self.record_size} bytes, got {len(buf)}"
                )
            records.append(self.decode_fn(buf, i, offset))
        return tuple(records)


# ---------------------------------------------------------------------------
# Per-record decode functions
# ---------------------------------------------------------------------------

def _decode_vertex(buf: bytes, index: int, offset: int) -> Vertex:
    x, y = struct.unpack(_VERTEX_FMT, buf)
    return Vertex(x=x, y=y)


def _decode_linedef(buf: bytes, index: int, offset: int) -> LineDef:
    v1, v2, flags, line_type, tag, right, left = struct.unpack(_LINEDEF_FMT, buf)
    return LineDef(
        vertex_begin=v1,
        vertex_end=v2,
        flags=flags,
        line_type=line_type,
        sector_tag=tag,
        sidedef_right=right,
        sidedef_left=left,
    )


def _decode_sidedef(buf: bytes, index: int, offset: int) -> SideDef:
    xoff, yoff, upper, lower, middle, sector = struct.unpack(_SIDEDEF_FMT, buf)
    ctx = dict(lump=LUMP_SIDEDEFS, index=index, offset=offset)
    return SideDef(
        x_offset=xoff,
        y_offset=yoff,
        upper_texture=decode_texture_name(upper, **ctx),
        lower_texture=decode_texture_name(lower, **ctx),
        middle_texture=decode_texture_name(middle, **ctx),
        sector=sector,
    )


def _decode_sector(buf: bytes, index: int, offset: int) -> Sector:
    floor, ceiling, floor_pic, ceil_pic, light, special, tag = struct.unpack(_SECTOR_FMT, buf)
    ctx = dict(lump=LUMP_SECTORS, index=index, offset=offset)
    return Sector(
        floor_height=floor,
        ceiling_height=ceiling,
        floor_texture=decode_texture_name(floor_pic, **ctx),
        ceiling_texture=decode_texture_name(ceil_pic, **ctx),
        light_level=light,
        special=special,
        sector_tag=tag,
    )


def _decode_thing(buf: bytes, index: int, offset: int) -> Thing:
    x, y, angle, type_code, flags = struct.unpack(_THING_FMT, buf)
    return Thing(x=x, y=y, angle=angle, type_code=type_code, spawn_flags=flags)


VERTEX_DECODER = RecordDecoder(LUMP_VERTEXES, VERTEX_SIZE, _decode_vertex)
LINEDEF_DECODER = RecordDecoder(LUMP_LINEDEFS, LINEDEF_SIZE, _decode_linedef)
SIDEDEF_DECODER = RecordDecoder(LUMP_SIDEDEFS, SIDEDEF_SIZE, _decode_sidedef)
SECTOR_DECODER = RecordDecoder(LUMP_SECTORS, SECTOR_SIZE, _decode_sector)
THING_DECODER = RecordDecoder(LUMP_THINGS, THING_SIZE, _decode_thing)

DECODERS: dict[str, RecordDecoder] = {
    d.lump_name: d
    for d in (VERTEX_DECODER, LINEDEF_DECODER, SIDEDEF_DECODER, SECTOR_DECODER, THING_DECODER)
}


def decode_lump(stream: BinaryIO, lumps: Mapping[str, DirectoryEntry],
                lump_name: str, map_name: str = "") -> tuple:
    """Decode *lump_name* from a map's lump set; an absent lump gives ()."""
    entry = lumps.get(lump_name)
    if entry is None:
        log.debug("%s: no %s lump", map_name, lump_name)
        return ()
    decoder = DECODERS[lump_name]
    with perf.timer("decode_lump", lump=lump_name, map=map_name, size=entry.size):
        return decoder.decode(stream, entry)
