"""Shared constants and data structures for WAD map decoding."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from wadmap.things import thing_name

# WAD signatures
IWAD = b"IWAD"
PWAD = b"PWAD"
WAD_SIGNATURES = (IWAD, PWAD)

# Fixed name field width (lump names, texture names)
NAME_SIZE = 8

# Placeholder texture name meaning "no texture"
NO_TEXTURE = "-"

# Lump names that may follow a map marker
LUMP_THINGS = "THINGS"
LUMP_LINEDEFS = "LINEDEFS"
LUMP_SIDEDEFS = "SIDEDEFS"
LUMP_VERTEXES = "VERTEXES"
LUMP_SECTORS = "SECTORS"

MAP_LUMP_NAMES = frozenset((
    "BLOCKMAP",
    LUMP_LINEDEFS,
    "NODES",
    "REJECT",
    "SCRIPTS",
    LUMP_SECTORS,
    "SEGS",
    LUMP_SIDEDEFS,
    "SSECTORS",
    LUMP_THINGS,
    LUMP_VERTEXES,
))

# Light levels are drawn as 0..255 grayscale
LIGHT_MIN = 0
LIGHT_MAX = 255


# ─── Container structures ───

@dataclass(frozen=True)
class WadHeader:
    wad_type: str  # "IWAD" or "PWAD"
    entry_count: int
    directory_offset: int


@dataclass(frozen=True)
class DirectoryEntry:
    name: str
    offset: int
    size: int
    index: int = -1  # position in the directory

    @property
    def is_marker(self) -> bool:
        """Zero-size entry with a real offset: a map marker (or other no-data label)."""
        return self.size == 0 and self.offset > 0


# ─── Map records ───

@dataclass(frozen=True)
class Vertex:
    x: int
    y: int


@dataclass(frozen=True)
class LineDef:
    vertex_begin: int
    vertex_end: int
    flags: int
    line_type: int
    sector_tag: int
    sidedef_right: int
    sidedef_left: int

    @property
    def one_sided(self) -> bool:
        return self.sidedef_right < 0 or self.sidedef_left < 0

    @property
    def two_sided(self) -> bool:
        return not self.one_sided

    def sides(self) -> tuple[int, ...]:
        """Side indices present on this line, right first."""
        return tuple(s for s in (self.sidedef_right, self.sidedef_left) if s >= 0)


@dataclass(frozen=True)
class SideDef:
    x_offset: int
    y_offset: int
    upper_texture: Optional[str]  # None = no texture
    lower_texture: Optional[str]
    middle_texture: Optional[str]
    sector: int


@dataclass(frozen=True)
class Sector:
    floor_height: int
    ceiling_height: int
    floor_texture: Optional[str]
    ceiling_texture: Optional[str]
    light_level: int
    special: int
    sector_tag: int

    @property
    def clamped_light(self) -> int:
        """Light level forced into the drawable 0..255 range."""
        return max(LIGHT_MIN, min(LIGHT_MAX, self.light_level))


@dataclass(frozen=True)
class Thing:
    x: int
    y: int
    angle: int
    type_code: int
    spawn_flags: int

    @property
    def type_name(self) -> Optional[str]:
        return thing_name(self.type_code)


@dataclass(frozen=True)
class MapData:
    """All decoded records for one map. Indices are only valid within it."""
    name: str
    linedefs: tuple[LineDef, ...] = field(default_factory=tuple)
    sidedefs: tuple[SideDef, ...] = field(default_factory=tuple)
    sectors: tuple[Sector, ...] = field(default_factory=tuple)
    things: tuple[Thing, ...] = field(default_factory=tuple)
    vertexes: tuple[Vertex, ...] = field(default_factory=tuple)
