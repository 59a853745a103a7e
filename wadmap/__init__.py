"""
WAD map reader: decodes the directory and map lumps of a WAD container
and rebuilds each sector's boundary loops for rendering.
"""

from wadmap.archive import WAD
from wadmap.defs import (
    DirectoryEntry,
    LineDef,
    MapData,
    Sector,
    SideDef,
    Thing,
    Vertex,
    WadHeader,
)
from wadmap.errors import (
    FormatError,
    InvalidSignature,
    MalformedLump,
    MapNotFound,
    WadError,
    WadIOError,
)
from wadmap.maps import assemble_maps, group_map_lumps
from wadmap.records import RecordDecoder, decode_lump
from wadmap.sectors import (
    DegenerateSector,
    Edge,
    Loop,
    MapBounds,
    MapGeometry,
    SectorBoundary,
    stitch_loops,
)
from wadmap.things import THING_TYPES, thing_name
from wadmap.wad import read_directory, read_header

__all__ = [
    "WAD",
    "DirectoryEntry",
    "LineDef",
    "MapData",
    "Sector",
    "SideDef",
    "Thing",
    "Vertex",
    "WadHeader",
    "FormatError",
    "InvalidSignature",
    "MalformedLump",
    "MapNotFound",
    "WadError",
    "WadIOError",
    "assemble_maps",
    "group_map_lumps",
    "RecordDecoder",
    "decode_lump",
    "DegenerateSector",
    "Edge",
    "Loop",
    "MapBounds",
    "MapGeometry",
    "SectorBoundary",
    "stitch_loops",
    "THING_TYPES",
    "thing_name",
    "read_directory",
    "read_header",
]
