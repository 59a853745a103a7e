"""
Map assembly: group directory entries into per-map lump sets and decode them.

A map is a zero-size marker entry (e.g. "E1M1", "MAP01") followed by a
contiguous run of entries whose names are in MAP_LUMP_NAMES. The first
entry outside that set ends the run.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import BinaryIO, Sequence

from wadmap.defs import (
    LUMP_LINEDEFS, LUMP_SECTORS, LUMP_SIDEDEFS, LUMP_THINGS, LUMP_VERTEXES,
    MAP_LUMP_NAMES, DirectoryEntry, MapData,
)
from wadmap.records import decode_lump

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class MapLumps:
    """A map marker and the lumps found in the run that follows it."""
    name: str
    marker: DirectoryEntry
    lumps: dict[str, DirectoryEntry]


def group_map_lumps(directory: Sequence[DirectoryEntry]) -> list[MapLumps]:
    """
    Scan the directory with an explicit cursor and collect each map's lump run.

    Entries consumed into a run are never re-examined as markers. The entry
    that ends a run is left for the outer loop, so it can start the next map.
    Results are in directory order.
    """
    groups: list[MapLumps] = []
    i = 0
    n = len(directory)
    while i < n:
        entry = directory[i]
        i += 1
        if not entry.is_marker:
            continue

        lumps: dict[str, DirectoryEntry] = {}
        while i < n and directory[i].name in MAP_LUMP_NAMES:
            lump = directory[i]
            if lump.name in lumps:
                log.warning("%s: duplicate %s lump at entry %d replaces entry %d",
                            entry.name, lump.name, lump.index, lumps[lump.name].index)
            lumps[lump.name] = lump
            i += 1

        groups.append(MapLumps(name=entry.name, marker=entry, lumps=lumps))
    return groups


def decode_map(stream: BinaryIO, group: MapLumps) -> MapData:
    """Decode the five geometry/entity lumps of one map."""
    name = group.name
    return MapData(
        name=name,
        linedefs=decode_lump(stream, group.lumps, LUMP_LINEDEFS, name),
        sidedefs=decode_lump(stream, group.lumps, LUMP_SIDEDEFS, name),
        sectors=decode_lump(stream, group.lumps, LUMP_SECTORS, name),
        things=decode_lump(stream, group.lumps, LUMP_THINGS, name),
        vertexes=decode_lump(stream, group.lumps, LUMP_VERTEXES, name),
    )


def assemble_maps(stream: BinaryIO, directory: Sequence[DirectoryEntry]) -> tuple[MapData, ...]:
    """Decode every map in *directory*, sorted by name."""
    by_name: dict[str, MapLumps] = {}
    for group in group_map_lumps(directory):
        if group.name in by_name:
            log.warning("map %s appears again at entry %d; the later run wins",
                        group.name, group.marker.index)
        by_name[group.name] = group

    maps = [decode_map(stream, group) for group in by_name.values()]
    maps.sort(key=lambda m: m.name)
    return tuple(maps)
