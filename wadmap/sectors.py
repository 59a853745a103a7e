"""
Sector boundary reconstruction.

A sector has no polygon of its own in the WAD: it is whatever region the
LineDefs referencing it (through a SideDef) enclose. This module collects
those LineDefs as segments and stitches them end to end into loops. A
sector with a hole (pillar, inner room) comes out as several loops.

Output coordinates are flipped on the y axis using the map's global
extent, so y grows downward as it does on a canvas. MapBounds.to_pixels
then moves the map's top-left corner to (0, 0).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Sequence

from wadmap.defs import LUMP_LINEDEFS, LUMP_SIDEDEFS, MapData, Sector, Vertex
from wadmap.errors import FormatError
from wadmap.perf import perf

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Edge:
    """One LineDef of a sector, in output coordinates."""
    start: Vertex
    end: Vertex
    one_sided: bool
    linedef: int  # index into MapData.linedefs

    def other(self, v: Vertex) -> Vertex:
        """The endpoint opposite *v*."""
        return self.start if v == self.end else self.end

    def touches(self, v: Vertex) -> bool:
        return self.start == v or self.end == v


@dataclass(frozen=True)
class Loop:
    # Closed loops do not repeat their first point at the end.
    points: tuple[Vertex, ...]
    closed: bool


@dataclass(frozen=True)
class DegenerateSector:
    """A loop that never got back to where it started."""
    map_name: str
    sector: int
    loop_index: int
    open_points: int
    remaining_segments: int

    def __str__(self) -> str:
        return (
            f"{self.map_name} sector {self.sector}: loop {self.loop_index} is open "
            f"({self.open_points} points, {self.remaining_segments} segments left to stitch)"
        )


@dataclass(frozen=True)
class SectorBoundary:
    sector_index: int
    sector: Sector
    loops: tuple[Loop, ...]
    edges: tuple[Edge, ...]
    light_level: int  # clamped to 0..255
    warnings: tuple[DegenerateSector, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class MapBounds:
    min_x: int
    max_x: int
    min_y: int
    max_y: int

    @classmethod
    def from_vertices(cls, vertices: Iterable[Vertex]) -> "MapBounds":
        xs = []
        ys = []
        for v in vertices:
            xs.append(v.x)
            ys.append(v.y)
        if not xs:
            return cls(0, 0, 0, 0)
        return cls(min(xs), max(xs), min(ys), max(ys))

    @property
    def width(self) -> int:
        return self.max_x - self.min_x

    @property
    def height(self) -> int:
        return self.max_y - self.min_y

    @property
    def offset_x(self) -> int:
        return -self.min_x

    @property
    def offset_y(self) -> int:
        return -self.min_y

    def flip(self, v: Vertex) -> Vertex:
        return Vertex(v.x, self.max_y - (v.y - self.min_y))

    def to_pixels(self, v: Vertex) -> Vertex:
        """Shift an already flipped vertex into the 0..width, 0..height box."""
        return Vertex(v.x + self.offset_x, v.y + self.offset_y)


# ---------------------------------------------------------------------------
# Stitching
# ---------------------------------------------------------------------------

def _stitch(edges: Sequence[Edge]) -> list[tuple[Loop, int]]:
    """
    Chain *edges* into loops. Returns (loop, segments still unused when the
    loop ended) pairs.

    Each loop starts from the first unused edge and repeatedly takes the
    first remaining edge (in list order) sharing the current endpoint,
    whatever its stored direction. When nothing matches the loop ends,
    closed or not.
    """
    pending = list(edges)
    result = []
    while pending:
        first = pending.pop(0)
        chain = [first.start, first.end]
        current = first.end

        while True:
            for i, edge in enumerate(pending):
                if edge.touches(current):
                    break
            else:
                break
            del pending[i]
            current = edge.other(current)
            chain.append(current)

        closed = len(chain) > 2 and chain[-1] == chain[0]
        points = tuple(chain[:-1]) if closed else tuple(chain)
        result.append((Loop(points=points, closed=closed), len(pending)))
    return result


def stitch_loops(edges: Sequence[Edge]) -> list[Loop]:
    """Chain *edges* into loops; order-sensitive and deterministic."""
    return [loop for loop, _ in _stitch(edges)]


# ---------------------------------------------------------------------------
# Per-map geometry
# ---------------------------------------------------------------------------

class MapGeometry:
    """
    Validated, read-only view of one map for boundary building.

    build() checks every index a LineDef depends on, so the per-sector
    work never has to.
    """

    def __init__(self, map_data: MapData, bounds: MapBounds,
                 members: dict[int, list[int]]) -> None:
        self.map = map_data
        self.bounds = bounds
        self._members = members
        self._boundaries: list[SectorBoundary] | None = None

    @classmethod
    def build(cls, map_data: MapData) -> "MapGeometry":
        cls._validate(map_data)

        endpoints = []
        for line in map_data.linedefs:
            endpoints.append(map_data.vertexes[line.vertex_begin])
            endpoints.append(map_data.vertexes[line.vertex_end])
        bounds = MapBounds.from_vertices(endpoints)

        members: dict[int, list[int]] = {}
        for i, line in enumerate(map_data.linedefs):
            owners = []
            for side in line.sides():
                sector = map_data.sidedefs[side].sector
                if sector not in owners:
                    owners.append(sector)
            for sector in owners:
                members.setdefault(sector, []).append(i)

        return cls(map_data, bounds, members)

    @staticmethod
    def _validate(map_data: MapData) -> None:
        n_vertexes = len(map_data.vertexes)
        n_sides = len(map_data.sidedefs)
        n_sectors = len(map_data.sectors)

        for i, line in enumerate(map_data.linedefs):
            for field_name, v in (("vertex_begin", line.vertex_begin),
                                  ("vertex_end", line.vertex_end)):
                if not 0 <= v < n_vertexes:
                    raise FormatError(
                        f"{map_data.name}: LineDef {i} {field_name} {v} is out of range "
                        f"({n_vertexes} vertexes)",
                        lump=LUMP_LINEDEFS, index=i,
                    )
            for field_name, s in (("sidedef_right", line.sidedef_right),
                                  ("sidedef_left", line.sidedef_left)):
                if s < 0:
                    continue
                if s >= n_sides:
                    raise FormatError(
                        f"{map_data.name}: LineDef {i} {field_name} {s} is out of range "
                        f"({n_sides} sidedefs)",
                        lump=LUMP_LINEDEFS, index=i,
                    )
                sector = map_data.sidedefs[s].sector
                if sector >= n_sectors:
                    raise FormatError(
                        f"{map_data.name}: SideDef {s} (LineDef {i}) sector {sector} is "
                        f"out of range ({n_sectors} sectors)",
                        lump=LUMP_SIDEDEFS, index=s,
                    )

    def members(self, sector_index: int) -> list[int]:
        """LineDef indices that have a side in *sector_index*, in declaration order."""
        return list(self._members.get(sector_index, ()))

    def sector_edges(self, sector_index: int) -> list[Edge]:
        lines = self.map.linedefs
        verts = self.map.vertexes
        edges = []
        for i in self._members.get(sector_index, ()):
            line = lines[i]
            edges.append(Edge(
                start=self.bounds.flip(verts[line.vertex_begin]),
                end=self.bounds.flip(verts[line.vertex_end]),
                one_sided=line.one_sided,
                linedef=i,
            ))
        return edges

    def sector_boundary(self, sector_index: int) -> SectorBoundary:
        if not 0 <= sector_index < len(self.map.sectors):
            raise IndexError(
                f"{self.map.name}: sector {sector_index} out of range "
                f"({len(self.map.sectors)} sectors)"
            )
        sector = self.map.sectors[sector_index]
        edges = self.sector_edges(sector_index)

        loops = []
        warnings = []
        for loop_index, (loop, remaining) in enumerate(_stitch(edges)):
            loops.append(loop)
            if not loop.closed:
                warning = DegenerateSector(
                    map_name=self.map.name,
                    sector=sector_index,
                    loop_index=loop_index,
                    open_points=len(loop.points),
                    remaining_segments=remaining,
                )
                log.warning("%s", warning)
                warnings.append(warning)

        return SectorBoundary(
            sector_index=sector_index,
            sector=sector,
            loops=tuple(loops),
            edges=tuple(edges),
            light_level=sector.clamped_light,
            warnings=tuple(warnings),
        )

    def sector_boundaries(self) -> list[SectorBoundary]:
        """
        Boundaries for every sector, in sector index order.

        Built once per MapGeometry; degenerate loops are logged on that first
        build only.
        """
        if self._boundaries is None:
            with perf.timer("sector_boundaries", map=self.map.name, sectors=len(self.map.sectors)):
                self._boundaries = [self.sector_boundary(i) for i in range(len(self.map.sectors))]
        return list(self._boundaries)

    def warnings(self) -> list[DegenerateSector]:
        out = []
        for boundary in self.sector_boundaries():
            out.extend(boundary.warnings)
        return out
