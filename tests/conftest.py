import io
import logging
import struct

import pytest

from wadmap.defs import LineDef, MapData, Sector, SideDef, Vertex


def pack_name(name) -> bytes:
    raw = name if isinstance(name, bytes) else name.encode("utf-8")
    return struct.pack("8s", raw)


def build_wad(entries, signature=b"PWAD") -> bytes:
    """
    Lay out a WAD in memory.

    *entries* is a list of (name, payload) pairs; a payload of None or b""
    becomes a zero-size entry (a map marker when it sits at a positive offset).
    Lump data starts right after the header; the directory goes last.
    """
    data = bytearray()
    directory = []
    for name, payload in entries:
        payload = payload or b""
        directory.append((12 + len(data), len(payload), name))
        data += payload
    dir_offset = 12 + len(data)
    out = bytearray(struct.pack("<4sii", signature, len(directory), dir_offset))
    out += data
    for offset, size, name in directory:
        out += struct.pack("<ii", offset, size) + pack_name(name)
    return bytes(out)


def vertexes_lump(points) -> bytes:
    return b"".join(struct.pack("<hh", x, y) for x, y in points)


def linedefs_lump(lines) -> bytes:
    """Each line is (v1, v2, right, left); flags/type/tag are zero."""
    return b"".join(struct.pack("<7h", v1, v2, 0, 0, 0, right, left)
                    for v1, v2, right, left in lines)


def sidedefs_lump(sectors, upper="-", lower="-", middle="STARTAN3") -> bytes:
    return b"".join(
        struct.pack("<hh", 0, 0) + pack_name(upper) + pack_name(lower)
        + pack_name(middle) + struct.pack("<H", sector)
        for sector in sectors
    )


def sectors_lump(light_levels) -> bytes:
    return b"".join(
        struct.pack("<hh", 0, 128) + pack_name("FLOOR4_8") + pack_name("CEIL3_5")
        + struct.pack("<hHH", light, 0, 0)
        for light in light_levels
    )


def things_lump(things) -> bytes:
    return b"".join(struct.pack("<5h", *t) for t in things)


def make_map(name, points, lines, side_sectors, lights=None) -> MapData:
    """MapData built directly; *lines* are (v1, v2, right, left)."""
    n_sectors = max(side_sectors, default=-1) + 1
    lights = lights if lights is not None else [160] * n_sectors
    return MapData(
        name=name,
        vertexes=tuple(Vertex(x, y) for x, y in points),
        linedefs=tuple(LineDef(v1, v2, 0, 0, 0, r, l) for v1, v2, r, l in lines),
        sidedefs=tuple(SideDef(0, 0, None, None, None, s) for s in side_sectors),
        sectors=tuple(Sector(0, 128, "FLOOR4_8", "CEIL3_5", light, 0, 0) for light in lights),
    )


@pytest.fixture
def wad_stream():
    def _make(entries, signature=b"PWAD"):
        return io.BytesIO(build_wad(entries, signature))
    return _make


@pytest.fixture
def square_map():
    # one sector, four one-sided walls, counter-clockwise
    return make_map(
        "E1M1",
        points=[(0, 0), (64, 0), (64, 64), (0, 64)],
        lines=[(0, 1, 0, -1), (1, 2, 0, -1), (2, 3, 0, -1), (3, 0, 0, -1)],
        side_sectors=[0],
    )


@pytest.fixture
def pillar_map():
    # sector 0 is a 128x128 room, sector 1 a pillar in its middle
    return make_map(
        "E1M2",
        points=[(0, 0), (128, 0), (128, 128), (0, 128),
                (32, 32), (96, 32), (96, 96), (32, 96)],
        lines=[
            (0, 1, 0, -1), (1, 2, 0, -1), (2, 3, 0, -1), (3, 0, 0, -1),
            (4, 5, 1, 2), (5, 6, 1, 2), (6, 7, 1, 2), (7, 4, 1, 2),
        ],
        side_sectors=[0, 1, 0],
        lights=[192, 128],
    )


@pytest.fixture(autouse=True)
def _reset_wadmap_logger():
    yield
    log = logging.getLogger("wadmap")
    for h in list(log.handlers):
        log.removeHandler(h)
    log.propagate = True
    log.setLevel(logging.NOTSET)
