import logging

import pytest

from conftest import linedefs_lump, sectors_lump, sidedefs_lump, things_lump, vertexes_lump
from wadmap.archive import WAD
from wadmap.defs import DirectoryEntry
from wadmap.errors import MalformedLump, MapNotFound
from wadmap.maps import group_map_lumps


def _dir(*triples):
    """(name, offset, size) triples -> directory entries."""
    return [DirectoryEntry(name=n, offset=o, size=s, index=i) for i, (n, o, s) in enumerate(triples)]


def test_run_ends_at_first_unrecognized_entry():
    directory = _dir(
        ("E1M1", 12, 0),
        ("THINGS", 12, 10),
        ("LINEDEFS", 22, 14),
        ("PLAYPAL", 36, 768),
        ("VERTEXES", 804, 4),
    )
    (group,) = group_map_lumps(directory)
    assert group.name == "E1M1"
    assert sorted(group.lumps) == ["LINEDEFS", "THINGS"]


def test_next_marker_ends_run_and_starts_new_map():
    directory = _dir(
        ("E1M1", 12, 0),
        ("THINGS", 12, 10),
        ("E1M2", 22, 0),
        ("SECTORS", 22, 26),
    )
    groups = group_map_lumps(directory)
    assert [g.name for g in groups] == ["E1M1", "E1M2"]
    assert list(groups[1].lumps) == ["SECTORS"]


def test_empty_lump_inside_run_is_not_a_marker():
    directory = _dir(
        ("MAP01", 12, 0),
        ("VERTEXES", 12, 4),
        ("REJECT", 16, 0),
        ("SCRIPTS", 16, 0),
        ("THINGS", 16, 10),
    )
    groups = group_map_lumps(directory)
    assert [g.name for g in groups] == ["MAP01"]
    assert set(groups[0].lumps) == {"VERTEXES", "REJECT", "SCRIPTS", "THINGS"}


def test_zero_offset_entry_is_not_a_marker():
    directory = _dir(("F_START", 0, 0), ("THINGS", 12, 10))
    assert group_map_lumps(directory) == []


def test_marker_at_end_of_directory():
    (group,) = group_map_lumps(_dir(("MAP07", 100, 0)))
    assert group.name == "MAP07"
    assert group.lumps == {}


def test_duplicate_lump_in_run_keeps_later(caplog):
    directory = _dir(("E1M1", 12, 0), ("THINGS", 12, 10), ("THINGS", 22, 20))
    with caplog.at_level(logging.WARNING, logger="wadmap"):
        (group,) = group_map_lumps(directory)
    assert group.lumps["THINGS"].index == 2
    assert "duplicate THINGS" in caplog.text


def test_maps_are_sorted_and_decoded(wad_stream):
    stream = wad_stream([
        ("MAP02", None),
        ("THINGS", things_lump([(0, 0, 0, 1, 7)])),
        ("MAP01", None),
        ("VERTEXES", vertexes_lump([(0, 0), (64, 0)])),
        ("LINEDEFS", linedefs_lump([(0, 1, 0, -1)])),
        ("SIDEDEFS", sidedefs_lump([0])),
        ("SECTORS", sectors_lump([200])),
        ("SEGS", b"\x00" * 12),
        ("PLAYPAL", b"\x00" * 3),
        ("E1M1", None),
    ])
    wad = WAD.from_stream(stream)
    assert wad.map_names() == ["E1M1", "MAP01", "MAP02"]

    map01 = wad.get_map("MAP01")
    assert len(map01.vertexes) == 2
    assert len(map01.linedefs) == 1
    assert map01.sidedefs[0].middle_texture == "STARTAN3"
    assert map01.sectors[0].light_level == 200
    assert map01.things == ()

    map02 = wad.get_map("MAP02")
    assert len(map02.things) == 1
    assert map02.vertexes == () and map02.linedefs == ()

    e1m1 = wad.get_map("E1M1")
    assert (e1m1.linedefs, e1m1.sidedefs, e1m1.sectors, e1m1.things, e1m1.vertexes) == ((),) * 5


def test_repeated_map_name_later_run_wins(wad_stream):
    stream = wad_stream([
        ("MAP01", None),
        ("THINGS", things_lump([(0, 0, 0, 1, 7)])),
        ("MAP01", None),
        ("THINGS", things_lump([(0, 0, 0, 2, 7), (0, 0, 0, 3, 7)])),
    ])
    wad = WAD.from_stream(stream)
    assert wad.map_names() == ["MAP01"]
    assert [t.type_code for t in wad.get_map("MAP01").things] == [2, 3]


def test_malformed_lump_aborts_decode(wad_stream):
    stream = wad_stream([("E1M1", None), ("LINEDEFS", b"\x00" * 15)])
    with pytest.raises(MalformedLump) as exc:
        WAD.from_stream(stream)
    assert exc.value.lump == "LINEDEFS"


def test_get_map_not_found(wad_stream):
    wad = WAD.from_stream(wad_stream([("E1M1", None)]))
    with pytest.raises(MapNotFound) as exc:
        wad.get_map("E1M9")
    assert exc.value.name == "E1M9"
    assert "E1M1" in str(exc.value)
    assert isinstance(exc.value, KeyError)
