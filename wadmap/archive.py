"""The WAD facade: header, directory and decoded maps from one pass over a file."""

from __future__ import annotations

import logging
import os
from typing import BinaryIO, Union

from wadmap.defs import DirectoryEntry, MapData
from wadmap.errors import MapNotFound, WadIOError
from wadmap.maps import assemble_maps
from wadmap.perf import perf
from wadmap.wad import read_directory, read_header

log = logging.getLogger(__name__)


class WAD:
    """
    A decoded WAD container.

    Use WAD.open(path) for files on disk or WAD.from_stream(f) for any
    seekable binary stream. Everything is decoded up front; the stream is
    not kept.
    """

    def __init__(self, wad_type: str, directory: tuple[DirectoryEntry, ...],
                 maps: tuple[MapData, ...], path: str | None = None) -> None:
        self.wad_type = wad_type
        self.directory = directory
        self.maps = maps
        self.path = path

    @classmethod
    def open(cls, path: Union[str, os.PathLike]) -> "WAD":
        try:
            f = open(path, "rb")
        except OSError as e:
            raise WadIOError(f"Failed to open {os.fspath(path)}: {e}") from e
        with f:
            return cls.from_stream(f, path=os.fspath(path))

    @classmethod
    def from_stream(cls, stream: BinaryIO, path: str | None = None) -> "WAD":
        perf.stage("header")
        with perf.timer("read_header"):
            header = read_header(stream)

        perf.stage("directory")
        with perf.timer("read_directory", entries=header.entry_count):
            directory = read_directory(stream, header)

        perf.stage("maps")
        maps = assemble_maps(stream, directory)
        log.info("%s: %d lumps, %d maps", path or header.wad_type, len(directory), len(maps))
        return cls(header.wad_type, directory, maps, path=path)

    def __repr__(self) -> str:
        return f"WAD({self.wad_type}, {len(self.directory)} lumps, {len(self.maps)} maps)"

    def map_names(self) -> list[str]:
        return [m.name for m in self.maps]

    def get_map(self, name: str) -> MapData:
        """Return the map called *name*, or raise MapNotFound."""
        for m in self.maps:
            if m.name == name:
                return m
        raise MapNotFound(name, tuple(self.map_names()))
