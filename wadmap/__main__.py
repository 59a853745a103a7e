"""Entry point for `python -m wadmap [wad_path] [command] [map]`.

Usage:
    python -m wadmap doom1.wad              # same as "info"
    python -m wadmap doom1.wad maps
    python -m wadmap doom1.wad sectors E1M1
    python -m wadmap doom1.wad sectors      # every map

The WAD path may be omitted when WADMAP_WAD is set (a .env file is read).
"""

import argparse
import sys

from dotenv import load_dotenv
from rich.markup import escape
from rich.table import Table

from wadmap.archive import WAD
from wadmap.config import console, load_settings, setup_logging
from wadmap.defs import MapData
from wadmap.errors import MapNotFound, WadError
from wadmap.perf import perf
from wadmap.sectors import MapGeometry

COMMANDS = ("info", "maps", "sectors")


def show_info(wad: WAD) -> None:
    console.print(f"{wad.wad_type} with {len(wad.directory)} lumps in its directory:")
    for d in wad.directory:
        if d.size > 0:
            console.print(f"- {d.name:<8}\t{d.size} bytes starting at {d.offset}", markup=False)
        else:
            console.print(f"- {d.name:<8}\tempty lump", markup=False)


def list_maps(wad: WAD) -> None:
    table = Table(title=f"{len(wad.maps)} maps")
    for col in ("map", "linedefs", "sectors", "things", "vertexes"):
        table.add_column(col, justify="left" if col == "map" else "right")
    for m in wad.maps:
        table.add_row(escape(m.name), str(len(m.linedefs)), str(len(m.sectors)),
                      str(len(m.things)), str(len(m.vertexes)))
    console.print(table)


def show_sectors(map_data: MapData) -> int:
    """Print the boundary report for one map. Returns the number of warnings."""
    geometry = MapGeometry.build(map_data)
    bounds = geometry.bounds
    boundaries = geometry.sector_boundaries()

    table = Table(title=f"{escape(map_data.name)}: {len(boundaries)} sectors, "
                        f"{bounds.width}x{bounds.height}")
    for col in ("sector", "loops", "open", "edges", "one-sided", "light"):
        table.add_column(col, justify="right")
    n_warnings = 0
    for b in boundaries:
        open_loops = sum(1 for loop in b.loops if not loop.closed)
        one_sided = sum(1 for e in b.edges if e.one_sided)
        table.add_row(str(b.sector_index), str(len(b.loops)), str(open_loops),
                      str(len(b.edges)), str(one_sided), str(b.light_level))
        n_warnings += len(b.warnings)
    console.print(table)

    for b in boundaries:
        for w in b.warnings:
            console.print(f"  warning: {w}", style="yellow", markup=False, soft_wrap=True)
    return n_warnings


def parse_args(argv=None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="wadmap", description="Inspect the maps in a WAD file")
    p.add_argument("args", nargs="*", metavar="ARG",
                   help="[wad_path] [info|maps|sectors] [map name]")
    p.add_argument("--perf", action="store_true", help="print and save decode timings")
    ns = p.parse_args(argv)

    rest = list(ns.args)
    ns.wad_path = None
    if rest and rest[0] not in COMMANDS:
        ns.wad_path = rest.pop(0)
    ns.command = rest.pop(0) if rest else "info"
    if ns.command not in COMMANDS:
        p.error(f"Sorry, I don't know how to {ns.command}.")
    ns.map_name = rest.pop(0) if rest else None
    if rest:
        p.error(f"unexpected arguments: {' '.join(rest)}")
    return ns


def main(argv=None) -> int:
    load_dotenv()
    settings = load_settings()
    setup_logging(settings.log_level)
    args = parse_args(argv)

    wad_path = args.wad_path or settings.wad_path
    if not wad_path:
        console.print("Error: no WAD file given (pass a path or set WADMAP_WAD)", markup=False)
        console.print("Usage: python -m wadmap [/path/to/doom.wad] [info|maps|sectors] [map]", markup=False)
        return 1

    perf.start()
    try:
        wad = WAD.open(wad_path)
        if args.command == "info":
            show_info(wad)
        elif args.command == "maps":
            list_maps(wad)
        elif args.map_name:
            perf.stage("sectors")
            show_sectors(wad.get_map(args.map_name))
        else:
            perf.stage("sectors")
            console.print("Dumping all maps...")
            for m in wad.maps:
                show_sectors(m)
    except MapNotFound as e:
        console.print(f"Error: {e}", style="red", markup=False, soft_wrap=True)
        return 1
    except WadError as e:
        console.print(f"Error: {wad_path}: {e}", style="red", markup=False, soft_wrap=True)
        return 1
    finally:
        perf.finish()

    if args.perf:
        perf.summary()
        path = perf.save(settings.perf_dir)
        console.print(f"  Perf log saved: {escape(path)} ({len(perf.events)} events)", soft_wrap=True)
    return 0


if __name__ == "__main__":
    sys.exit(main())
