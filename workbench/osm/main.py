"""Command line entry: read an OSM file, plan a route and render it."""

from __future__ import annotations

import sys
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import TextIO

from workbench.osm.render import Render
from workbench.osm.route_model import RouteModel
from workbench.osm.route_planner import RoutePlanner

_IMAGE_SIZE = 400


def read_file(path: str | Path) -> bytes | None:
    """Return the file's bytes, or None if it cannot be read or is empty."""
    try:
        data = Path(path).read_bytes()
    except OSError:
        return None
    return data or None


def read_coordinate(
    label: str,
    input_func: Callable[[], str] | None = None,
    output: TextIO | None = None,
) -> float:
    """Ask for a value in [0, 100] until a valid one is entered."""
    read = input_func if input_func is not None else input
    out = output if output is not None else sys.stdout
    print(f"Please type in {label} from 0-100 : ", file=out)
    while True:
        line = read()
        try:
            value = float(line.strip())
        except ValueError:
            value = None
        if value is not None and 0 <= value <= 100:
            return value
        out.write(f"Invalid entry. Enter a {label} from 0 to 100: ")
        out.flush()


def main(argv: Sequence[str] | None = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    osm_data_file = ""
    image_file = ""
    if args:
        it = iter(args)
        for arg in it:
            if arg == "-f":
                osm_data_file = next(it, osm_data_file)
            elif arg == "-o":
                image_file = next(it, image_file)
    else:
        print("Usage: [executable] [-f filename.osm] [-o image.png]")

    osm_data = b""
    if osm_data_file:
        print(f"Reading OpenStreetMap data from the following file: {osm_data_file}")
        data = read_file(osm_data_file)
        if data is None:
            print("Failed to read.")
        else:
            osm_data = data

    try:
        start_x = read_coordinate("start_x")
        start_y = read_coordinate("start_y")
        end_x = read_coordinate("end_x")
        end_y = read_coordinate("end_y")
    except EOFError:
        print("Input ended before all coordinates were given.", file=sys.stderr)
        return 1

    try:
        model = RouteModel(osm_data)
    except ValueError as err:
        print(err, file=sys.stderr)
        return 1

    planner = RoutePlanner(model, start_x, start_y, end_x, end_y)
    planner.a_star_search()
    print(f"The total distance is : {planner.distance:g}")

    image = Render(model).display(_IMAGE_SIZE, _IMAGE_SIZE)
    if image_file:
        image.save(image_file)
    else:
        image.show()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())