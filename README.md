# workbench

A small collection of tools:

- **`workbench.osm`**: loads an OpenStreetMap (`.osm`) XML extract, builds a
  road graph from it, finds a route between two points with A* search and
  renders the map with the route on top into an image.
- **`workbench.sysmon`**: a terminal system monitor for Linux that reads
  `/proc`, `/etc/passwd` and `/etc/os-release` to show CPU, memory, uptime and
  a paged process list.
- **`workbench.overload`**: a tiny demo of functions with default arguments
  (a cost calculator and a greeting).

## Installation

```
pip install .
```

Rendering uses Pillow, which is installed as a dependency. The system monitor
uses the standard library's `curses` module.

To run the test suite:

```
pip install ".[test]"
pytest
```

## Route planning

```
workbench-route -f map.osm -o route.png
```

Options:

- `-f FILE`: the OpenStreetMap XML file to read.
- `-o FILE`: where to save the rendered 400×400 image. Without it the image is
  handed to Pillow's `Image.show()`, which opens it in the system's image viewer.

Run without arguments, the command prints a usage line and carries on. It then
asks on standard input for `start_x`, `start_y`, `end_x` and `end_y`, each a
value from 0 to 100 (a percentage of the map's extent), asking again after an
invalid entry. It runs the A* search, prints
`The total distance is : <metres>` and renders the map. If the file cannot be
parsed or has no `<bounds>` element, the error is printed and the exit status
is 1.

From Python:

```python
from workbench.osm.main import read_file
from workbench.osm.render import Render
from workbench.osm.route_model import RouteModel
from workbench.osm.route_planner import RoutePlanner

data = read_file("map.osm")          # bytes, or None if unreadable or empty
model = RouteModel(data)

planner = RoutePlanner(model, 10, 10, 90, 90)
planner.a_star_search()
print(planner.distance)              # metres
print(len(model.path))               # nodes from the end back to the start

Render(model).display(800, 800).save("route.png")
```

- `workbench.osm.model.Model(xml)` parses the map. Its `nodes` are projected
  into unit coordinates (`metric_scale` metres per unit); it also has `ways`,
  `roads` (each with a `RoadType`, sorted by type), `railways`, `buildings`,
  `leisures`, `waters` and `landuses` (each with a `LanduseType`).
  Multipolygon relations for water and land use have their open ways joined
  into closed rings. Malformed XML or a missing `<bounds>` raises `ValueError`.
  `road_type_from_string` and `landuse_type_from_string` map tag values to
  these types.
- `workbench.osm.route_model.RouteModel` adds `snodes` (`RouteNode` objects
  with `g_value`, `h_value`, `visited`, `parent` and `neighbors`),
  `node_to_road` (footways left out), an initially empty `path`, and
  `find_closest_node(x, y)`, which returns the road node nearest to a point in
  unit coordinates. `RouteNode.distance(other)` is the Euclidean distance and
  `RouteNode.find_neighbors()` adds the nearest unvisited node of each road
  through the node.
- `workbench.osm.route_planner.RoutePlanner(model, start_x, start_y, end_x, end_y)`
  takes its points in percent. `a_star_search()` stores the found path in
  `model.path` and its length in metres in `distance`.
- `workbench.osm.render.Render(model).display(width, height)` returns a new
  RGB `PIL.Image.Image` with land use, leisure, water, railways, roads,
  buildings, the path and green/red start and end markers.

## System monitor

```
workbench-sysmon
```

Options:

- `--proc-root DIR` (default `/proc`) and `--etc-root DIR` (default `/etc`):
  the trees to read from.
- `--interval SECONDS` (default 1): time between refreshes.
- `--once`: print a single snapshot to standard output instead of starting the
  full-screen display.

The display shows the operating system name, kernel version, overall and
per-core CPU usage as progress bars, memory usage, total and running process
counts, uptime and a list of processes (PID, user, memory, CPU, uptime,
command), ten per page, moving to the next page on each refresh. Press
Ctrl+C to quit. Linux only.

The building blocks can be used on their own:

```python
from workbench.sysmon.parser import ProcessParser
from workbench.sysmon.process import ProcessContainer
from workbench.sysmon.sysinfo import SysInfo

parser = ProcessParser("/proc", "/etc")
print(parser.os_name(), parser.kernel_version(), parser.number_of_cores())

info = SysInfo(parser)
info.update()
for line in info.cores_stats():
    print(line)

for page in ProcessContainer(parser).pages():
    print("\n".join(page))
```

- `ProcessParser` reads figures such as `pid_list()`, `cmd(pid)`,
  `vm_size(pid)`, `cpu_percent(pid)`, `proc_uptime(pid)`, `proc_user(pid)`,
  `sys_uptime()`, `sys_cpu_values(core)`, `cpu_stats(values1, values2)`,
  `sys_ram_percent()`, `total_threads()`, `total_processes()`,
  `running_processes()` and `pid_exists(pid)`. A file that cannot be opened
  raises `ProcessLookupError`.
- `Process(pid, parser).describe()` returns one display row, or `""` if the
  process has gone. `ProcessContainer` holds all processes; `refresh()`,
  `render()` and `pages()` reload, join and page them.
- `SysInfo` keeps the previous CPU samples so that `update()` and
  `update_cores()` can compute usage between refreshes.
- `workbench.sysmon.main` provides `system_lines(sysinfo)` and
  `process_lines(rows)`, the text of the two windows.
- `workbench.sysmon.util` has `convert_to_time(seconds)` (formats as `h:m:s`),
  `progress_bar(percent)` (a 50-cell bar, one bar per 2%), `open_stream(path)`
  and the `CPUState` field positions of a `/proc/stat` cpu line.

## Cost calculator

```
workbench-overload
```

Prints three costs from `calc_cost(base_cost, tax_rate, shipping_charge)`
(defaults: 100, 0.06 and 3.50) and two greetings built by
`greeting(name, prefix, suffix)` (the suffix defaults to a space).

## What it does not do

- The route command does not open an interactive map window; it produces a
  single still image, saved with `-o` or passed to the system's image viewer.
- The system monitor takes no keyboard commands: no sorting, filtering or
  killing of processes. It only works where `/proc` and `curses` are
  available.