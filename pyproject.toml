[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "workbench"
version = "0.1.0"
description = "OpenStreetMap route planning with A* search and map rendering, a /proc system monitor, and a small cost calculator"
requires-python = ">=3.10"
dependencies = [
    "pillow",
]
keywords = [
    "openstreetmap",
    "osm",
    "a-star",
    "path-planning",
    "routing",
    "system-monitor",
    "procfs",
    "curses",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Environment :: Console :: Curses",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: GIS",
    "Topic :: System :: Monitoring",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
workbench-route = "workbench.osm.main:main"
workbench-sysmon = "workbench.sysmon.main:main"
workbench-overload = "workbench.overload:main"

[tool.hatch.build.targets.wheel]
packages = ["workbench"]

[tool.hatch.build.targets.sdist]
include = [
    "workbench",
    "tests",
]

[tool.pytest.ini_options]
addopts = "-ra"
