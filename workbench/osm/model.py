"""OpenStreetMap data model: nodes, ways and the map features built on them."""

from __future__ import annotations

import math
import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from enum import IntEnum

_FLOAT_PREFIX = re.compile(r"\s*[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")

_EARTH_RADIUS = 6378137.0
_DEG_TO_RAD = 2.0 * math.pi / 360.0


class RoadType(IntEnum):
    """Road categories, ordered so that sorting draws minor roads first."""

    INVALID = 0
    UNCLASSIFIED = 1
    SERVICE = 2
    RESIDENTIAL = 3
    TERTIARY = 4
    SECONDARY = 5
    PRIMARY = 6
    TRUNK = 7
    MOTORWAY = 8
    FOOTWAY = 9


class LanduseType(IntEnum):
    """Land use categories."""

    INVALID = 0
    COMMERCIAL = 1
    CONSTRUCTION = 2
    GRASS = 3
    FOREST = 4
    INDUSTRIAL = 5
    RAILWAY = 6
    RESIDENTIAL = 7


_ROAD_TYPES = {
    "motorway": RoadType.MOTORWAY,
    "trunk": RoadType.TRUNK,
    "primary": RoadType.PRIMARY,
    "secondary": RoadType.SECONDARY,
    "tertiary": RoadType.TERTIARY,
    "residential": RoadType.RESIDENTIAL,
    "living_street": RoadType.RESIDENTIAL,
    "service": RoadType.SERVICE,
    "unclassified": RoadType.UNCLASSIFIED,
    "footway": RoadType.FOOTWAY,
    "bridleway": RoadType.FOOTWAY,
    "steps": RoadType.FOOTWAY,
    "path": RoadType.FOOTWAY,
    "pedestrian": RoadType.FOOTWAY,
}

_LANDUSE_TYPES = {
    "commercial": LanduseType.COMMERCIAL,
    "construction": LanduseType.CONSTRUCTION,
    "grass": LanduseType.GRASS,
    "forest": LanduseType.FOREST,
    "industrial": LanduseType.INDUSTRIAL,
    "railway": LanduseType.RAILWAY,
    "residential": LanduseType.RESIDENTIAL,
}

_NATURAL_LEISURE = {"wood", "tree_row", "scrub", "grassland"}


def road_type_from_string(value: str) -> RoadType:
    """Map an OSM ``highway`` tag value to a road type."""
    return _ROAD_TYPES.get(value, RoadType.INVALID)


def landuse_type_from_string(value: str) -> LanduseType:
    """Map an OSM ``landuse`` tag value to a land use type."""
    return _LANDUSE_TYPES.get(value, LanduseType.INVALID)


@dataclass
class Node:
    x: float = 0.0
    y: float = 0.0


@dataclass
class Way:
    nodes: list[int] = field(default_factory=list)


@dataclass
class Road:
    way: int
    type: RoadType


@dataclass
class Railway:
    way: int


@dataclass
class Multipolygon:
    outer: list[int] = field(default_factory=list)
    inner: list[int] = field(default_factory=list)


@dataclass
class Building(Multipolygon):
    pass


@dataclass
class Leisure(Multipolygon):
    pass


@dataclass
class Water(Multipolygon):
    pass


@dataclass
class Landuse(Multipolygon):
    type: LanduseType = LanduseType.INVALID


def _atof(text: str | None) -> float:
    match = _FLOAT_PREFIX.match(text or "")
    return float(match.group()) if match else 0.0


def _lat_to_metres(lat: float) -> float:
    return math.log(math.tan(lat * _DEG_TO_RAD / 2 + math.pi / 4)) / 2 * _EARTH_RADIUS


def _lon_to_metres(lon: float) -> float:
    return lon * _DEG_TO_RAD / 2 * _EARTH_RADIUS


def _track_rec(open_ways: list[int], ways: list[Way], used: set[int], nodes: list[int]) -> bool:
    if not nodes:
        for i, way_num in enumerate(open_ways):
            if i in used:
                continue
            used.add(i)
            nodes.extend(ways[way_num].nodes)
            if _track_rec(open_ways, ways, used, nodes):
                return True
            nodes.clear()
            used.discard(i)
        return False

    head, tail = nodes[0], nodes[-1]
    if head == tail and len(nodes) > 1:
        return True
    for i, way_num in enumerate(open_ways):
        if i in used:
            continue
        way_nodes = ways[way_num].nodes
        if not way_nodes:
            continue
        if way_nodes[0] == tail or way_nodes[-1] == tail:
            used.add(i)
            length = len(nodes)
            nodes.extend(way_nodes if way_nodes[0] == tail else reversed(way_nodes))
            if _track_rec(open_ways, ways, used, nodes):
                return True
            del nodes[length:]
            used.discard(i)
    return False


def _track(open_ways: list[int], ways: list[Way]) -> list[int]:
    """Join open ways into one closed ring; consumed entries become -1."""
    used: set[int] = set()
    nodes: list[int] = []
    if _track_rec(open_ways, ways, used, nodes):
        for i in used:
            open_ways[i] = -1
    return nodes


class Model:
    """Map data loaded from an OSM XML document, with coordinates normalised."""

    def __init__(self, xml: bytes | str) -> None:
        self.nodes: list[Node] = []
        self.ways: list[Way] = []
        self.roads: list[Road] = []
        self.railways: list[Railway] = []
        self.buildings: list[Building] = []
        self.leisures: list[Leisure] = []
        self.waters: list[Water] = []
        self.landuses: list[Landuse] = []
        self.min_lat = 0.0
        self.max_lat = 0.0
        self.min_lon = 0.0
        self.max_lon = 0.0
        self.metric_scale = 1.0

        self._load(xml)
        self._adjust_coordinates()
        self.roads.sort(key=lambda road: road.type)

    def _load(self, xml: bytes | str) -> None:
        try:
            root = ET.fromstring(xml)
        except ET.ParseError as err:
            raise ValueError("failed to parse the xml file") from err

        bounds = root.find("bounds") if root.tag == "osm" else None
        if bounds is None:
            raise ValueError("map's bounds are not defined")
        self.min_lat = _atof(bounds.get("minlat"))
        self.max_lat = _atof(bounds.get("maxlat"))
        self.min_lon = _atof(bounds.get("minlon"))
        self.max_lon = _atof(bounds.get("maxlon"))

        node_ids: dict[str, int] = {}
        for element in root.findall("node"):
            node_ids[element.get("id", "")] = len(self.nodes)
            self.nodes.append(Node(x=_atof(element.get("lon")), y=_atof(element.get("lat"))))

        way_ids: dict[str, int] = {}
        for element in root.findall("way"):
            way_num = len(self.ways)
            way_ids[element.get("id", "")] = way_num
            way = Way()
            self.ways.append(way)
            for child in element:
                if child.tag == "nd":
                    ref = child.get("ref", "")
                    if ref in node_ids:
                        way.nodes.append(node_ids[ref])
                elif child.tag == "tag":
                    self._apply_way_tag(way_num, child.get("k", ""), child.get("v", ""))

        for element in root.findall("relation"):
            self._load_relation(element, way_ids)

    def _apply_way_tag(self, way_num: int, category: str, value: str) -> None:
        if category == "highway":
            road_type = road_type_from_string(value)
            if road_type != RoadType.INVALID:
                self.roads.append(Road(way=way_num, type=road_type))
        if category == "railway":
            self.railways.append(Railway(way=way_num))
        elif category == "building":
            self.buildings.append(Building(outer=[way_num]))
        elif (
            category == "leisure"
            or (category == "natural" and value in _NATURAL_LEISURE)
            or (category == "landcover" and value == "grass")
        ):
            self.leisures.append(Leisure(outer=[way_num]))
        elif category == "natural" and value == "water":
            self.waters.append(Water(outer=[way_num]))
        elif category == "landuse":
            landuse_type = landuse_type_from_string(value)
            if landuse_type != LanduseType.INVALID:
                self.landuses.append(Landuse(outer=[way_num], type=landuse_type))

    def _load_relation(self, element: ET.Element, way_ids: dict[str, int]) -> None:
        outer: list[int] = []
        inner: list[int] = []
        for child in element:
            if child.tag == "member":
                if child.get("type", "") != "way":
                    continue
                ref = child.get("ref", "")
                if ref not in way_ids:
                    continue
                (outer if child.get("role", "") == "outer" else inner).append(way_ids[ref])
            elif child.tag == "tag":
                category = child.get("k", "")
                value = child.get("v", "")
                if category == "building":
                    self.buildings.append(Building(outer=outer, inner=inner))
                    return
                if category == "natural" and value == "water":
                    water = Water(outer=outer, inner=inner)
                    self.waters.append(water)
                    self._build_rings(water)
                    return
                if category == "landuse":
                    landuse_type = landuse_type_from_string(value)
                    if landuse_type != LanduseType.INVALID:
                        landuse = Landuse(outer=outer, inner=inner, type=landuse_type)
                        self.landuses.append(landuse)
                        self._build_rings(landuse)
                    return

    def _adjust_coordinates(self) -> None:
        dx = _lon_to_metres(self.max_lon) - _lon_to_metres(self.min_lon)
        dy = _lat_to_metres(self.max_lat) - _lat_to_metres(self.min_lat)
        min_x = _lon_to_metres(self.min_lon)
        min_y = _lat_to_metres(self.min_lat)
        self.metric_scale = min(dx, dy)
        if self.metric_scale == 0:
            raise ValueError("map's bounds are degenerate")
        for node in self.nodes:
            node.x = (_lon_to_metres(node.x) - min_x) / self.metric_scale
            node.y = (_lat_to_metres(node.y) - min_y) / self.metric_scale

    def _build_rings(self, polygon: Multipolygon) -> None:
        polygon.outer = self._rings(polygon.outer)
        polygon.inner = self._rings(polygon.inner)

    def _rings(self, way_nums: list[int]) -> list[int]:
        closed: list[int] = []
        open_ways: list[int] = []
        for way_num in way_nums:
            nodes = self.ways[way_num].nodes
            is_closed = len(nodes) > 1 and nodes[0] == nodes[-1]
            (closed if is_closed else open_ways).append(way_num)

        while open_ways:
            new_nodes = _track(open_ways, self.ways)
            if not new_nodes:
                break
            open_ways = [way_num for way_num in open_ways if way_num >= 0]
            closed.append(len(self.ways))
            self.ways.append(Way(nodes=new_nodes))
        return closed