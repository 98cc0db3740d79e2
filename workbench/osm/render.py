"""Raster rendering of a route model and the path found on it."""

from __future__ import annotations

import math
from collections.abc import Iterator, Sequence
from dataclasses import dataclass

from PIL import Image, ImageChops, ImageDraw

from workbench.osm.model import LanduseType, Multipolygon, RoadType, Way

Color = tuple[int, int, int]
Point = tuple[float, float]

BACKGROUND: Color = (238, 235, 227)
BUILDING_FILL: Color = (208, 197, 190)
BUILDING_OUTLINE: Color = (181, 167, 154)
LEISURE_FILL: Color = (189, 252, 193)
LEISURE_OUTLINE: Color = (160, 248, 162)
WATER_FILL: Color = (155, 201, 215)
RAILWAY_STROKE: Color = (93, 93, 93)
RAILWAY_DASH: Color = (255, 255, 255)
RAILWAY_DASHES: tuple[float, ...] = (3.0, 3.0)
RAILWAY_OUTER_WIDTH = 3.0
RAILWAY_INNER_WIDTH = 2.0
PATH_COLOR: Color = (255, 165, 0)
PATH_WIDTH = 5.0
START_COLOR: Color = (0, 128, 0)
END_COLOR: Color = (255, 0, 0)
MARKER_SIZE = 0.01
OUTLINE_WIDTH = 1.0

_GREY: Color = (128, 128, 128)

_DRAWN_ROADS = (
    RoadType.MOTORWAY,
    RoadType.TRUNK,
    RoadType.PRIMARY,
    RoadType.SECONDARY,
    RoadType.TERTIARY,
    RoadType.RESIDENTIAL,
    RoadType.SERVICE,
    RoadType.UNCLASSIFIED,
    RoadType.FOOTWAY,
)

_ROAD_WIDTHS = {
    RoadType.MOTORWAY: 6.0,
    RoadType.TRUNK: 6.0,
    RoadType.PRIMARY: 5.0,
    RoadType.SECONDARY: 5.0,
    RoadType.TERTIARY: 4.0,
    RoadType.RESIDENTIAL: 2.5,
    RoadType.UNCLASSIFIED: 2.5,
    RoadType.SERVICE: 1.0,
    RoadType.FOOTWAY: 0.0,
}

_ROAD_COLORS: dict[RoadType, Color] = {
    RoadType.MOTORWAY: (226, 122, 143),
    RoadType.TRUNK: (245, 161, 136),
    RoadType.PRIMARY: (249, 207, 144),
    RoadType.SECONDARY: (244, 251, 173),
    RoadType.TERTIARY: (244, 251, 173),
    RoadType.RESIDENTIAL: (254, 254, 254),
    RoadType.SERVICE: (254, 254, 254),
    RoadType.FOOTWAY: (241, 106, 96),
    RoadType.UNCLASSIFIED: (254, 254, 254),
}

_LANDUSE_COLORS: dict[LanduseType, Color] = {
    LanduseType.COMMERCIAL: (233, 195, 196),
    LanduseType.CONSTRUCTION: (187, 188, 165),
    LanduseType.GRASS: (197, 236, 148),
    LanduseType.FOREST: (158, 201, 141),
    LanduseType.INDUSTRIAL: (223, 197, 220),
    LanduseType.RAILWAY: (223, 197, 220),
    LanduseType.RESIDENTIAL: (209, 209, 209),
}


@dataclass(frozen=True)
class RoadRep:
    """How one road type is stroked."""

    color: Color
    metric_width: float
    dashes: tuple[float, ...]


def _road_rep(road_type: RoadType) -> RoadRep:
    dashes = (1.0, 2.0) if road_type == RoadType.FOOTWAY else ()
    return RoadRep(
        color=_ROAD_COLORS.get(road_type, _GREY),
        metric_width=_ROAD_WIDTHS.get(road_type, 1.0),
        dashes=dashes,
    )


def _pixel_width(width: float) -> int:
    return max(1, int(round(width)))


def _dash_runs(points: Sequence[Point], pattern: Sequence[float]) -> Iterator[list[Point]]:
    """Split a polyline into the visible pieces of a dash pattern."""
    if len(points) < 2:
        return
    index = 0
    remaining = pattern[0]
    on = True
    current: list[Point] = [points[0]]
    for (x0, y0), (x1, y1) in zip(points, points[1:]):
        length = math.hypot(x1 - x0, y1 - y0)
        pos = 0.0
        while length - pos > remaining:
            pos += remaining
            t = pos / length
            split = (x0 + (x1 - x0) * t, y0 + (y1 - y0) * t)
            if on:
                current.append(split)
                if len(current) >= 2:
                    yield current
            else:
                current = [split]
            on = not on
            index = (index + 1) % len(pattern)
            remaining = pattern[index]
        remaining -= length - pos
        if on:
            current.append((x1, y1))
    if on and len(current) >= 2:
        yield current


class Render:
    """Draws the map layers, the found path and its end markers."""

    def __init__(self, model) -> None:
        self.model = model
        self.road_reps: dict[RoadType, RoadRep] = {t: _road_rep(t) for t in _DRAWN_ROADS}
        self.landuse_colors: dict[LanduseType, Color] = dict(_LANDUSE_COLORS)
        self.scale = 1.0
        self.pixels_in_meter = 1.0
        self._height = 0

    def display(self, width: int, height: int) -> Image.Image:
        """Render the whole map into a new RGB image of the given size."""
        if width <= 0 or height <= 0:
            raise ValueError("image dimensions must be positive")
        self.scale = float(min(width, height))
        self.pixels_in_meter = self.scale / self.model.metric_scale
        self._height = height

        image = Image.new("RGB", (width, height), BACKGROUND)
        draw = ImageDraw.Draw(image)
        self._draw_landuses(image, draw)
        self._draw_leisure(image, draw)
        self._draw_water(image, draw)
        self._draw_railways(draw)
        self._draw_highways(draw)
        self._draw_buildings(image, draw)
        self._draw_path(draw)
        self._draw_marker(draw, -1, START_COLOR)
        self._draw_marker(draw, 0, END_COLOR)
        return image

    def _to_pixel(self, x: float, y: float) -> Point:
        return (x * self.scale, self._height - y * self.scale)

    def _way_points(self, way: Way) -> list[Point]:
        nodes = self.model.nodes
        return [self._to_pixel(nodes[i].x, nodes[i].y) for i in way.nodes]

    def _rings(self, polygon: Multipolygon) -> list[list[Point]]:
        ways = self.model.ways
        rings = (self._way_points(ways[n]) for n in (*polygon.outer, *polygon.inner))
        return [ring for ring in rings if ring]

    def _fill(self, image: Image.Image, draw: ImageDraw.ImageDraw, polygon: Multipolygon, color: Color) -> None:
        rings = [ring for ring in self._rings(polygon) if len(ring) >= 3]
        if not rings:
            return
        if len(rings) == 1:
            draw.polygon(rings[0], fill=color)
            return
        mask = Image.new("1", image.size, 0)
        for ring in rings:
            layer = Image.new("1", image.size, 0)
            ImageDraw.Draw(layer).polygon(ring, fill=1)
            mask = ImageChops.logical_xor(mask, layer)
        image.paste(color, mask=mask)

    def _outline(self, draw: ImageDraw.ImageDraw, polygon: Multipolygon, color: Color, width: float) -> None:
        for ring in self._rings(polygon):
            if len(ring) >= 2:
                draw.line([*ring, ring[0]], fill=color, width=_pixel_width(width))

    def _stroke(
        self,
        draw: ImageDraw.ImageDraw,
        points: list[Point],
        color: Color,
        width: float,
        dashes: Sequence[float] = (),
    ) -> None:
        if len(points) < 2:
            return
        pixels = _pixel_width(width)
        pieces = _dash_runs(points, dashes) if dashes else [points]
        for piece in pieces:
            draw.line(piece, fill=color, width=pixels, joint="curve")

    def _draw_landuses(self, image: Image.Image, draw: ImageDraw.ImageDraw) -> None:
        for landuse in self.model.landuses:
            color = self.landuse_colors.get(landuse.type)
            if color is not None:
                self._fill(image, draw, landuse, color)

    def _draw_leisure(self, image: Image.Image, draw: ImageDraw.ImageDraw) -> None:
        for leisure in self.model.leisures:
            self._fill(image, draw, leisure, LEISURE_FILL)
            self._outline(draw, leisure, LEISURE_OUTLINE, OUTLINE_WIDTH)

    def _draw_water(self, image: Image.Image, draw: ImageDraw.ImageDraw) -> None:
        for water in self.model.waters:
            self._fill(image, draw, water, WATER_FILL)

    def _draw_railways(self, draw: ImageDraw.ImageDraw) -> None:
        for railway in self.model.railways:
            points = self._way_points(self.model.ways[railway.way])
            self._stroke(draw, points, RAILWAY_STROKE, RAILWAY_OUTER_WIDTH * self.pixels_in_meter)
            self._stroke(
                draw, points, RAILWAY_DASH, RAILWAY_INNER_WIDTH * self.pixels_in_meter, RAILWAY_DASHES
            )

    def _draw_highways(self, draw: ImageDraw.ImageDraw) -> None:
        for road in self.model.roads:
            rep = self.road_reps.get(road.type)
            if rep is None:
                continue
            width = rep.metric_width * self.pixels_in_meter if rep.metric_width > 0 else 1.0
            points = self._way_points(self.model.ways[road.way])
            self._stroke(draw, points, rep.color, width, rep.dashes)

    def _draw_buildings(self, image: Image.Image, draw: ImageDraw.ImageDraw) -> None:
        for building in self.model.buildings:
            self._fill(image, draw, building, BUILDING_FILL)
            self._outline(draw, building, BUILDING_OUTLINE, OUTLINE_WIDTH)

    def _draw_path(self, draw: ImageDraw.ImageDraw) -> None:
        path = getattr(self.model, "path", [])
        points = [self._to_pixel(node.x, node.y) for node in path]
        self._stroke(draw, points, PATH_COLOR, PATH_WIDTH)

    def _draw_marker(self, draw: ImageDraw.ImageDraw, position: int, color: Color) -> None:
        path = getattr(self.model, "path", [])
        if not path:
            return
        node = path[position]
        corners = [
            (node.x, node.y),
            (node.x + MARKER_SIZE, node.y),
            (node.x + MARKER_SIZE, node.y + MARKER_SIZE),
            (node.x, node.y + MARKER_SIZE),
        ]
        draw.polygon([self._to_pixel(x, y) for x, y in corners], fill=color, outline=color)