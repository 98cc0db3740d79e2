import pytest

from workbench.osm import render
from workbench.osm.model import RoadType
from workbench.osm.render import Render
from workbench.osm.route_model import RouteModel
from workbench.osm.route_planner import RoutePlanner


class _MapBuilder:
    def __init__(self):
        self.nodes = []
        self.ways = []
        self.relations = []

    def node(self, lat, lon):
        nid = len(self.nodes) + 1
        self.nodes.append(f'<node id="{nid}" lat="{lat}" lon="{lon}"/>')
        return nid

    def way(self, ids, tags=()):
        wid = len(self.ways) + 100
        refs = "".join(f'<nd ref="{i}"/>' for i in ids)
        tag_xml = "".join(f'<tag k="{k}" v="{v}"/>' for k, v in tags)
        self.ways.append(f'<way id="{wid}">{refs}{tag_xml}</way>')
        return wid

    def square(self, lat0, lon0, lat1, lon1, tags=()):
        a = self.node(lat0, lon0)
        b = self.node(lat0, lon1)
        c = self.node(lat1, lon1)
        d = self.node(lat1, lon0)
        return self.way([a, b, c, d, a], tags)

    def relation(self, members, tags):
        rid = len(self.relations) + 500
        member_xml = "".join(
            f'<member type="way" ref="{ref}" role="{role}"/>' for ref, role in members
        )
        tag_xml = "".join(f'<tag k="{k}" v="{v}"/>' for k, v in tags)
        self.relations.append(f'<relation id="{rid}">{member_xml}{tag_xml}</relation>')

    def xml(self):
        return (
            '<?xml version="1.0"?><osm>'
            '<bounds minlat="0" minlon="0" maxlat="0.01" maxlon="0.01"/>'
            + "".join(self.nodes)
            + "".join(self.ways)
            + "".join(self.relations)
            + "</osm>"
        ).encode()


def _build_map():
    b = _MapBuilder()
    road = [b.node(0.001, lon) for lon in (0.001, 0.005, 0.009)]
    b.way(road, [("highway", "residential")])
    foot = [b.node(0.005, 0.001), b.node(0.005, 0.009)]
    b.way(foot, [("highway", "footway")])
    rail = [b.node(0.0095, 0.001), b.node(0.0095, 0.009)]
    b.way(rail, [("railway", "rail")])
    b.square(0.002, 0.002, 0.004, 0.004, [("building", "yes")])
    b.square(0.006, 0.006, 0.008, 0.008, [("natural", "water")])
    b.square(0.006, 0.001, 0.008, 0.004, [("landuse", "grass")])
    outer = b.square(0.002, 0.006, 0.0045, 0.009)
    inner = b.square(0.0028, 0.007, 0.0038, 0.008)
    b.relation([(outer, "outer"), (inner, "inner")], [("building", "yes")])
    return b.xml()


@pytest.fixture
def model():
    return RouteModel(_build_map())


def test_display_size_and_background(model):
    image = Render(model).display(120, 100)
    assert image.size == (120, 100)
    assert image.getpixel((0, 0)) == render.BACKGROUND


def test_display_rejects_empty_size(model):
    with pytest.raises(ValueError):
        Render(model).display(0, 100)


def test_areas_are_filled(model):
    image = Render(model).display(100, 100)
    assert image.getpixel((30, 70)) == render.BUILDING_FILL
    assert image.getpixel((70, 30)) == render.WATER_FILL
    assert image.getpixel((25, 30)) == render.Render(model).landuse_colors[
        model.landuses[0].type
    ]


def test_multipolygon_inner_ring_is_a_hole(model):
    image = Render(model).display(100, 100)
    assert image.getpixel((65, 75)) == render.BUILDING_FILL
    assert image.getpixel((75, 67)) == render.BACKGROUND


def test_railway_is_stroked(model):
    image = Render(model).display(100, 100)
    rail_colors = {render.RAILWAY_STROKE, render.RAILWAY_DASH}
    hits = sum(image.getpixel((50, row)) in rail_colors for row in range(3, 8))
    assert hits >= 1


def test_footway_is_dashed(model):
    renderer = Render(model)
    image = renderer.display(1000, 1000)
    foot_color = renderer.road_reps[RoadType.FOOTWAY].color
    strip = {image.getpixel((x, y)) for x in range(200, 800) for y in range(497, 503)}
    assert foot_color in strip
    assert render.BACKGROUND in strip


def test_road_drawn_without_path(model):
    renderer = Render(model)
    image = renderer.display(1000, 1000)
    assert image.getpixel((500, 900)) == renderer.road_reps[RoadType.RESIDENTIAL].color
    assert image.getpixel((105, 893)) == render.BACKGROUND


def test_path_and_markers_after_search(model):
    RoutePlanner(model, 10, 10, 90, 10).a_star_search()
    assert len(model.path) == 3
    image = Render(model).display(1000, 1000)
    assert image.getpixel((500, 900)) == render.PATH_COLOR
    assert image.getpixel((105, 893)) == render.START_COLOR
    assert image.getpixel((905, 893)) == render.END_COLOR