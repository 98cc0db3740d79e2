import pytest

from workbench.osm.model import (
    Building,
    Landuse,
    LanduseType,
    Leisure,
    Model,
    Railway,
    RoadType,
    Water,
    landuse_type_from_string,
    road_type_from_string,
)

OSM = b"""<?xml version="1.0" encoding="UTF-8"?>
<osm version="0.6">
  <bounds minlat="0.0" maxlat="0.01" minlon="0.0" maxlon="0.02"/>
  <node id="n1" lat="0.0" lon="0.0"/>
  <node id="n2" lat="0.01" lon="0.0"/>
  <node id="n3" lat="0.005" lon="0.01"/>
  <node id="n4" lat="0.002" lon="0.015"/>
  <way id="w1"><nd ref="n1"/><nd ref="n2"/><tag k="highway" v="primary"/></way>
  <way id="w2"><nd ref="n2"/><nd ref="n3"/><nd ref="missing"/><tag k="highway" v="footway"/></way>
  <way id="w3"><nd ref="n3"/><nd ref="n4"/><tag k="highway" v="motorway"/></way>
  <way id="w4"><nd ref="n1"/><nd ref="n4"/><tag k="highway" v="bogus"/></way>
  <way id="w5"><nd ref="n1"/><nd ref="n3"/><tag k="railway" v="rail"/></way>
  <way id="w6"><nd ref="n1"/><nd ref="n2"/><nd ref="n3"/><nd ref="n1"/><tag k="building" v="yes"/></way>
  <way id="w7"><nd ref="n1"/><nd ref="n2"/><tag k="natural" v="wood"/></way>
  <way id="w8"><nd ref="n1"/><nd ref="n2"/><tag k="landuse" v="forest"/></way>
  <way id="w9"><nd ref="n1"/><nd ref="n2"/><tag k="landuse" v="bogus"/></way>
  <way id="w10"><nd ref="n2"/><nd ref="n3"/><tag k="natural" v="water"/></way>
  <way id="w11"><nd ref="n1"/><nd ref="n2"/><nd ref="n3"/></way>
  <way id="w12"><nd ref="n3"/><nd ref="n4"/><nd ref="n1"/></way>
  <relation id="r1">
    <member type="way" ref="w11" role="outer"/>
    <member type="way" ref="w12" role="outer"/>
    <member type="way" ref="unknown" role="outer"/>
    <member type="node" ref="n1" role=""/>
    <tag k="natural" v="water"/>
  </relation>
  <relation id="r2">
    <member type="way" ref="w6" role="outer"/>
    <member type="way" ref="w7" role="inner"/>
    <tag k="building" v="yes"/>
  </relation>
  <relation id="r3">
    <member type="way" ref="w1" role="outer"/>
    <tag k="landuse" v="grass"/>
  </relation>
</osm>
"""


@pytest.fixture
def model():
    return Model(OSM)


def test_road_type_mapping():
    assert road_type_from_string("living_street") is RoadType.RESIDENTIAL
    assert road_type_from_string("steps") is RoadType.FOOTWAY
    assert road_type_from_string("bogus") is RoadType.INVALID


def test_landuse_type_mapping():
    assert landuse_type_from_string("forest") is LanduseType.FOREST
    assert landuse_type_from_string("railway") is LanduseType.RAILWAY
    assert landuse_type_from_string("meadow") is LanduseType.INVALID


def test_malformed_xml_raises():
    with pytest.raises(ValueError):
        Model(b"<osm><bounds")


def test_empty_document_raises():
    with pytest.raises(ValueError):
        Model(b"")


def test_missing_bounds_raises():
    with pytest.raises(ValueError):
        Model(b"<osm><node id='1' lat='0' lon='0'/></osm>")


def test_nodes_are_normalised(model):
    assert len(model.nodes) == 4
    assert model.nodes[0].x == 0.0
    assert model.nodes[0].y == 0.0
    assert model.nodes[1].y == pytest.approx(1.0)
    assert all(0.0 <= node.y <= 1.0 for node in model.nodes)


def test_metric_scale_is_smaller_extent(model):
    assert model.metric_scale > 0
    assert model.nodes[2].x > model.nodes[1].x


def test_unknown_node_refs_are_skipped(model):
    assert model.ways[1].nodes == [1, 2]


def test_roads_sorted_and_filtered(model):
    types = [road.type for road in model.roads]
    assert types == sorted(types)
    assert set(types) == {RoadType.PRIMARY, RoadType.FOOTWAY, RoadType.MOTORWAY}
    primary = next(road for road in model.roads if road.type is RoadType.PRIMARY)
    assert primary.way == 0


def test_railways(model):
    assert model.railways == [Railway(way=4)]


def test_leisure_from_natural_wood(model):
    assert model.leisures == [Leisure(outer=[6])]


def test_landuses(model):
    assert model.landuses[0] == Landuse(outer=[7], type=LanduseType.FOREST)
    assert all(landuse.type is not LanduseType.INVALID for landuse in model.landuses)


def test_relation_building_keeps_members(model):
    assert model.buildings == [Building(outer=[5]), Building(outer=[5], inner=[6])]


def test_water_relation_builds_closed_ring(model):
    assert model.waters[0] == Water(outer=[9])
    ring_index = model.waters[1].outer
    assert ring_index == [len(model.ways) - 1]
    ring = model.ways[ring_index[0]].nodes
    assert ring[0] == ring[-1]
    assert len(ring) == len(model.ways[10].nodes) + len(model.ways[11].nodes)
    assert model.waters[1].inner == []


def test_unclosable_ring_is_dropped(model):
    grass = model.landuses[-1]
    assert grass.type is LanduseType.GRASS
    assert grass.outer == []


def test_accepts_text_input():
    model = Model(OSM.decode())
    assert len(model.ways) == len(Model(OSM).ways)