"""Routing graph built on top of the OSM map model."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from workbench.osm.model import Model, Node, Road, RoadType

FLT_MAX = 3.4028234663852886e38


@dataclass(eq=False)
class RouteNode(Node):
    """A map node with the search state used by the route planner."""

    index: int = 0
    parent_model: RouteModel | None = field(default=None, repr=False)
    parent: RouteNode | None = field(default=None, repr=False)
    h_value: float = FLT_MAX
    g_value: float = 0.0
    visited: bool = False
    neighbors: list[RouteNode] = field(default_factory=list, repr=False)

    __eq__ = object.__eq__
    __hash__ = object.__hash__

    def distance(self, other: Node) -> float:
        """Euclidean distance to another node."""
        return math.hypot(self.x - other.x, self.y - other.y)

    def _find_neighbor(self, node_indices: list[int]) -> RouteNode | None:
        assert self.parent_model is not None
        closest: RouteNode | None = None
        closest_dist = 0.0
        for node_index in node_indices:
            candidate = self.parent_model.snodes[node_index]
            if candidate.visited:
                continue
            dist = self.distance(candidate)
            if dist <= 0:
                continue
            if closest is None or closest_dist > dist:
                closest, closest_dist = candidate, dist
        return closest

    def find_neighbors(self) -> None:
        """Add the closest unvisited node of every road through this node."""
        if self.parent_model is None:
            raise ValueError("node is not attached to a route model")
        model = self.parent_model
        for road in model.node_to_road.get(self.index, []):
            neighbor = self._find_neighbor(model.ways[road.way].nodes)
            if neighbor is not None:
                self.neighbors.append(neighbor)


class RouteModel(Model):
    """Map model whose nodes carry routing state."""

    def __init__(self, xml: bytes | str) -> None:
        super().__init__(xml)
        self.path: list[RouteNode] = []
        self.snodes: list[RouteNode] = [
            RouteNode(x=node.x, y=node.y, index=i, parent_model=self)
            for i, node in enumerate(self.nodes)
        ]
        self.node_to_road: dict[int, list[Road]] = {}
        for road in self._drivable_roads():
            for node_idx in self.ways[road.way].nodes:
                self.node_to_road.setdefault(node_idx, []).append(road)

    def _drivable_roads(self):
        return (road for road in self.roads if road.type != RoadType.FOOTWAY)

    def find_closest_node(self, x: float, y: float) -> RouteNode:
        """Return the road node (footways excluded) nearest to (x, y)."""
        target = Node(x=x, y=y)
        min_dist = FLT_MAX
        closest_idx = 0
        for road in self._drivable_roads():
            for node_idx in self.ways[road.way].nodes:
                dist = self.snodes[node_idx].distance(target)
                if min_dist > dist:
                    min_dist = dist
                    closest_idx = node_idx
        return self.snodes[closest_idx]