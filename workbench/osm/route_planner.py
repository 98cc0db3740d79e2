"""A* search over a route model."""

from __future__ import annotations

from workbench.osm.route_model import RouteModel, RouteNode


class RoutePlanner:
    """Finds a path between two points given in percent of the map size."""

    def __init__(self, model: RouteModel, start_x: float, start_y: float, end_x: float, end_y: float) -> None:
        self.model = model
        self.distance = 0.0
        self.open_list: list[RouteNode] = []
        self.start_node = model.find_closest_node(start_x * 0.01, start_y * 0.01)
        self.end_node = model.find_closest_node(end_x * 0.01, end_y * 0.01)

    def _construct_final_path(self, current: RouteNode) -> list[RouteNode]:
        path: list[RouteNode] = []
        node: RouteNode | None = current
        while node is not None:
            path.append(node)
            if node.parent is not None:
                self.distance += node.distance(node.parent)
            node = node.parent
        self.distance *= self.model.metric_scale
        return path

    def _next_node(self) -> RouteNode:
        self.open_list.sort(key=lambda node: node.g_value + node.h_value, reverse=True)
        return self.open_list.pop()

    def _add_neighbors(self, current: RouteNode) -> None:
        current.find_neighbors()
        for neighbor in current.neighbors:
            neighbor.parent = current
            neighbor.g_value = current.g_value + current.distance(neighbor)
            neighbor.h_value = neighbor.distance(self.end_node)
            self.open_list.append(neighbor)
            neighbor.visited = True

    def a_star_search(self) -> None:
        """Search; on success the model's path runs from the end back to the start."""
        self.start_node.visited = True
        self.open_list.append(self.start_node)
        while self.open_list:
            current = self._next_node()
            if current.distance(self.end_node) == 0:
                self.model.path = self._construct_final_path(current)
                return
            self._add_neighbors(current)