# domain/routing/road_graph.py
from collections.abc import Iterable
from dataclasses import dataclass

from dispatch_core.domain.entities.geography import RoadSegment
from dispatch_core.domain.errors import (
    ConfigurationError,
    EmptyGraphError,
    InvalidVertexError,
    UnreachableError,
)


@dataclass(frozen=True)
class ShortestPaths:
    source: int
    distances: tuple[float | None, ...]  # None => unreachable
    predecessors: tuple[int | None, ...]

    def reachable(self, v: int) -> bool:
        return self.distances[v] is not None

    def path_to(self, v: int) -> list[int]:
        """Follow predecessors from v back to the source; [] if v is unreachable."""
        if not self.reachable(v):
            return []
        path = [v]
        while path[-1] != self.source:
            path.append(self.predecessors[path[-1]])
        path.reverse()
        return path


@dataclass(frozen=True)
class RouteResult:
    source: int
    route: tuple[int, ...]
    distances: tuple[float | None, ...]

    @property
    def destination(self) -> int:
        return self.route[-1]

    @property
    def total_distance(self) -> float:
        return self.distances[self.destination]


class RoadGraph:
    """
    Weighted directed adjacency list over dense station ids.
    Roads are undirected in the world, so callers add both arcs (see add_road).
    """

    def __init__(self, vertex_count: int):
        if vertex_count < 0:
            raise ConfigurationError(f"vertex_count must be >= 0, got {vertex_count}")
        self._adj: list[list[tuple[int, float]]] = [[] for _ in range(vertex_count)]

    @classmethod
    def from_segments(cls, vertex_count: int, segments: Iterable[RoadSegment]) -> "RoadGraph":
        g = cls(vertex_count)
        for seg in segments:
            g.add_road(seg)
        return g

    @property
    def vertex_count(self) -> int:
        return len(self._adj)

    def _check(self, v: int) -> None:
        if not (0 <= v < len(self._adj)):
            raise InvalidVertexError(v, len(self._adj))

    def neighbors(self, u: int) -> tuple[tuple[int, float], ...]:
        self._check(u)
        return tuple(self._adj[u])

    def add_edge(self, u: int, v: int, weight: float) -> None:
        self._check(u)
        self._check(v)
        if not weight > 0:
            raise ConfigurationError(f"edge {u}->{v} has non-positive weight {weight!r}")
        self._adj[u].append((v, weight))

    def add_road(self, seg: RoadSegment) -> None:
        self.add_edge(seg.from_station_id, seg.to_station_id, seg.distance_weight)
        self.add_edge(seg.to_station_id, seg.from_station_id, seg.distance_weight)

    # ------------------------------------------------------------------

    def shortest_paths(self, source: int) -> ShortestPaths:
        n = len(self._adj)
        if n == 0:
            raise EmptyGraphError("road graph has no vertices")
        self._check(source)

        dist: list[float | None] = [None] * n
        parent: list[int | None] = [None] * n
        visited = [False] * n
        dist[source] = 0

        for _ in range(n):
            # lowest id wins among equal tentative distances
            u = None
            for j in range(n):
                if visited[j] or dist[j] is None:
                    continue
                if u is None or dist[j] < dist[u]:
                    u = j
            if u is None:
                break
            visited[u] = True
            for v, w in self._adj[u]:
                if visited[v]:
                    continue
                d = dist[u] + w
                if dist[v] is None or d < dist[v]:
                    dist[v], parent[v] = d, u

        return ShortestPaths(source, tuple(dist), tuple(parent))

    def compute_route(self, source: int) -> RouteResult:
        """
        Route from source to the farthest reachable vertex.

        This is the network's reach from a station, not a path to an incident:
        incidents are not graph vertices.
        """
        sp = self.shortest_paths(source)
        far = source
        for v, d in enumerate(sp.distances):
            if d is not None and d > sp.distances[far]:
                far = v
        return RouteResult(source, tuple(sp.path_to(far)), sp.distances)

    def path_between(self, source: int, destination: int) -> RouteResult:
        self._check(destination)
        sp = self.shortest_paths(source)
        if not sp.reachable(destination):
            raise UnreachableError(source, destination)
        return RouteResult(source, tuple(sp.path_to(destination)), sp.distances)
