"""Shortest-path routing with Dijkstra's algorithm."""

import heapq
import math
from collections.abc import Sequence

import structlog

from discrete_lab.network.topology import Network

logger = structlog.get_logger(__name__)


def find_shortest_path(network: Network, source: str, target: str) -> list[str]:
    """Find a minimum-weight route between two routers.

    Dijkstra over the undirected network: a heap yields the unvisited router
    with the smallest tentative distance, its neighbours are relaxed, and the
    search stops once the target is settled or nothing reachable is left.
    Equal-cost routes are broken arbitrarily. Weights must be non-negative.

    Args:
        network: Routers and weighted connections
        source: Id of the starting router
        target: Id of the destination router

    Returns:
        Router ids from source to target, or an empty list if the target is
        unreachable or either id is unknown
    """
    if source not in network or target not in network:
        logger.warning("route_endpoint_unknown", source=source, target=target)
        return []

    graph = network.adjacency()
    distances = dict.fromkeys(graph, math.inf)
    previous: dict[str, str] = {}
    distances[source] = 0
    visited: set[str] = set()
    queue: list[tuple[float, str]] = [(0, source)]

    while queue:
        distance, current = heapq.heappop(queue)
        if current in visited:
            continue
        if current == target:
            break
        visited.add(current)

        for neighbor, weight in graph[current]:
            if neighbor in visited:
                continue
            alt = distance + weight
            if alt < distances[neighbor]:
                distances[neighbor] = alt
                previous[neighbor] = current
                heapq.heappush(queue, (alt, neighbor))

    if math.isinf(distances[target]):
        logger.info("route_not_found", source=source, target=target)
        return []

    path = [target]
    while path[-1] != source:
        path.append(previous[path[-1]])
    path.reverse()

    logger.info(
        "route_found",
        source=source,
        target=target,
        hops=len(path) - 1,
        cost=distances[target],
    )
    return path


def path_cost(network: Network, path: Sequence[str]) -> float:
    """Sum of link weights along a path (0 for paths shorter than two routers).

    Raises:
        ValueError: If two consecutive routers are not linked
    """
    graph = network.adjacency()
    total: float = 0
    for current, nxt in zip(path, path[1:]):
        weights = [weight for neighbor, weight in graph.get(current, []) if neighbor == nxt]
        if not weights:
            msg = f"Routers {current} and {nxt} are not connected"
            raise ValueError(msg)
        total += min(weights)
    return total
