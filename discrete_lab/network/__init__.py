"""Router networks and shortest-path routing."""

from discrete_lab.network.routing import find_shortest_path, path_cost
from discrete_lab.network.topology import Connection, Network, Router

__all__ = ["Connection", "Network", "Router", "find_shortest_path", "path_cost"]
