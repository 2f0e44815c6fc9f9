"""Router networks: weighted, undirected connection graphs."""

from collections.abc import Iterable
from dataclasses import dataclass

import structlog

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class Router:
    id: str
    name: str


@dataclass(frozen=True)
class Connection:
    """Undirected link between two routers; stored direction matters only for display."""

    source: str
    target: str
    weight: float = 1

    def joins(self, a: str, b: str) -> bool:
        return {self.source, self.target} == {a, b}


class Network:
    """Editable set of routers and the weighted links between them.

    Example:
        >>> net = Network.default()
        >>> len(net.routers), len(net.connections)
        (6, 7)
    """

    def __init__(
        self,
        routers: Iterable[Router] = (),
        connections: Iterable[Connection] = (),
    ):
        self._routers: dict[str, Router] = {r.id: r for r in routers}
        self._connections: list[Connection] = list(connections)

    @classmethod
    def default(cls) -> "Network":
        """Build the six-router sample network."""
        routers = [
            Router(str(i), f"Router {letter}") for i, letter in enumerate("ABCDEF", start=1)
        ]
        connections = [
            Connection("1", "2", 2),
            Connection("2", "3", 1),
            Connection("3", "4", 3),
            Connection("4", "5", 2),
            Connection("5", "1", 4),
            Connection("1", "6", 5),
            Connection("3", "6", 3),
        ]
        return cls(routers, connections)

    @property
    def routers(self) -> list[Router]:
        return list(self._routers.values())

    @property
    def connections(self) -> list[Connection]:
        return list(self._connections)

    def get(self, router_id: str) -> Router | None:
        return self._routers.get(router_id)

    def __contains__(self, router_id: object) -> bool:
        return router_id in self._routers

    def add_router(self, name: str) -> Router:
        """Add a router under the next free numeric id.

        Raises:
            ValueError: If the name is empty
        """
        if not name.strip():
            msg = "Router name must not be empty"
            raise ValueError(msg)

        candidate = len(self._routers) + 1
        while str(candidate) in self._routers:
            candidate += 1
        router = Router(str(candidate), name)
        self._routers[router.id] = router

        logger.debug("router_added", router_id=router.id, name=name)
        return router

    def remove_router(self, router_id: str) -> None:
        """Remove a router together with every connection touching it."""
        if self._routers.pop(router_id, None) is None:
            logger.warning("remove_unknown_router", router_id=router_id)
            return

        before = len(self._connections)
        self._connections = [
            conn
            for conn in self._connections
            if router_id not in (conn.source, conn.target)
        ]
        logger.debug(
            "router_removed",
            router_id=router_id,
            connections_removed=before - len(self._connections),
        )

    def add_connection(self, source: str, target: str, weight: float = 1) -> bool:
        """Link two routers.

        Self-links, unknown routers, negative weights and links that already
        exist in either direction are rejected.

        Returns:
            True if the connection was added
        """
        reason = None
        if source == target:
            reason = "self_link"
        elif source not in self._routers or target not in self._routers:
            reason = "unknown_router"
        elif weight < 0:
            reason = "negative_weight"
        elif any(conn.joins(source, target) for conn in self._connections):
            reason = "duplicate"

        if reason is not None:
            logger.warning(
                "connection_rejected",
                source=source,
                target=target,
                weight=weight,
                reason=reason,
            )
            return False

        self._connections.append(Connection(source, target, weight))
        logger.debug("connection_added", source=source, target=target, weight=weight)
        return True

    def adjacency(self) -> dict[str, list[tuple[str, float]]]:
        """Neighbour lists with both directions of every link.

        Connections naming an unknown router are skipped.
        """
        graph: dict[str, list[tuple[str, float]]] = {rid: [] for rid in self._routers}
        for conn in self._connections:
            if conn.source not in graph or conn.target not in graph:
                logger.debug(
                    "dangling_connection_skipped",
                    source=conn.source,
                    target=conn.target,
                )
                continue
            graph[conn.source].append((conn.target, conn.weight))
            graph[conn.target].append((conn.source, conn.weight))
        return graph

    def adjacency_matrix(self) -> list[list[float]]:
        """Weight matrix in router order, 0 where no link is stored.

        Each link fills only the cell of its stored direction
        (row = source, column = target).
        """
        index = {rid: i for i, rid in enumerate(self._routers)}
        size = len(index)
        matrix: list[list[float]] = [[0] * size for _ in range(size)]
        for conn in self._connections:
            if conn.source in index and conn.target in index:
                matrix[index[conn.source]][index[conn.target]] = conn.weight
        return matrix
