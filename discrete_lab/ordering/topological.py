"""Enumeration of every valid execution order of an instruction set.

Each order is a linear extension of the dependency partial order: every
instruction appears exactly once and only after all of its dependencies.
The number of orders grows factorially with the number of independent
instructions, so callers cap the input size (see ``OrderingConfig``).
"""

from collections.abc import Iterable, Iterator, Sequence
from itertools import islice

import structlog

from discrete_lab.ordering.instruction_set import (
    Instruction,
    dependency_map,
    ensure_acyclic,
)

logger = structlog.get_logger(__name__)


class EnumerationTooLargeError(ValueError):
    """Raised when an instruction set is too large to enumerate."""


def iter_topological_orders(instructions: Iterable[Instruction]) -> Iterator[list[str]]:
    """Lazily yield every topological order of the instructions.

    Backtracking search: at each step any unplaced instruction whose
    dependencies are all placed may come next, tried in input order. The
    placed set travels down the recursion as a frozenset, so nothing has to
    be rolled back. Dependencies on ids outside the input are ignored.

    Raises:
        CycleDetectedError: If the dependencies contain a cycle
    """
    instructions = list(instructions)
    graph = ensure_acyclic(instructions)
    ids = list(graph)

    def extend(path: tuple[str, ...], placed: frozenset[str]) -> Iterator[list[str]]:
        if len(path) == len(ids):
            yield list(path)
            return
        for node in ids:
            if node not in placed and graph[node] <= placed:
                yield from extend((*path, node), placed | {node})

    yield from extend((), frozenset())


def all_topological_orders(
    instructions: Iterable[Instruction],
    limit: int | None = None,
    max_nodes: int | None = None,
) -> list[list[str]]:
    """Return every topological order of the instructions.

    Args:
        instructions: Instructions to order
        limit: Return at most this many orders
        max_nodes: Refuse inputs with more instructions than this

    Returns:
        List of orders, each a list of instruction ids. An empty input has
        exactly one (empty) order.

    Raises:
        CycleDetectedError: If the dependencies contain a cycle
        EnumerationTooLargeError: If the input exceeds ``max_nodes``

    Example:
        >>> all_topological_orders(InstructionSet.default())
        [['1', '2', '3', '4', '5'], ['2', '1', '3', '4', '5']]
    """
    instructions = list(instructions)
    if max_nodes is not None and len(instructions) > max_nodes:
        error_msg = (
            f"Refusing to enumerate orders of {len(instructions)} instructions "
            f"(limit {max_nodes})"
        )
        logger.error(
            "enumeration_too_large",
            instruction_count=len(instructions),
            max_nodes=max_nodes,
        )
        raise EnumerationTooLargeError(error_msg)

    orders = list(islice(iter_topological_orders(instructions), limit))

    logger.info(
        "topological_orders_enumerated",
        instruction_count=len(instructions),
        order_count=len(orders),
        truncated=limit is not None and len(orders) == limit,
    )
    return orders


def is_topological_order(order: Sequence[str], instructions: Iterable[Instruction]) -> bool:
    """Check that ``order`` lists every instruction once, after its dependencies.

    Dependencies on ids outside the input are ignored.
    """
    graph = dependency_map(instructions)
    if len(order) != len(graph) or set(order) != set(graph):
        return False

    seen: set[str] = set()
    for node in order:
        if not graph[node] <= seen:
            return False
        seen.add(node)
    return True
