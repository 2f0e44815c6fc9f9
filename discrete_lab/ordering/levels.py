"""Level assignment and layout for Hasse diagrams of instruction dependencies."""

from collections.abc import Iterable

import structlog

from discrete_lab.ordering.instruction_set import Instruction, ensure_acyclic

logger = structlog.get_logger(__name__)

Position = tuple[float, float, float]


def compute_levels(instructions: Iterable[Instruction]) -> dict[str, int]:
    """Compute the longest-path depth of every instruction.

    Levels start at 0 and are raised by fixpoint iteration: whenever a
    dependency sits on the same or a higher level, the instruction moves to
    one above it. The loop stops after a full pass without changes, leaving
    ``level = 1 + max(level of dependencies)`` (0 without dependencies).
    Dependencies on ids outside the input are ignored.

    Args:
        instructions: Instructions to rank

    Returns:
        Mapping of instruction id to level

    Raises:
        CycleDetectedError: If the dependencies contain a cycle

    Example:
        >>> compute_levels(InstructionSet.default())
        {'1': 0, '2': 0, '3': 1, '4': 2, '5': 3}
    """
    instructions = list(instructions)
    graph = ensure_acyclic(instructions)

    levels = dict.fromkeys(graph, 0)
    passes = 0
    changed = True
    while changed:
        changed = False
        passes += 1
        for node, deps in graph.items():
            for dep in deps:
                if levels[dep] >= levels[node]:
                    levels[node] = levels[dep] + 1
                    changed = True

    logger.debug(
        "levels_computed",
        node_count=len(levels),
        max_level=max(levels.values(), default=0),
        passes=passes,
    )
    return levels


def covering_edges(instructions: Iterable[Instruction]) -> set[tuple[str, str]]:
    """Return the covering relation (transitive reduction) of the dependencies.

    An edge ``(dep, node)`` is kept only when ``dep`` cannot also be reached
    through another dependency of ``node``; these are the lines a Hasse
    diagram draws.

    Raises:
        CycleDetectedError: If the dependencies contain a cycle
    """
    instructions = list(instructions)
    graph = ensure_acyclic(instructions)

    ancestors: dict[str, set[str]] = {}

    def collect(node: str) -> set[str]:
        if node not in ancestors:
            found: set[str] = set()
            for dep in graph[node]:
                found.add(dep)
                found |= collect(dep)
            ancestors[node] = found
        return ancestors[node]

    edges = set()
    for node, deps in graph.items():
        implied = set()
        for dep in deps:
            implied |= collect(dep)
        edges.update((dep, node) for dep in deps - implied)

    return edges


def hasse_layout(
    instructions: Iterable[Instruction],
    vertical_spacing: float = 4.0,
    horizontal_spacing: float = 3.5,
) -> dict[str, Position]:
    """Place every instruction for a layered drawing.

    Level 0 ends up at the top. Instructions sharing a level are centred
    around ``x = 0`` in input order.

    Args:
        instructions: Instructions to place
        vertical_spacing: Distance between consecutive levels
        horizontal_spacing: Distance between neighbours on one level

    Returns:
        Mapping of instruction id to an ``(x, y, z)`` position

    Raises:
        CycleDetectedError: If the dependencies contain a cycle
    """
    instructions = list(instructions)
    levels = compute_levels(instructions)
    max_level = max(max(levels.values(), default=0), 1)

    by_level: dict[int, list[str]] = {}
    for inst in instructions:
        by_level.setdefault(levels[inst.id], []).append(inst.id)

    positions: dict[str, Position] = {}
    for level, ids in by_level.items():
        width = len(ids)
        y = (max_level - level) * vertical_spacing
        for index, inst_id in enumerate(ids):
            x = (index - (width - 1) / 2) * horizontal_spacing
            positions[inst_id] = (x, y, 0.0)

    return positions
