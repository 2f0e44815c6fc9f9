"""Instruction set validation with cycle path reporting.

The level and ordering algorithms refuse cyclic input outright; this module
explains *why* an instruction set is rejected. It reports each cycle as a
path and lists dependency ids that do not name an instruction.
"""

from dataclasses import dataclass, field

import structlog

from discrete_lab.ordering.instruction_set import InstructionSet

logger = structlog.get_logger(__name__)


@dataclass
class ValidationReport:
    """Findings about one instruction set.

    Only cycles make an instruction set invalid; undefined references are
    ignored by the algorithms and reported as warnings.

    Attributes:
        cycles: Detected cycles, each a list of ids with the first id repeated last
        missing_refs: Ids referenced as dependencies but not defined
    """

    cycles: list[list[str]] = field(default_factory=list)
    missing_refs: set[str] = field(default_factory=set)

    @property
    def is_valid(self) -> bool:
        return not self.cycles

    @property
    def errors(self) -> list[str]:
        return [f"Cycle detected: {' -> '.join(cycle)}" for cycle in self.cycles]

    @property
    def warnings(self) -> list[str]:
        if not self.missing_refs:
            return []
        return [
            "Dependencies on undefined instructions are ignored: "
            + ", ".join(sorted(self.missing_refs)),
        ]

    def summary(self) -> str:
        """One status line, then one line per finding."""
        status = "valid" if self.is_valid else "invalid"
        lines = [
            f"{status}: {len(self.cycles)} cycle(s), "
            f"{len(self.missing_refs)} undefined reference(s)",
        ]
        lines.extend(f"  cycle {' -> '.join(cycle)}" for cycle in self.cycles)
        lines.extend(f"  undefined {ref}" for ref in sorted(self.missing_refs))
        return "\n".join(lines)


class GraphValidator:
    """Validator for instruction sets with detailed error reporting."""

    def __init__(self):
        """Initialize the validator."""
        self._visited: set[str] = set()
        self._rec_stack: set[str] = set()
        self._path: list[str] = []

    def validate(self, instruction_set: InstructionSet) -> ValidationReport:
        """Find the cycles and undefined references of an instruction set.

        Args:
            instruction_set: The instructions to validate

        Returns:
            ValidationReport with every cycle found and every undefined id
        """
        graph = instruction_set.graph
        report = ValidationReport(
            cycles=self._detect_cycles(graph),
            missing_refs=self._check_missing_refs(graph),
        )

        for cycle in report.cycles:
            logger.error("instruction_cycle_found", cycle=cycle)
        logger.info(
            "instruction_set_validated",
            instruction_count=len(graph),
            is_valid=report.is_valid,
            cycle_count=len(report.cycles),
            missing_ref_count=len(report.missing_refs),
        )
        return report

    def _detect_cycles(self, graph: dict[str, set[str]]) -> list[list[str]]:
        """Detect cycles in the graph using DFS.

        Args:
            graph: Dictionary mapping instruction ids to their dependencies

        Returns:
            List of cycles, each a list of ids with the first id repeated last
        """
        self._visited = set()
        self._rec_stack = set()
        self._path = []
        cycles = []

        for node in graph:
            if node not in self._visited:
                cycle = self._dfs_cycle_detect(node, graph)
                if cycle:
                    cycles.append(cycle)
                    # Abandoned DFS frames leave entries behind
                    self._rec_stack = set()
                    self._path = []

        return cycles

    def _dfs_cycle_detect(self, node: str, graph: dict[str, set[str]]) -> list[str] | None:
        """DFS-based cycle detection that returns the cycle path.

        Args:
            node: Current node being visited
            graph: The dependency graph

        Returns:
            List representing the cycle path if found, None otherwise
        """
        self._visited.add(node)
        self._rec_stack.add(node)
        self._path.append(node)

        for dep in sorted(graph.get(node, set()) & set(graph)):
            if dep not in self._visited:
                cycle = self._dfs_cycle_detect(dep, graph)
                if cycle:
                    return cycle
            elif dep in self._rec_stack:
                cycle_start_idx = self._path.index(dep)
                return [*self._path[cycle_start_idx:], dep]

        self._rec_stack.remove(node)
        self._path.pop()
        return None

    def _check_missing_refs(self, graph: dict[str, set[str]]) -> set[str]:
        """Return ids referenced as dependencies but not defined as instructions."""
        referenced: set[str] = set()
        for deps in graph.values():
            referenced.update(deps)

        missing = referenced - set(graph)
        if missing:
            logger.debug("missing_references_found", count=len(missing), ids=sorted(missing))

        return missing
