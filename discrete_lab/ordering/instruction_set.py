"""Instruction sets: the dependency DAG behind the compiler ordering demo.

This module provides the Instruction record, the editable InstructionSet
collection and the acyclicity check shared by the level and ordering
algorithms. Cycle detection uses Python's graphlib.TopologicalSorter.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from graphlib import CycleError, TopologicalSorter

import structlog

logger = structlog.get_logger(__name__)


class CycleDetectedError(Exception):
    """Exception raised when a cycle is detected in the dependency graph.

    A cycle means that instructions have circular dependencies, so no level
    assignment or execution order exists.
    """

    def __init__(self, message: str, cycle: list[str] | None = None):
        """Initialize the exception with a descriptive message.

        Args:
            message: Description of the cycle detection error
            cycle: Instruction ids forming the cycle, first id repeated at the end
        """
        super().__init__(message)
        self.message = message
        self.cycle = cycle or []


@dataclass(frozen=True)
class Instruction:
    """A single instruction and the ids of the instructions it depends on."""

    id: str
    name: str
    dependencies: frozenset[str] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        # Accept any iterable of ids, store an immutable set
        object.__setattr__(self, "dependencies", frozenset(self.dependencies))


def dependency_map(instructions: Iterable[Instruction]) -> dict[str, set[str]]:
    """Map every instruction id to its dependencies, dropping dangling ids.

    Args:
        instructions: Instructions to index

    Returns:
        Dictionary of id -> set of dependency ids that exist in the input
    """
    instructions = list(instructions)
    known = {inst.id for inst in instructions}
    graph: dict[str, set[str]] = {}
    dangling = 0

    for inst in instructions:
        deps = {dep for dep in inst.dependencies if dep in known}
        dangling += len(inst.dependencies) - len(deps)
        graph[inst.id] = deps

    if dangling:
        logger.debug("dangling_dependencies_ignored", count=dangling)

    return graph


def ensure_acyclic(instructions: Iterable[Instruction]) -> dict[str, set[str]]:
    """Raise if the dependencies among the instructions contain a cycle.

    Args:
        instructions: Instructions to check

    Returns:
        The dependency map of the instructions, as built by dependency_map

    Raises:
        CycleDetectedError: If a cycle is detected in the dependency graph
    """
    graph = dependency_map(instructions)
    try:
        TopologicalSorter(graph).prepare()
    except CycleError as e:
        cycle = list(e.args[1]) if len(e.args) > 1 else []
        error_msg = f"Cycle detected in dependency graph: {' -> '.join(cycle)}"
        logger.exception(
            "cycle_detected_in_graph",
            cycle=cycle,
            instruction_count=len(graph),
        )
        raise CycleDetectedError(error_msg, cycle) from e

    return graph


class InstructionSet:
    """Editable, ordered collection of instructions.

    Mirrors what the compiler page lets a user do: add an instruction that
    depends on existing ones, remove an instruction (its id disappears from
    every dependency list), and reset to the sample program.

    Example:
        >>> program = InstructionSet()
        >>> load = program.add_instruction("Load A")
        >>> program.add_instruction("Print A", {load.id}).id
        '2'
    """

    def __init__(self, instructions: Iterable[Instruction] = ()):
        """Initialize the set, keeping the given instruction order."""
        self._instructions: dict[str, Instruction] = {}
        for inst in instructions:
            self._instructions[inst.id] = inst

        logger.debug("instruction_set_initialized", instruction_count=len(self._instructions))

    @classmethod
    def default(cls) -> "InstructionSet":
        """Build the sample program shown when the compiler page opens."""
        return cls(
            [
                Instruction("1", "Load A"),
                Instruction("2", "Load B"),
                Instruction("3", "Add A,B", frozenset({"1", "2"})),
                Instruction("4", "Store C", frozenset({"3"})),
                Instruction("5", "Print C", frozenset({"4"})),
            ],
        )

    def __len__(self) -> int:
        return len(self._instructions)

    def __iter__(self):
        return iter(self._instructions.values())

    def __contains__(self, instruction_id: object) -> bool:
        return instruction_id in self._instructions

    def get(self, instruction_id: str) -> Instruction | None:
        return self._instructions.get(instruction_id)

    @property
    def instructions(self) -> list[Instruction]:
        """Instructions in insertion order."""
        return list(self._instructions.values())

    @property
    def graph(self) -> dict[str, set[str]]:
        """Dependency mapping id -> dependency ids, as stored."""
        return {inst.id: set(inst.dependencies) for inst in self._instructions.values()}

    def _next_id(self) -> str:
        candidate = len(self._instructions) + 1
        while str(candidate) in self._instructions:
            candidate += 1
        return str(candidate)

    def add_instruction(self, name: str, dependencies: Iterable[str] = ()) -> Instruction:
        """Append a new instruction with the next free numeric id.

        Args:
            name: Display name of the instruction
            dependencies: Ids of instructions it depends on

        Returns:
            The created Instruction

        Raises:
            ValueError: If the name is empty
        """
        if not name.strip():
            error_msg = "Instruction name must not be empty"
            logger.error("empty_instruction_name")
            raise ValueError(error_msg)

        instruction = Instruction(self._next_id(), name, frozenset(dependencies))
        self._instructions[instruction.id] = instruction

        logger.debug(
            "instruction_added",
            instruction_id=instruction.id,
            dependencies=sorted(instruction.dependencies),
        )
        return instruction

    def remove_instruction(self, instruction_id: str) -> None:
        """Remove an instruction and every dependency on it.

        Unknown ids are ignored.
        """
        if instruction_id not in self._instructions:
            logger.warning("remove_unknown_instruction", instruction_id=instruction_id)
            return

        del self._instructions[instruction_id]
        for inst_id, inst in self._instructions.items():
            if instruction_id in inst.dependencies:
                self._instructions[inst_id] = Instruction(
                    inst.id,
                    inst.name,
                    inst.dependencies - {instruction_id},
                )

        logger.debug("instruction_removed", instruction_id=instruction_id)

    def copy(self) -> "InstructionSet":
        """Create an independent copy of the instruction set."""
        return InstructionSet(self._instructions.values())
