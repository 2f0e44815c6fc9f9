"""Dependency ordering: levels, topological orders and Hasse diagrams.

This module backs the compiler demo, where instructions depend on earlier
instructions and every valid execution sequence is listed.
"""

from discrete_lab.ordering.diagram import HasseDiagram
from discrete_lab.ordering.instruction_set import (
    CycleDetectedError,
    Instruction,
    InstructionSet,
)
from discrete_lab.ordering.levels import compute_levels, covering_edges, hasse_layout
from discrete_lab.ordering.topological import (
    EnumerationTooLargeError,
    all_topological_orders,
    is_topological_order,
    iter_topological_orders,
)
from discrete_lab.ordering.validator import GraphValidator, ValidationReport

__all__ = [
    "CycleDetectedError",
    "EnumerationTooLargeError",
    "GraphValidator",
    "HasseDiagram",
    "Instruction",
    "InstructionSet",
    "ValidationReport",
    "all_topological_orders",
    "compute_levels",
    "covering_edges",
    "hasse_layout",
    "is_topological_order",
    "iter_topological_orders",
]
