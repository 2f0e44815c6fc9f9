"""Unit tests for topological order enumeration."""

import math
from itertools import permutations

import pytest

from discrete_lab.ordering.instruction_set import CycleDetectedError, Instruction, InstructionSet
from discrete_lab.ordering.topological import (
    EnumerationTooLargeError,
    all_topological_orders,
    is_topological_order,
    iter_topological_orders,
)

# Test constants
INDEPENDENT_COUNT = 4


def independent(count: int) -> list[Instruction]:
    return [Instruction(str(i), f"op {i}") for i in range(count)]


@pytest.fixture
def diamond() -> list[Instruction]:
    """Fixture providing a diamond: 1 before 2 and 3, both before 4."""
    return [
        Instruction("1", "A"),
        Instruction("2", "B", {"1"}),
        Instruction("3", "C", {"1"}),
        Instruction("4", "D", {"2", "3"}),
    ]


class TestEnumeration:
    """Test the set of orders produced."""

    def test_sample_program(self):
        """Test the two orders of the sample program."""
        orders = all_topological_orders(InstructionSet.default())

        assert orders == [["1", "2", "3", "4", "5"], ["2", "1", "3", "4", "5"]]

    def test_empty_input_has_one_empty_order(self):
        """Test that zero instructions give exactly one empty order."""
        assert all_topological_orders([]) == [[]]

    def test_independent_nodes_give_factorial_orders(self):
        """Test that N unrelated instructions give N! distinct orders."""
        orders = all_topological_orders(independent(INDEPENDENT_COUNT))

        assert len(orders) == math.factorial(INDEPENDENT_COUNT)
        assert len({tuple(order) for order in orders}) == len(orders)

    def test_chain_has_single_order(self):
        """Test that a total order has exactly one extension."""
        instructions = [
            Instruction("c", "third", {"b"}),
            Instruction("a", "first"),
            Instruction("b", "second", {"a"}),
        ]

        assert all_topological_orders(instructions) == [["a", "b", "c"]]

    def test_matches_brute_force(self, diamond):
        """Test that enumeration equals filtering every permutation."""
        ids = [inst.id for inst in diamond]
        expected = {
            perm for perm in permutations(ids) if is_topological_order(list(perm), diamond)
        }

        orders = {tuple(order) for order in all_topological_orders(diamond)}

        assert orders == expected
        assert orders == {("1", "2", "3", "4"), ("1", "3", "2", "4")}

    def test_every_order_respects_dependencies(self, diamond):
        """Test that each produced order is valid."""
        for order in all_topological_orders(diamond):
            assert is_topological_order(order, diamond)

    def test_dangling_dependency_ignored(self):
        """Test that unknown dependency ids do not block an instruction."""
        orders = all_topological_orders([Instruction("1", "A", {"gone"})])

        assert orders == [["1"]]

    def test_cycle_raises(self):
        """Test that cyclic input is rejected."""
        instructions = [Instruction("a", "A", {"b"}), Instruction("b", "B", {"a"})]

        with pytest.raises(CycleDetectedError):
            all_topological_orders(instructions)


class TestLimits:
    """Test result caps and size limits."""

    def test_limit_caps_result(self):
        """Test that limit bounds the number of orders."""
        orders = all_topological_orders(independent(INDEPENDENT_COUNT), limit=5)

        assert len(orders) == 5

    def test_max_nodes_rejects_large_input(self):
        """Test that oversize input raises before enumerating."""
        with pytest.raises(EnumerationTooLargeError, match="Refusing"):
            all_topological_orders(independent(INDEPENDENT_COUNT), max_nodes=3)

    def test_iterator_is_lazy(self):
        """Test that the generator yields orders one at a time."""
        orders = iter_topological_orders(independent(10))

        assert next(orders) == [str(i) for i in range(10)]


class TestIsTopologicalOrder:
    """Test the order checker."""

    def test_valid_order(self):
        """Test an order that respects dependencies."""
        assert is_topological_order(["2", "1", "3", "4", "5"], InstructionSet.default())

    def test_dependency_after_dependent(self):
        """Test an order placing an instruction before its dependency."""
        assert not is_topological_order(["3", "1", "2", "4", "5"], InstructionSet.default())

    def test_missing_or_repeated_ids(self):
        """Test orders that are not permutations."""
        program = InstructionSet.default()

        assert not is_topological_order(["1", "2", "3", "4"], program)
        assert not is_topological_order(["1", "1", "3", "4", "5"], program)
