"""Unit tests for level assignment, covering edges and Hasse layout."""

import pytest

from discrete_lab.ordering.instruction_set import CycleDetectedError, Instruction, InstructionSet
from discrete_lab.ordering.levels import compute_levels, covering_edges, hasse_layout


def chain(length: int) -> list[Instruction]:
    return [
        Instruction(str(i), f"step {i}", {str(i - 1)} if i > 1 else set())
        for i in range(1, length + 1)
    ]


class TestComputeLevels:
    """Test longest-path level assignment."""

    def test_sample_program(self):
        """Test the documented example."""
        levels = compute_levels(InstructionSet.default())

        assert levels == {"1": 0, "2": 0, "3": 1, "4": 2, "5": 3}

    def test_empty_input(self):
        """Test that no instructions give no levels."""
        assert compute_levels([]) == {}

    def test_independent_nodes_are_level_zero(self):
        """Test that instructions without dependencies sit on level 0."""
        levels = compute_levels([Instruction("a", "A"), Instruction("b", "B")])

        assert levels == {"a": 0, "b": 0}

    def test_level_is_one_above_deepest_dependency(self):
        """Test that the longest path wins over a shortcut edge."""
        instructions = [
            Instruction("1", "A"),
            Instruction("2", "B", {"1"}),
            Instruction("3", "C", {"2"}),
            Instruction("4", "D", {"1", "3"}),
        ]

        levels = compute_levels(instructions)

        assert levels["4"] == 3
        for inst in instructions:
            expected = 1 + max((levels[d] for d in inst.dependencies), default=-1)
            assert levels[inst.id] == expected

    def test_reverse_input_order_still_converges(self):
        """Test a chain listed back to front, needing several passes."""
        levels = compute_levels(list(reversed(chain(6))))

        assert levels == {str(i): i - 1 for i in range(1, 7)}

    def test_dangling_dependency_ignored(self):
        """Test that references to unknown ids do not raise the level."""
        levels = compute_levels([Instruction("1", "A", {"missing"})])

        assert levels == {"1": 0}

    def test_input_not_mutated(self):
        """Test that the instruction set is left untouched."""
        program = InstructionSet.default()
        before = program.graph

        compute_levels(program)

        assert program.graph == before

    def test_cycle_raises(self):
        """Test that cyclic input raises instead of looping forever."""
        instructions = [Instruction("a", "A", {"b"}), Instruction("b", "B", {"a"})]

        with pytest.raises(CycleDetectedError, match="Cycle detected"):
            compute_levels(instructions)


class TestCoveringEdges:
    """Test the transitive reduction used by the Hasse diagram."""

    def test_sample_program(self):
        """Test that a program without shortcuts keeps every edge."""
        edges = covering_edges(InstructionSet.default())

        assert edges == {("1", "3"), ("2", "3"), ("3", "4"), ("4", "5")}

    def test_implied_edge_removed(self):
        """Test that an edge implied by a chain is dropped."""
        instructions = [
            Instruction("1", "A"),
            Instruction("2", "B", {"1"}),
            Instruction("3", "C", {"1", "2"}),
        ]

        assert covering_edges(instructions) == {("1", "2"), ("2", "3")}


class TestHasseLayout:
    """Test node placement."""

    def test_sample_program_positions(self):
        """Test positions for the sample program."""
        positions = hasse_layout(InstructionSet.default())

        assert positions["1"] == (-1.75, 12.0, 0.0)
        assert positions["2"] == (1.75, 12.0, 0.0)
        assert positions["3"] == (0.0, 8.0, 0.0)
        assert positions["5"] == (0.0, 0.0, 0.0)

    def test_single_node_uses_minimum_height(self):
        """Test that the maximum level is at least 1."""
        positions = hasse_layout([Instruction("1", "Only")])

        assert positions == {"1": (0.0, 4.0, 0.0)}

    def test_custom_spacing(self):
        """Test that spacing parameters scale the layout."""
        positions = hasse_layout(
            InstructionSet.default(),
            vertical_spacing=1.0,
            horizontal_spacing=2.0,
        )

        assert positions["1"] == (-1.0, 3.0, 0.0)
        assert positions["4"] == (0.0, 1.0, 0.0)
