"""Text exports of the Hasse diagram of an instruction set."""

from collections.abc import Iterable

import structlog

from discrete_lab.ordering.instruction_set import Instruction
from discrete_lab.ordering.levels import compute_levels, covering_edges

logger = structlog.get_logger(__name__)


class HasseDiagram:
    """Hasse diagram of the dependency order: covering edges only.

    Example:
        >>> print(HasseDiagram(InstructionSet.default()).render("mermaid"))
        graph BT
            n1["Load A"]
            ...
            n1 --> n3
    """

    def __init__(self, instructions: Iterable[Instruction]):
        self.instructions = list(instructions)
        self.levels = compute_levels(self.instructions)
        self.edges = sorted(covering_edges(self.instructions))

    def render(self, output_format: str = "mermaid") -> str:
        """Render the diagram.

        Args:
            output_format: 'mermaid' or 'dot' (case-insensitive)

        Raises:
            ValueError: If an unsupported format is requested
        """
        output_format = output_format.lower().strip()

        if output_format == "mermaid":
            return self._render_mermaid()
        if output_format == "dot":
            return self._render_dot()
        error_msg = f"Unsupported format: {output_format}. Use 'mermaid' or 'dot'."
        raise ValueError(error_msg)

    @staticmethod
    def _mermaid_id(instruction_id: str) -> str:
        return "n" + "".join(ch if ch.isalnum() else "_" for ch in instruction_id)

    def _render_mermaid(self) -> str:
        lines = ["graph BT"]

        if not self.instructions:
            lines.append('    empty["Empty Graph"]')
            return "\n".join(lines)

        for inst in self.instructions:
            label = inst.name.replace('"', "#quot;")
            lines.append(f'    {self._mermaid_id(inst.id)}["{label}"]')

        # Arrow points from dependency up to the instruction that needs it
        lines.extend(
            f"    {self._mermaid_id(dep)} --> {self._mermaid_id(node)}"
            for dep, node in self.edges
        )
        return "\n".join(lines)

    def _render_dot(self) -> str:
        def escape(s: str) -> str:
            return s.replace('"', '\\"')

        lines = ["digraph Hasse {", "    rankdir=BT;", "    node [shape=box, style=rounded];"]

        if not self.instructions:
            lines.append('    empty [label="Empty Graph"];')
        else:
            for level in sorted(set(self.levels.values())):
                members = " ".join(
                    f'"{escape(inst.id)}";'
                    for inst in self.instructions
                    if self.levels[inst.id] == level
                )
                lines.append(f"    {{ rank=same; {members} }}")
            lines.extend(
                f'    "{escape(inst.id)}" [label="{escape(inst.name)}"];'
                for inst in self.instructions
            )
            lines.extend(f'    "{escape(dep)}" -> "{escape(node)}";' for dep, node in self.edges)

        lines.append("}")
        logger.debug("hasse_diagram_rendered", format="dot", edge_count=len(self.edges))
        return "\n".join(lines)
