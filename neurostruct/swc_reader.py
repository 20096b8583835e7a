"""Reader for neuron morphologies stored in the SWC format."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import Optional

from .morphology import (
    Axon,
    Dendrite,
    DendriteType,
    Neurite,
    Neuron,
    NeuronMorphology,
    Node,
    Section,
    Soma,
    Vec3,
)

_log = logging.getLogger(__name__)

_C_WHITESPACE = frozenset(" \t\n\v\f\r")


class SwcNodeType(enum.IntEnum):
    """Element types of the SWC format that the reader understands."""

    SOMA = 1
    AXON = 2
    BASAL = 3
    APICAL = 4


@dataclass
class _SwcLine:
    """One parsed SWC sample line."""

    id: int
    type: int
    xyz: Vec3
    radius: float
    parent: int
    children: list[int] = field(default_factory=list)


def _parse_line(line: str) -> Optional[_SwcLine]:
    tokens = line.split()
    if len(tokens) < 7:
        return None
    try:
        node_id = int(tokens[0])
        node_type = int(tokens[1])
        xyz = (float(tokens[2]), float(tokens[3]), float(tokens[4]))
        radius = float(tokens[5])
        parent = int(tokens[6])
    except ValueError:
        return None
    if node_id < 0 or node_type < 0:
        return None
    return _SwcLine(node_id, node_type, xyz, radius, parent)


def _read_lines(file_name: str) -> Optional[list[str]]:
    try:
        with open(file_name, encoding="utf-8", errors="replace", newline="") as handle:
            content = handle.read()
    except OSError:
        _log.warning("Error opening file: %s", file_name)
        return None
    lines = content.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return lines


@dataclass
class SwcReader:
    """Builds neuron morphologies from SWC files.

    The classes used for every created element can be replaced to build
    specialised object hierarchies.
    """

    node_class: type = Node
    section_class: type = Section
    dendrite_class: type = Dendrite
    axon_class: type = Axon
    soma_class: type = Soma
    morphology_class: type = NeuronMorphology
    neuron_class: type = Neuron

    def read_neuron(self, file_name: str, reposition: bool = False) -> Optional[Neuron]:
        """Read ``file_name`` into a new neuron, or None if it cannot be opened."""
        morphology = self.read_morphology(file_name, reposition)
        if morphology is None:
            return None
        neuron = self.neuron_class(morphology)
        morphology.add_parent_neuron(neuron)
        return neuron

    def read_morphology(
        self, file_name: str, reposition: bool = False
    ) -> Optional[NeuronMorphology]:
        """Read ``file_name`` into a morphology, or None if it cannot be opened.

        With ``reposition`` the soma center is moved to the origin and every
        node is shifted accordingly.
        """
        raw_lines = _read_lines(file_name)
        if raw_lines is None:
            return None

        morphology = self.morphology_class(self.soma_class())
        reposition_nodes: list[Node] = []
        lines: dict[int, _SwcLine] = {}

        for line_number, text in enumerate(raw_lines, start=1):
            if text.lstrip(" \r\t").startswith("#"):
                continue
            fields = 1 + sum(1 for char in text if char in _C_WHITESPACE)
            if fields < 7:
                _log.warning(
                    'Skipping line %d in file %s: "%s" ( not enough fields found )',
                    line_number, file_name, text,
                )
                continue
            parsed = _parse_line(text)
            if parsed is None:
                _log.warning(
                    'Skipping line %d in file %s: "%s" ( line format not recognised )',
                    line_number, file_name, text,
                )
                continue
            lines[parsed.id] = parsed

        ordered_ids = sorted(lines)
        for node_id in ordered_ids:
            parent = lines[node_id].parent
            if parent == -1:
                continue
            parent_line = lines.get(parent)
            if parent_line is None:
                _log.warning("Parent %d of node %d not found", parent, node_id)
                continue
            parent_line.children.append(node_id)

        soma_children: list[int] = []
        for node_id in ordered_ids:
            line = lines[node_id]
            if line.type != SwcNodeType.SOMA:
                continue
            node = self.node_class(line.xyz, line.id, line.radius)
            if reposition:
                reposition_nodes.append(node)
            morphology.soma.add_node(node)
            soma_children.extend(
                child for child in line.children if lines[child].type != SwcNodeType.SOMA
            )

        for first_id in soma_children:
            node_type = lines[first_id].type
            if node_type == SwcNodeType.BASAL:
                neurite = self.dendrite_class(dendrite_type=DendriteType.BASAL)
            elif node_type == SwcNodeType.APICAL:
                neurite = self.dendrite_class(dendrite_type=DendriteType.APICAL)
            elif node_type == SwcNodeType.AXON:
                neurite = self.axon_class()
            else:
                _log.warning("Unexpected line type value in line %d", first_id)
                continue
            morphology.add_neurite(neurite)
            neurite.morphology = morphology
            self._read_neurite(neurite, lines, first_id, reposition_nodes, reposition)

        if reposition:
            cx, cy, cz = morphology.soma.center
            for node in reposition_nodes:
                x, y, z = node.point
                node.point = (x - cx, y - cy, z - cz)
            morphology.soma.center = (0.0, 0.0, 0.0)

        return morphology

    def _read_neurite(
        self,
        neurite: Neurite,
        lines: dict[int, _SwcLine],
        init_id: int,
        nodes: list[Node],
        reposition: bool,
    ) -> None:
        pending: list[tuple[int, Section]] = []

        section = self.section_class()
        section.neurite = neurite
        section.parent = None
        line = lines[init_id]
        node = self.node_class(line.xyz, init_id, line.radius)
        section.first_node = node
        self._read_section(neurite, section, node, pending, lines, nodes, reposition)
        neurite.first_section = section

        while pending:
            node_id, parent_section = pending.pop()
            section = self.section_class()
            section.neurite = neurite
            section.parent = parent_section
            line = lines[node_id]
            node = self.node_class(line.xyz, node_id, line.radius)
            section.add_node(node)
            parent_section.add_child(section)
            self._read_section(neurite, section, node, pending, lines, nodes, reposition)

    def _read_section(
        self,
        neurite: Neurite,
        section: Section,
        node: Node,
        pending: list[tuple[int, Section]],
        lines: dict[int, _SwcLine],
        nodes: list[Node],
        reposition: bool,
    ) -> None:
        if reposition:
            nodes.append(node)

        line = lines[node.id]
        while len(line.children) == 1:
            node_id = line.children[0]
            line = lines[node_id]
            next_node = self.node_class(line.xyz, node_id, line.radius)
            if reposition:
                nodes.append(next_node)
            section.add_node(next_node)

        if len(line.children) > 1:
            neurite.add_branch_count(len(line.children))
            neurite.add_bifurcation_count(1)
            pending.extend((child, section) for child in line.children)