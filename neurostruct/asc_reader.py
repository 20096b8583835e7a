"""Reader for neuron morphologies stored in the Neurolucida ASC format."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Optional

from .errors import check
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
)

_log = logging.getLogger(__name__)

_SIGNED = r"-?\d+\.?\d*"
_UNSIGNED = r"\d+\.?\d*"

_DATA_LINE = re.compile(
    rf"\s*\(\s*({_SIGNED})\s+({_SIGNED})\s+({_SIGNED})\s+({_UNSIGNED})\s*\)\s*\r?",
    re.ASCII,
)
_SPINE_LINE = re.compile(
    rf"\s*<\s*\(\s*{_SIGNED}\s+{_SIGNED}\s+{_SIGNED}\s+{_UNSIGNED}\s*\)\s*>\s*\r?",
    re.ASCII,
)
_SEPARATOR = re.compile(r"\s*\|\s*", re.ASCII)
_DOT_MARKER = re.compile(r"\s*\(\s*dot\s*\r?", re.ASCII)


def _directive(name: str) -> re.Pattern[str]:
    return re.compile(rf".*\(\s*{name}\s*\)\s*\r?", re.ASCII)


_BASAL = _directive("dendrite")
_APICAL = _directive("apical")
_CELL_BODY = _directive("cellbody")
_AXON = _directive("axon")


def _strip_comment(line: str) -> str:
    """Drop everything from the first ';' onwards."""
    return line.split(";", 1)[0]


def _count_brackets(line: str) -> int:
    """Opening minus closing round brackets in ``line``."""
    return line.count("(") - line.count(")")


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


class _Session:
    """State of one file being read: the shared line stream and node numbering."""

    def __init__(self, reader: "AscReader", lines: Iterable[str], reposition: bool):
        self.reader = reader
        self.lines: Iterator[str] = iter(lines)
        self.reposition = reposition
        self.moved_nodes: list[Node] = []
        self._last_id = 0

    def next_line(self) -> Optional[str]:
        return next(self.lines, None)

    def parse_data_line(self, match: re.Match[str]) -> Node:
        x, y, z, diameter = (float(group) for group in match.groups())
        self._last_id += 1
        node = self.reader.node_class((x, y, z), self._last_id, diameter / 2.0)
        if self.reposition:
            self.moved_nodes.append(node)
        return node

    def new_section(self, neurite: Neurite, parent: Optional[Section]) -> Section:
        section = self.reader.section_class()
        section.neurite = neurite
        section.parent = parent
        return section

    def read_morphology(self) -> NeuronMorphology:
        reader = self.reader
        morphology = reader.morphology_class(reader.soma_class())

        for raw in self.lines:
            line = _strip_comment(raw).lower()
            neurite: Optional[Neurite] = None
            if _BASAL.fullmatch(line):
                neurite = reader.dendrite_class(dendrite_type=DendriteType.BASAL)
            elif _APICAL.fullmatch(line):
                neurite = reader.dendrite_class(dendrite_type=DendriteType.APICAL)
            elif _CELL_BODY.fullmatch(line):
                self.read_soma(morphology)
            elif _AXON.fullmatch(line):
                neurite = reader.axon_class()
            if neurite is not None:
                morphology.add_neurite(neurite)
                neurite.morphology = morphology
                self.read_neurite(neurite)

        if self.reposition:
            cx, cy, cz = morphology.soma.center
            for node in self.moved_nodes:
                x, y, z = node.point
                node.point = (x - cx, y - cy, z - cz)
            morphology.soma.center = (0.0, 0.0, 0.0)
        return morphology

    def read_soma(self, morphology: NeuronMorphology) -> None:
        level = 1
        while level > 0:
            raw = self.next_line()
            if raw is None:
                break
            line = _strip_comment(raw)
            level += _count_brackets(line)
            match = _DATA_LINE.fullmatch(line)
            if match:
                morphology.soma.add_node(self.parse_data_line(match))

    def read_neurite(self, neurite: Neurite) -> None:
        parent_sections: list[Section] = []
        current = self.new_section(neurite, None)
        neurite.first_section = current
        parent: Optional[Section] = None
        first_node = True
        level = 1

        while level > 0:
            raw = self.next_line()
            if raw is None:
                break
            line = _strip_comment(raw)

            match = _DATA_LINE.fullmatch(line)
            if match:
                node = self.parse_data_line(match)
                if first_node:
                    current.first_node = node
                    first_node = False
                else:
                    current.add_node(node)
            elif _SEPARATOR.fullmatch(line):
                check(parent is not None, "Section separator found outside a branch")
                current = self.new_section(neurite, parent)
                parent.add_child(current)
                neurite.add_branch_count(1)
            elif _SPINE_LINE.fullmatch(line):
                _log.debug("Spines still not implemented: %s", line)
            else:
                bracket_count = _count_brackets(line)
                level += bracket_count
                if bracket_count < 0 and level > 1:
                    if parent_sections:
                        parent_sections.pop()
                    parent = parent_sections[-1] if parent_sections else None
                elif bracket_count > 0:
                    if _DOT_MARKER.fullmatch(line.lower()):
                        level += self._skip_marker()
                    else:
                        parent_sections.append(current)
                        neurite.add_bifurcation_count(1)
                        neurite.add_branch_count(1)
                        parent = current
                        current = self.new_section(neurite, parent)
                        parent.add_child(current)

    def _skip_marker(self) -> int:
        """Consume lines until one changes the bracket level; return that change."""
        bracket_count = 0
        while bracket_count == 0:
            raw = self.next_line()
            if raw is None:
                break
            bracket_count = _count_brackets(_strip_comment(raw))
        return bracket_count


@dataclass
class AscReader:
    """Builds neuron morphologies from ASC files.

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
        lines = _read_lines(file_name)
        if lines is None:
            return None
        return _Session(self, lines, reposition).read_morphology()