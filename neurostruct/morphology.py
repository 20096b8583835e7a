"""Morphological and structural building blocks of neurons and circuits."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass, field
from typing import Optional

Vec3 = tuple[float, float, float]
Matrix4 = tuple[tuple[float, ...], ...]

IDENTITY_TRANSFORM: Matrix4 = tuple(
    tuple(1.0 if row == col else 0.0 for col in range(4)) for row in range(4)
)


def _vec3(value) -> Vec3:
    x, y, z = value
    return (float(x), float(y), float(z))


class DendriteType(enum.Enum):
    """Kind of dendrite."""

    BASAL = 0
    APICAL = 1

    def __str__(self) -> str:
        return self.name


class MorphologicalType(enum.Enum):
    """Morphological class of a neuron."""

    UNDEFINED = 0
    PYRAMIDAL = 1
    INTERNEURON = 2

    def __str__(self) -> str:
        return self.name


class FunctionalType(enum.Enum):
    """Functional class of a neuron."""

    UNDEFINED_FUNCTIONAL_TYPE = 0
    INHIBITORY = 1
    EXCITATORY = 2

    def __str__(self) -> str:
        return self.name


@dataclass(eq=False)
class Node:
    """A point of a morphology with an identifier and a radius."""

    point: Vec3 = (0.0, 0.0, 0.0)
    id: int = 0
    radius: float = 0.0

    def __post_init__(self) -> None:
        self.point = _vec3(self.point)


@dataclass
class Spine:
    """A dendritic spine; its geometry is not modelled."""


@dataclass(eq=False)
class Section:
    """An unbranched run of nodes, linked to its neurite and neighbours."""

    nodes: list[Node] = field(default_factory=list)
    neurite: Optional["Neurite"] = field(default=None, repr=False)
    parent: Optional["Section"] = field(default=None, repr=False)
    children: list["Section"] = field(default_factory=list, repr=False)
    id: int = 0
    forward_neighbors: list["Section"] = field(default_factory=list, repr=False)
    backward_neighbors: list["Section"] = field(default_factory=list, repr=False)

    @property
    def first_node(self) -> Optional[Node]:
        """The node the section starts from, or None when empty."""
        return self.nodes[0] if self.nodes else None

    @first_node.setter
    def first_node(self, node: Node) -> None:
        if self.nodes:
            self.nodes[0] = node
        else:
            self.nodes.append(node)

    def add_node(self, node: Node) -> None:
        """Append a node at the end of the section."""
        self.nodes.append(node)

    def add_forward_node(self, node: Node) -> None:
        """Extend the section at its end."""
        self.nodes.append(node)

    def add_backward_node(self, node: Node) -> None:
        """Extend the section at its start."""
        self.nodes.insert(0, node)

    def add_child(self, section: "Section") -> None:
        """Register a child section."""
        self.children.append(section)

    def add_neighbour(self, section: "Section", node: Node) -> None:
        """Record ``section`` as touching this one at the end point ``node``."""
        at_start = bool(self.nodes) and self.nodes[0] is node
        at_end = bool(self.nodes) and self.nodes[-1] is node
        if not (at_start or at_end):
            raise ValueError("node is not an end point of the section")
        if at_start:
            self.backward_neighbors.append(section)
        if at_end:
            self.forward_neighbors.append(section)


@dataclass(eq=False)
class Neurite:
    """A tree of sections growing out of the soma."""

    first_section: Optional[Section] = None
    morphology: Optional["NeuronMorphology"] = field(default=None, repr=False)
    num_branches: int = 0
    num_bifurcations: int = 0

    def sections(self) -> list[Section]:
        """All sections of the neurite, parents before their children."""
        result: list[Section] = []
        pending = [self.first_section] if self.first_section is not None else []
        while pending:
            section = pending.pop()
            result.append(section)
            pending.extend(reversed(section.children))
        return result

    def add_branch_count(self, count: int) -> None:
        self.num_branches += count

    def add_bifurcation_count(self, count: int) -> None:
        self.num_bifurcations += count


@dataclass(eq=False)
class Dendrite(Neurite):
    """A basal or apical dendrite."""

    dendrite_type: DendriteType = DendriteType.BASAL


@dataclass(eq=False)
class Axon(Neurite):
    """The axon of a neuron."""


@dataclass(eq=False)
class Soma:
    """Cell body described by its contour nodes and center."""

    nodes: list[Node] = field(default_factory=list)
    center: Vec3 = (0.0, 0.0, 0.0)

    def __post_init__(self) -> None:
        self.center = _vec3(self.center)

    def add_node(self, node: Node) -> None:
        """Add a node and move the center to the mean of all node points."""
        self.nodes.append(node)
        count = len(self.nodes)
        self.center = tuple(
            sum(n.point[axis] for n in self.nodes) / count for axis in range(3)
        )

    @property
    def max_radius(self) -> float:
        """Largest distance from the center to any node."""
        return max((math.dist(self.center, n.point) for n in self.nodes), default=0.0)


@dataclass(eq=False)
class NeuronMorphology:
    """Soma plus neurites of a neuron."""

    soma: Optional[Soma] = None
    neurites: list[Neurite] = field(default_factory=list)
    parent_neurons: list["Neuron"] = field(default_factory=list, repr=False)

    def add_neurite(self, neurite: Neurite) -> None:
        self.neurites.append(neurite)

    def add_parent_neuron(self, neuron: "Neuron") -> None:
        self.parent_neurons.append(neuron)

    def dendrites(self) -> list[Dendrite]:
        return [n for n in self.neurites if isinstance(n, Dendrite)]

    def basal_dendrites(self) -> list[Dendrite]:
        return [d for d in self.dendrites() if d.dendrite_type is DendriteType.BASAL]

    def apical_dendrites(self) -> list[Dendrite]:
        return [d for d in self.dendrites() if d.dendrite_type is DendriteType.APICAL]

    def axons(self) -> list[Axon]:
        return [n for n in self.neurites if isinstance(n, Axon)]

    @property
    def apical_dendrite(self) -> Optional[Dendrite]:
        """The first apical dendrite, or None."""
        apicals = self.apical_dendrites()
        return apicals[0] if apicals else None


@dataclass(eq=False)
class Morphology:
    """A generic morphology made of interconnected sections."""

    sections: list[Section] = field(default_factory=list)


@dataclass(eq=False)
class Neuron:
    """A neuron placed in space with its types and optional morphology."""

    morphology: Optional[NeuronMorphology] = field(default=None, repr=False)
    layer: int = 0
    gid: int = 0
    transform: Matrix4 = IDENTITY_TRANSFORM
    mini_column: Optional["MiniColumn"] = field(default=None, repr=False)
    morphological_type: MorphologicalType = MorphologicalType.PYRAMIDAL
    functional_type: FunctionalType = FunctionalType.EXCITATORY


@dataclass
class MiniColumn:
    """A group of neurons inside a column."""

    column: Optional["Column"] = field(default=None, repr=False, compare=False)
    id: int = 0
    neurons: list[Neuron] = field(default_factory=list)

    def add_neuron(self, neuron: Neuron) -> None:
        self.neurons.append(neuron)


@dataclass
class Column:
    """A cortical column holding mini-columns."""

    id: int = 0
    mini_columns: list[MiniColumn] = field(default_factory=list)

    def add_mini_column(self, mini_column: MiniColumn) -> None:
        self.mini_columns.append(mini_column)