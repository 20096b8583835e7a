import pytest

from neurostruct.morphology import (
    IDENTITY_TRANSFORM,
    Axon,
    Column,
    Dendrite,
    DendriteType,
    FunctionalType,
    MiniColumn,
    MorphologicalType,
    Neuron,
    NeuronMorphology,
    Node,
    Section,
    Soma,
)


def test_dendrite_type_str():
    basal = Dendrite(dendrite_type=DendriteType.BASAL)
    apical = Dendrite(dendrite_type=DendriteType.APICAL)
    assert str(basal.dendrite_type) == "BASAL"
    assert str(apical.dendrite_type) == "APICAL"


def test_dendrite_default_and_explicit_type():
    assert Dendrite().dendrite_type is DendriteType.BASAL
    assert Dendrite(dendrite_type=DendriteType.APICAL).dendrite_type is DendriteType.APICAL


def test_node_point_is_float_tuple():
    node = Node((1, 2, 3), 7, 0.5)
    assert node.point == (1.0, 2.0, 3.0)
    assert node.id == 7


def test_section_forward_backward_nodes():
    a, b, c = Node(), Node(), Node()
    section = Section()
    section.add_forward_node(a)
    section.add_forward_node(c)
    section.add_backward_node(b)
    assert section.nodes == [b, a, c]
    assert section.first_node is b


def test_section_first_node_setter():
    section = Section()
    assert section.first_node is None
    first, other = Node(), Node()
    section.first_node = first
    section.add_node(other)
    assert section.nodes == [first, other]


def test_section_neighbours():
    start, end = Node(), Node()
    section = Section()
    section.add_forward_node(start)
    section.add_forward_node(end)
    before, after = Section(), Section()
    section.add_neighbour(before, start)
    section.add_neighbour(after, end)
    assert section.backward_neighbors == [before]
    assert section.forward_neighbors == [after]


def test_section_neighbour_requires_end_point():
    section = Section(nodes=[Node(), Node(), Node()])
    with pytest.raises(ValueError):
        section.add_neighbour(Section(), section.nodes[1])


def test_neurite_sections_and_counts():
    root, left, right, leaf = Section(), Section(), Section(), Section()
    root.add_child(left)
    root.add_child(right)
    left.add_child(leaf)
    axon = Axon(first_section=root)
    axon.add_branch_count(2)
    axon.add_bifurcation_count(1)
    sections = axon.sections()
    assert sections[0] is root
    assert set(map(id, sections)) == {id(root), id(left), id(right), id(leaf)}
    assert sections.index(left) < sections.index(leaf)
    assert axon.num_branches == 2
    assert axon.num_bifurcations == 1


def test_empty_neurite_has_no_sections():
    assert Dendrite().sections() == []


def test_soma_center_is_node_mean():
    soma = Soma()
    soma.add_node(Node((0, 0, 0)))
    soma.add_node(Node((2, 4, 6)))
    assert soma.center == pytest.approx((1.0, 2.0, 3.0))


def test_soma_max_radius():
    soma = Soma()
    soma.add_node(Node((1, 0, 0)))
    soma.add_node(Node((-1, 0, 0)))
    assert soma.max_radius == pytest.approx(1.0)
    assert Soma().max_radius == 0


def test_neuron_morphology_filters():
    morphology = NeuronMorphology(Soma())
    basal = Dendrite(dendrite_type=DendriteType.BASAL)
    apical = Dendrite(dendrite_type=DendriteType.APICAL)
    axon = Axon()
    for neurite in (basal, apical, axon):
        morphology.add_neurite(neurite)
    assert len(morphology.neurites) == 3
    assert morphology.dendrites() == [basal, apical]
    assert morphology.basal_dendrites() == [basal]
    assert morphology.apical_dendrites() == [apical]
    assert morphology.apical_dendrite is apical
    assert morphology.axons() == [axon]


def test_empty_neuron_morphology():
    morphology = NeuronMorphology()
    assert morphology.soma is None
    assert morphology.apical_dendrite is None
    assert morphology.axons() == []
    assert morphology.parent_neurons == []


def test_parent_neurons():
    morphology = NeuronMorphology(Soma())
    neuron = Neuron(morphology)
    morphology.add_parent_neuron(neuron)
    assert morphology.parent_neurons == [neuron]


def test_neuron_defaults():
    neuron = Neuron()
    assert neuron.transform == IDENTITY_TRANSFORM
    assert neuron.morphological_type is MorphologicalType.PYRAMIDAL
    assert neuron.functional_type is FunctionalType.EXCITATORY


def test_column_and_minicolumn():
    column = Column(3)
    mini = MiniColumn(column, 1)
    column.add_mini_column(mini)
    neuron = Neuron(gid=5, mini_column=mini)
    mini.add_neuron(neuron)
    assert column.mini_columns == [mini]
    assert mini.column is column
    assert mini.neurons == [neuron]


def test_column_equality_by_content():
    assert Column() == Column()
    assert Column(10) != Column()
    first, second = Column(), Column()
    first.add_mini_column(MiniColumn(first, 1))
    assert first != second