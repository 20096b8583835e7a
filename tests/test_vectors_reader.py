import pytest

from neurostruct.morphology import Morphology
from neurostruct.vectors_reader import load_morphology


def _points(count):
    result = []
    for index in range(count):
        result.extend([float(index), float(index) * 2.0, float(index) * 3.0, 0.5 + index])
    return result


@pytest.mark.parametrize(
    "points, segments",
    [
        ([1.0, 2.0, 3.0], []),
        (_points(2), [0]),
        (_points(2), [0, 1, 1]),
    ],
)
def test_bad_lengths_return_none(points, segments):
    assert load_morphology(points, segments) is None


def test_empty_input_gives_empty_morphology():
    morphology = load_morphology([], [])
    assert isinstance(morphology, Morphology)
    assert morphology.sections == []


def test_chain_becomes_single_section_with_node_data():
    points = _points(3)
    morphology = load_morphology(points, [0, 1, 1, 2])
    assert len(morphology.sections) == 1
    nodes = morphology.sections[0].nodes
    assert [node.id for node in nodes] == [0, 1, 2]
    assert nodes[2].point == (points[8], points[9], points[10])
    assert nodes[2].radius == points[11]


def test_backward_extension_prepends_node():
    morphology = load_morphology(_points(3), [1, 2, 0, 1])
    assert len(morphology.sections) == 1
    assert [node.id for node in morphology.sections[0].nodes] == [0, 1, 2]


def test_branching_sections_are_grouped_and_linked():
    morphology = load_morphology(_points(4), [0, 1, 1, 2, 1, 3])
    assert len(morphology.sections) == 1
    root = morphology.sections[0]
    assert [node.id for node in root.nodes] == [0, 1]
    assert len(root.forward_neighbors) == 2
    branch_ends = sorted(section.nodes[-1].id for section in root.forward_neighbors)
    assert branch_ends == [2, 3]
    for branch in root.forward_neighbors:
        assert branch.nodes[0] is root.nodes[-1]
        assert root in branch.backward_neighbors


def test_disconnected_components_each_get_a_representative():
    morphology = load_morphology(_points(4), [0, 1, 2, 3])
    assert len(morphology.sections) == 2
    ids = [[node.id for node in section.nodes] for section in morphology.sections]
    assert ids == [[0, 1], [2, 3]]
    for section in morphology.sections:
        assert section.forward_neighbors == []
        assert section.backward_neighbors == []


def test_points_without_segments_give_no_sections():
    morphology = load_morphology(_points(5), [])
    assert morphology.sections == []


def test_segment_index_out_of_range_raises():
    with pytest.raises(ValueError):
        load_morphology(_points(2), [0, 5])