import logging

import pytest

from neurostruct.containers import NeuronsMap, SynapsesMap, node_positions
from neurostruct.errors import NsolError
from neurostruct.morphology import Neuron, Node


class _Synapse:
    pass


def test_synapse_map():
    synapse = _Synapse()
    same_synapse = synapse
    sm = SynapsesMap()
    sm.add_synapse(0, synapse)
    assert len(sm) == 1
    with pytest.raises(NsolError):
        sm.add_synapse(0, same_synapse)
    assert len(sm) == 1
    sm.clear()
    assert len(sm) == 0
    assert not sm


def test_synapse_map_multiple_per_gid():
    first, second = _Synapse(), _Synapse()
    sm = SynapsesMap()
    sm.add_synapse(4, first)
    sm.add_synapse(4, second)
    sm.add_synapse(2, first)
    assert sm.synapses_of(4) == [first, second]
    assert sm.synapses_of(2) == [first]
    assert sm.synapses_of(9) == []
    assert 4 in sm and 9 not in sm
    assert sorted(gid for gid, _ in sm) == [2, 4, 4]


def test_neurons_map_add_and_duplicate(caplog):
    neurons = NeuronsMap()
    first = Neuron(gid=3)
    assert neurons.add_neuron(first) is True
    with caplog.at_level(logging.WARNING):
        assert neurons.add_neuron(Neuron(gid=3)) is False
    assert neurons[3] is first
    assert len(neurons) == 1
    assert "gid 3" in caplog.text


def test_node_positions():
    nodes = [Node((1, 2, 3)), Node((4, 5, 6))]
    assert node_positions(nodes) == [(1.0, 2.0, 3.0), (4.0, 5.0, 6.0)]
    assert node_positions([]) == []