"""Keyed containers for neurons and synapses, plus node helpers."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from typing import Any

from .errors import NsolError
from .morphology import Neuron, Node, Vec3

_log = logging.getLogger(__name__)


class NeuronsMap(dict):
    """Neurons indexed by their gid."""

    def add_neuron(self, neuron: Neuron) -> bool:
        """Store ``neuron`` unless its gid is taken; return whether it was stored."""
        if neuron.gid in self:
            _log.warning(
                "Warning: neuron with gid %d already exists in the dataset", neuron.gid
            )
            return False
        self[neuron.gid] = neuron
        return True


class SynapsesMap:
    """Synapses indexed by neuron gid; a gid may hold many synapses."""

    def __init__(self) -> None:
        self._by_gid: dict[int, list[Any]] = {}

    def add_synapse(self, neuron_gid: int, synapse: Any) -> None:
        """Add ``synapse`` under ``neuron_gid``; the same synapse twice is an error."""
        entries = self._by_gid.setdefault(neuron_gid, [])
        if any(existing is synapse for existing in entries):
            message = (
                f"Warning: synapse with neuron gid {neuron_gid} "
                "already exists in the dataset"
            )
            _log.error(message)
            raise NsolError(message)
        entries.append(synapse)

    def synapses_of(self, neuron_gid: int) -> list[Any]:
        """Synapses stored under ``neuron_gid``, in insertion order."""
        return list(self._by_gid.get(neuron_gid, ()))

    def clear(self) -> None:
        self._by_gid.clear()

    def __len__(self) -> int:
        return sum(len(entries) for entries in self._by_gid.values())

    def __iter__(self) -> Iterator[tuple[int, Any]]:
        for gid, entries in self._by_gid.items():
            for synapse in entries:
                yield gid, synapse

    def __contains__(self, neuron_gid: object) -> bool:
        return bool(self._by_gid.get(neuron_gid))  # type: ignore[arg-type]


def node_positions(nodes: Iterable[Node]) -> list[Vec3]:
    """The points of ``nodes``, in order."""
    return [node.point for node in nodes]