"""Builds generic morphologies from flat vectors of points and segments."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Optional

from .morphology import Morphology, Node, Section


def _has_two_occurrences(count: int) -> bool:
    return count == 2


def _build_nodes(points: Sequence[float]) -> list[Node]:
    values = list(points)
    return [
        Node((values[start], values[start + 1], values[start + 2]), node_id, values[start + 3])
        for node_id, start in enumerate(range(0, len(values), 4))
    ]


def _build_segments(segments: Sequence[int], node_count: int) -> list[tuple[int, int]]:
    values = [int(value) for value in segments]
    pairs = list(zip(values[0::2], values[1::2]))
    for x, y in pairs:
        if not (0 <= x < node_count and 0 <= y < node_count):
            raise ValueError(
                f"segment ({x}, {y}) refers to a node outside 0..{node_count - 1}"
            )
    return pairs


def _build_sections(nodes: list[Node], pairs: list[tuple[int, int]]) -> list[Section]:
    """Chain consecutive segments through nodes shared by exactly two segments."""
    occurrences = [0] * len(nodes)
    for x, y in pairs:
        occurrences[x] += 1
        occurrences[y] += 1

    sections: list[Section] = []
    section: Optional[Section] = None
    previous_x = -1
    previous_y = -1

    for x, y in pairs:
        if section is not None and previous_y == x:
            section.add_forward_node(nodes[y])
            previous_x = -1
            previous_y = y if _has_two_occurrences(occurrences[y]) else -1
        elif section is not None and previous_x == y:
            section.add_backward_node(nodes[x])
            previous_x = x if _has_two_occurrences(occurrences[y]) else -1
            previous_y = -1
        else:
            section = Section()
            sections.append(section)
            section.add_forward_node(nodes[x])
            section.add_forward_node(nodes[y])
            if not _has_two_occurrences(occurrences[x]) and not _has_two_occurrences(
                occurrences[y]
            ):
                previous_x = -1
                previous_y = -1
            else:
                previous_x = x
                previous_y = y
    return sections


def _link_neighbours(sections: list[Section]) -> None:
    """Connect sections that share an end node."""
    sections_at: dict[int, list[Section]] = {}
    for section in sections:
        if len(section.nodes) <= 1:
            continue
        for end_node in (section.nodes[0], section.nodes[-1]):
            touching = sections_at.get(id(end_node))
            if touching is None:
                sections_at[id(end_node)] = [section]
                continue
            for neighbour in list(touching):
                neighbour.add_neighbour(section, end_node)
                section.add_neighbour(neighbour, end_node)
            touching.append(section)


def _group(sections: list[Section]) -> list[Section]:
    """One representative section for each connected group, in order."""
    seen: set[Section] = set()
    grouped: list[Section] = []
    for section in sections:
        if section in seen:
            continue
        grouped.append(section)
        pending = [section]
        while pending:
            current = pending.pop()
            if current in seen:
                continue
            seen.add(current)
            pending.extend(current.backward_neighbors)
            pending.extend(current.forward_neighbors)
    return grouped


def load_morphology(
    points: Sequence[float], segments: Sequence[int]
) -> Optional[Morphology]:
    """Create a generic morphology from points and segments.

    ``points`` holds four values per node (x, y, z, radius); ``segments``
    holds two node indices per segment. Returns None when either sequence
    has a length that is not a multiple of its group size.
    """
    if len(points) % 4 != 0 or len(segments) % 2 != 0:
        return None

    nodes = _build_nodes(points)
    pairs = _build_segments(segments, len(nodes))
    sections = _build_sections(nodes, pairs)
    _link_neighbours(sections)
    return Morphology(sections=_group(sections))