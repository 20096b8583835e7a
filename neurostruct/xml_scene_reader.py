"""Loader for XML scene files describing columns, neurons and morphologies."""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from collections import deque
from collections.abc import Iterator
from dataclasses import dataclass, field
from itertools import islice
from pathlib import Path
from typing import Optional

from .containers import NeuronsMap
from .errors import check
from .morphology import (
    IDENTITY_TRANSFORM,
    Column,
    FunctionalType,
    Matrix4,
    MiniColumn,
    MorphologicalType,
    Neuron,
    NeuronMorphology,
)
from .swc_reader import SwcReader

_log = logging.getLogger(__name__)

_MORPHOLOGICAL_TYPES = {
    "INTERNEURON": MorphologicalType.INTERNEURON,
    "PYRAMIDAL": MorphologicalType.PYRAMIDAL,
}
_FUNCTIONAL_TYPES = {
    "EXCITATORY": FunctionalType.EXCITATORY,
    "INHIBITORY": FunctionalType.INHIBITORY,
}


@dataclass
class Scene:
    """Everything a scene file describes."""

    version: str = ""
    columns: list[Column] = field(default_factory=list)
    neurons: NeuronsMap = field(default_factory=NeuronsMap)
    morphologies: dict[str, NeuronMorphology] = field(default_factory=dict)


def _local(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _to_uint(text: Optional[str]) -> int:
    try:
        value = int((text or "").strip())
    except ValueError:
        return 0
    return value if value >= 0 else 0


def _to_float(text: str) -> float:
    try:
        return float(text)
    except ValueError:
        return 0.0


def _find(element: ET.Element, name: str, required: str) -> Iterator[ET.Element]:
    """Descendants named ``name`` holding ``required``, not looking inside them."""
    for child in element:
        if _local(child.tag) == name and child.get(required) is not None:
            yield child
        else:
            yield from _find(child, name, required)


def _read_transform(neuron_element: ET.Element) -> Matrix4:
    transform = IDENTITY_TRANSFORM
    for element in neuron_element.iter():
        if element is neuron_element or _local(element.tag) != "transform":
            continue
        text = (element.text or "").replace(" ", "").replace("\n", "").replace("\t", "")
        values = text.split(",")
        if len(values) == 16:
            numbers = [_to_float(value) for value in values]
            transform = tuple(tuple(numbers[row * 4:row * 4 + 4]) for row in range(4))
    return transform


def _read_neuron(element: ET.Element, mini_column: MiniColumn, scene: Scene) -> None:
    gid = _to_uint(element.get("gid"))
    layer = _to_uint(element.get("layer")) if element.get("layer") is not None else 1

    morphological_type = MorphologicalType.UNDEFINED
    type_name = element.get("morphologicalType")
    if type_name is not None:
        morphological_type = _MORPHOLOGICAL_TYPES.get(type_name, MorphologicalType.UNDEFINED)
        if type_name not in _MORPHOLOGICAL_TYPES:
            _log.warning(
                "nsol warning (XmlSceneReader): Neuron %d undefined morphological type.", gid
            )

    functional_type = FunctionalType.UNDEFINED_FUNCTIONAL_TYPE
    type_name = element.get("functionalType")
    if type_name is not None:
        functional_type = _FUNCTIONAL_TYPES.get(
            type_name, FunctionalType.UNDEFINED_FUNCTIONAL_TYPE
        )
        if type_name not in _FUNCTIONAL_TYPES:
            _log.warning(
                "nsol warning (XmlSceneReader): Neuron %d undefined functional type.", gid
            )

    neuron = Neuron(
        morphology=None,
        layer=layer,
        gid=gid,
        transform=_read_transform(element),
        mini_column=mini_column,
        morphological_type=morphological_type,
        functional_type=functional_type,
    )
    if scene.neurons.add_neuron(neuron):
        mini_column.add_neuron(neuron)


def _read_column(element: ET.Element, scene: Scene) -> None:
    column = Column(id=_to_uint(element.get("id")))
    scene.columns.append(column)
    for mini_element in _find(element, "minicolumn", "id"):
        mini_column = MiniColumn(column=column, id=_to_uint(mini_element.get("id")))
        column.add_mini_column(mini_column)
        for neuron_element in _find(mini_element, "neuron", "gid"):
            _read_neuron(neuron_element, mini_column, scene)


def _read_neuron_morphology(element: ET.Element, scene: Scene, xml_path: Path) -> None:
    neurons_attr = element.get("neurons")
    swc = element.get("swc")
    if neurons_attr is None or swc is None:
        return
    if not Path(swc).is_file():
        swc = f"{xml_path.parent}/{swc}"

    morphology = scene.morphologies.get(swc)
    if morphology is None:
        morphology = SwcReader().read_morphology(swc)
        if morphology is not None:
            scene.morphologies[swc] = morphology

    if morphology is None:
        _log.warning("nsol warning (XmlSceneReader): morphology %s could not be readed", swc)
        return

    for entry in neurons_attr.split(","):
        neuron = scene.neurons.get(_to_uint(entry))
        if neuron is not None:
            neuron.morphology = morphology
            morphology.parent_neurons.append(neuron)


def _read_content(elements: Iterator[ET.Element], scene: Scene, xml_path: Path) -> None:
    for element in elements:
        name = _local(element.tag)
        if name == "column" and element.get("id") is not None:
            _read_column(element, scene)
            descendants = sum(1 for _ in element.iter()) - 1
            deque(islice(elements, descendants), maxlen=0)
        elif name == "neuronmorphologies":
            for inner in elements:
                if _local(inner.tag) == "neuronmorphology":
                    _read_neuron_morphology(inner, scene, xml_path)
            return


def load_xml_scene(xml_scene_file) -> Scene:
    """Read the scene in ``xml_scene_file`` and the SWC morphologies it links."""
    xml_path = Path(xml_scene_file)
    check(xml_path.exists(), "Scene file not found")
    try:
        content = xml_path.read_bytes()
    except OSError:
        content = None
    check(content is not None, "Scene file not readable")
    try:
        root: Optional[ET.Element] = ET.fromstring(content)
    except ET.ParseError:
        root = None
    check(root is not None, "Scene XML file has errors")

    check(_local(root.tag) == "scene", "Expected <scene> root element")
    version = root.get("version")
    check(version is not None, "No version number present")

    scene = Scene(version=version)
    elements = root.iter()
    next(elements)
    for element in elements:
        name = _local(element.tag)
        check(name == "morphology", f"Element <{name}> not expected")
        _read_content(elements, scene, xml_path)
        break
    return scene