# neurostruct

A data model for neuron morphologies and cortical structure, together with
readers for common morphology file formats.

## What it provides

- `neurostruct.morphology`: `Node`, `Section`, `Neurite` with its subclasses
  `Dendrite` and `Axon`, `Soma`, `NeuronMorphology`, the generic
  `Morphology`, `Neuron`, `MiniColumn`, `Column` and `Spine`, plus the enums
  `DendriteType`, `MorphologicalType` and `FunctionalType`.
- `neurostruct.containers`: `NeuronsMap`, a dict of neurons keyed by gid whose
  `add_neuron` refuses a gid already present; `SynapsesMap`, which keeps
  several synapses per neuron gid and raises `NsolError` when the same
  synapse object is added twice under one gid; and `node_positions`, which
  returns the points of a sequence of nodes.
- `neurostruct.swc_reader`: `SwcReader` reads SWC files into a
  `NeuronMorphology` (`read_morphology`) or a `Neuron` (`read_neuron`).
  Comment lines and malformed lines are skipped with a logged warning.
- `neurostruct.asc_reader`: `AscReader` reads Neurolucida ASC files with the
  same two methods. Cell body contours go into the soma; dendrites, apical
  dendrites and axons become neurites. Spines and dot markers are skipped.
- `neurostruct.vectors_reader`: `load_morphology` builds a generic
  `Morphology` from a flat list of points (x, y, z, radius) and a flat list
  of segments (pairs of point indices), chaining segments into sections and
  keeping one section for each connected group.
- `neurostruct.xml_scene_reader`: `load_xml_scene` reads an XML scene of
  columns, mini-columns and neurons (layer, types, 4x4 transform) into a
  `Scene`, and attaches the SWC morphologies it names to their neurons.
- `neurostruct.errors`: `NsolError` and the `check` helper.

Both file readers take a `reposition` flag that moves the soma center to the
origin and shifts every node with it. The classes they instantiate
(`node_class`, `section_class`, `dendrite_class`, `axon_class`,
`soma_class`, `morphology_class`, `neuron_class`) can be replaced.

## Installation

    pip install .

To run the tests:

    pip install .[test]
    pytest

## Usage

Read an SWC file and inspect it:

    from neurostruct.swc_reader import SwcReader

    morphology = SwcReader().read_morphology("neuron.swc", reposition=True)
    print(len(morphology.neurites), len(morphology.soma.nodes))
    for dendrite in morphology.basal_dendrites():
        print(dendrite.num_branches, dendrite.num_bifurcations)

Read an ASC file as a neuron:

    from neurostruct.asc_reader import AscReader

    neuron = AscReader().read_neuron("neuron.asc")

Build a morphology from vectors:

    from neurostruct.vectors_reader import load_morphology

    points = [0, 0, 0, 1,  1, 0, 0, 1,  2, 0, 0, 1]
    segments = [0, 1,  1, 2]
    morphology = load_morphology(points, segments)

Load an XML scene:

    from neurostruct.xml_scene_reader import load_xml_scene

    scene = load_xml_scene("scene.xml")
    print(scene.version, len(scene.columns), len(scene.neurons))

## Errors

`SwcReader` and `AscReader` return `None` when the file cannot be opened.
`load_morphology` returns `None` when the point list length is not a
multiple of four or the segment list length is not even, and raises
`ValueError` when a segment names a point that does not exist.
`load_xml_scene` raises `NsolError` when the file is missing, unreadable or
not well-formed XML, when the root is not `<scene>` or has no `version`, and
when the first element inside the root is not `<morphology>`.

## What it does not do

The package only reads. It writes no SWC, ASC or scene files, computes no
morphological statistics (lengths, surfaces, volumes), and has no circuit or
dataset object for loading synaptic connectivity; `SynapsesMap` stores
whatever synapse objects it is given. There is no command-line tool.