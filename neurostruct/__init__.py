"""Neuron morphology data structures and readers for SWC, ASC, vectors and XML scenes."""

__version__ = "0.1.0"
__all__ = [
    "errors",
    "morphology",
    "containers",
    "swc_reader",
    "asc_reader",
    "vectors_reader",
    "xml_scene_reader",
]