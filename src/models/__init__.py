"""
Models package for mathitem

Contains data structures and type definitions for the math item lifecycle
and the rendering pipeline.
"""

from .state import ProgramState, pipeline
from .location import Location, Metrics, BBox, ProtoItem, protoItem_make
from .mathitem import MathState, DisplayMode, JaxData
from .tree import MmlNode

__all__ = [
    "ProgramState",
    "pipeline",
    "Location",
    "Metrics",
    "BBox",
    "ProtoItem",
    "protoItem_make",
    "MathState",
    "DisplayMode",
    "JaxData",
    "MmlNode",
]
