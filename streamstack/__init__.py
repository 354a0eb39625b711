"""Stacked-area / streamgraph layout with animated transitions."""
from streamstack.layout import Dataset, ShapeMismatch, BaselineSelector, build_target
from streamstack.anim import TransitionEngine, Phase
from streamstack.graph import StackedGraph

__version__ = "0.1.0"

__all__ = [
    "Dataset", "ShapeMismatch", "BaselineSelector", "build_target",
    "TransitionEngine", "Phase", "StackedGraph",
]
