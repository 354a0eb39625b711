from .stacked import StackedGraph

__all__ = ["StackedGraph"]
