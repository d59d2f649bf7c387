"""
aggregation/__init__.py

Public API for the aggregation sub-package.
"""

from .graph import build_graph
from .models import (
    ConnStateInfo,
    Edge,
    NetworkGraph,
    Node,
    Stats,
    TimelineData,
    TimelinePoint,
)
from .stats import describe_conn_state, summarize
from .timeline import build_timeline

__all__ = [
    "build_graph",
    "build_timeline",
    "summarize",
    "describe_conn_state",
    "Node",
    "Edge",
    "NetworkGraph",
    "TimelinePoint",
    "TimelineData",
    "ConnStateInfo",
    "Stats",
]
