from forcegraph.config import GraphConfig, load_config
from forcegraph.errors import GraphError, InvalidConfigError, InvalidEdgeError, UnknownNodeError
from forcegraph.graph_engine import EdgeSet, GraphEngine, Node
from forcegraph.interaction import InteractionController, InteractionState
from forcegraph.view import SCALE_KEY, ViewTransform

__all__ = [
    "EdgeSet",
    "GraphConfig",
    "GraphEngine",
    "GraphError",
    "InteractionController",
    "InteractionState",
    "InvalidConfigError",
    "InvalidEdgeError",
    "Node",
    "SCALE_KEY",
    "UnknownNodeError",
    "ViewTransform",
    "load_config",
]
