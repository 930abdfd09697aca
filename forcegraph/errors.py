class GraphError(Exception):
    """Base class for graph errors."""


class InvalidEdgeError(GraphError, ValueError):
    """Raised when an edge references a missing node or loops on itself."""


class UnknownNodeError(GraphError, KeyError):
    """Raised when a node id is not in the graph."""

    def __str__(self):
        # KeyError would repr() the message
        return str(self.args[0]) if self.args else ""


class InvalidConfigError(GraphError, ValueError):
    """Raised when the graph configuration cannot be loaded or validated."""
