"""Hover, drag and pan handling for the graph.

The controller holds transient pointer state only. Node and transform state
belong to the engine and the view, which it mutates in place. Every handler
takes device coordinates that the event layer has already extracted.
"""
import logging
from enum import Enum

logger = logging.getLogger(__name__)


class InteractionState(Enum):
    IDLE = "idle"
    HOVERING = "hovering"
    DRAGGING = "dragging"
    PANNING = "panning"


CURSORS = {
    InteractionState.IDLE: "default",
    InteractionState.HOVERING: "pointer",
    InteractionState.DRAGGING: "grabbing",
    InteractionState.PANNING: "grab",
}


class InteractionController:
    def __init__(self, engine, view):
        self.engine = engine
        self.view = view
        self._hovered = None  # uid
        self._dragged = None  # uid
        self._panning = False
        self._last_pointer = None

    def attach(self, engine):
        """Points the controller at another engine, dropping any pointer state."""
        self._release()
        self.engine = engine

    @property
    def hovered_node(self):
        return self.engine.nodes.get(self._hovered) if self._hovered is not None else None

    @property
    def dragged_node(self):
        return self.engine.nodes.get(self._dragged) if self._dragged is not None else None

    @property
    def is_panning(self):
        return self._panning

    @property
    def state(self):
        if self.dragged_node is not None:
            return InteractionState.DRAGGING
        if self._panning:
            return InteractionState.PANNING
        if self.hovered_node is not None:
            return InteractionState.HOVERING
        return InteractionState.IDLE

    @property
    def cursor(self):
        return CURSORS[self.state]

    def hit_test(self, x, y):
        """First node, in creation order, whose disc contains device point (x, y)."""
        sim_x, sim_y = self.view.to_simulation(x, y)
        for node in self.engine.nodes.values():
            if node.contains(sim_x, sim_y):
                return node
        return None

    def pointer_move(self, x, y):
        dragged = self.dragged_node
        if dragged is not None:
            self._move_dragged(dragged, x, y)
        elif self._panning:
            last_x, last_y = self._last_pointer
            self.view.pan(x - last_x, y - last_y)
        else:
            node = self.hit_test(x, y)
            self._hovered = node.uid if node is not None else None
        self._last_pointer = (x, y)

    def pointer_down(self, x, y):
        node = self.hit_test(x, y)
        self._last_pointer = (x, y)
        if node is not None:
            self._hovered = node.uid
            self._dragged = node.uid
            node.held = True
            node.next_x = node.next_y = 0.0
            node.last_x = node.last_y = 0.0
            logger.debug("Dragging node %d", node.uid)
        else:
            self._hovered = None
            self._panning = True
        return node

    def pointer_up(self, x=None, y=None):
        self._release()

    def pointer_leave(self):
        self._release()

    def wheel(self, x, y, delta):
        return self.view.zoom(x, y, delta)

    def _move_dragged(self, node, x, y):
        node.x, node.y = self.view.to_simulation(x, y)
        node.next_x = node.next_y = 0.0
        node.last_x = node.last_y = 0.0

    def _release(self):
        dragged = self.dragged_node
        if dragged is not None:
            dragged.held = False
            logger.debug("Released node %d", dragged.uid)
        self._dragged = None
        self._hovered = None
        self._panning = False
        self._last_pointer = None
