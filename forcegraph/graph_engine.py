import logging
import math
import random

import networkx as nx

from forcegraph import forces
from forcegraph.config import load_config
from forcegraph.errors import InvalidEdgeError, UnknownNodeError
from forcegraph.geometry import Point, logistic

logger = logging.getLogger(__name__)


class Node:
    def __init__(self, uid, label="", size=10.0, color=None, x=0.0, y=0.0, auto_size=False, data=None):
        self.uid = uid
        self.label = label
        self.size = size
        self.color = color  # None -> graph default
        self.data = data or {}
        self.x = x
        self.y = y
        # Forces gathered during the current frame
        self.next_x = 0.0
        self.next_y = 0.0
        # Delta applied on the previous frame
        self.last_x = 0.0
        self.last_y = 0.0
        self.neighbors = set()
        self.pending = set()  # neighbor ids not created yet
        self.auto_size = auto_size
        self.held = False

    def contains(self, x, y):
        return math.hypot(self.x - x, self.y - y) <= self.size

    def __repr__(self):
        return f"Node({self.uid}, {self.label!r}, x={self.x:.2f}, y={self.y:.2f})"


class EdgeSet:
    """Undirected edges stored as canonical (low, high) id pairs."""

    def __init__(self):
        self._pairs = set()

    @staticmethod
    def key(a, b):
        return (a, b) if a <= b else (b, a)

    def add(self, a, b):
        """Returns False when the pair was already present."""
        pair = self.key(a, b)
        if pair in self._pairs:
            return False
        self._pairs.add(pair)
        return True

    def discard(self, a, b):
        pair = self.key(a, b)
        if pair not in self._pairs:
            return False
        self._pairs.remove(pair)
        return True

    def __contains__(self, pair):
        a, b = pair
        return self.key(a, b) in self._pairs

    def __iter__(self):
        return iter(sorted(self._pairs))

    def __len__(self):
        return len(self._pairs)


def default_auto_size(neighbor_count, low, high):
    return logistic(neighbor_count, low, high, steepness=0.35, midpoint=8)


class GraphEngine:
    def __init__(self, config=None, **overrides):
        self.config = config if config is not None else load_config()
        if overrides:
            self.configure(**overrides)
        config = self.config

        self.nodes = {}  # uid -> Node, in creation order
        self.edges = EdgeSet()
        self.next_id = 0

        self.center = Point(*config.center)
        self.frame_count = 0
        self.running = True
        self._rng = random.Random(config.seed)

    # ------------------------------------------------------------------
    # Nodes and edges
    # ------------------------------------------------------------------
    def node(self, ref):
        uid = self._uid(ref)
        try:
            return self.nodes[uid]
        except KeyError:
            raise UnknownNodeError(f"No node with id {uid}") from None

    def create_node(self, label="", size=None, color=None, neighbors=(), auto_size=False, x=None, y=None, data=None):
        """Adds a node and returns it.

        Ids in `neighbors` that already exist are linked right away; the rest
        are kept on the node until `sync_edges` runs.
        """
        if size is not None and (not math.isfinite(size) or size <= 0):
            raise ValueError(f"Node size must be positive, got {size}")
        wanted = {self._uid(n, InvalidEdgeError) for n in neighbors}

        width, height = self.center.x * 2, self.center.y * 2
        if x is None:
            x = self._rng.uniform(width * 0.2, width * 0.8)
        if y is None:
            y = self._rng.uniform(height * 0.2, height * 0.8)

        node = Node(
            self.next_id,
            label,
            size if size is not None else self.config.default_size,
            color or None,
            float(x),
            float(y),
            auto_size,
            data,
        )
        self.nodes[node.uid] = node
        self.next_id += 1

        wanted.discard(node.uid)
        for other in sorted(wanted):
            if other in self.nodes:
                self._link(node.uid, other)
            else:
                node.pending.add(other)
        # Earlier nodes may have been waiting for this id
        for other in list(self.nodes.values()):
            if node.uid in other.pending:
                other.pending.discard(node.uid)
                self._link(other.uid, node.uid)
        self._resize(node)

        logger.debug("Created node %d (%r)", node.uid, label)
        return node

    def remove_node(self, ref):
        node = self.node(ref)
        for other in list(node.neighbors):
            if other in self.nodes:
                self._unlink(node.uid, other)
        del self.nodes[node.uid]
        node.neighbors.clear()
        node.held = False
        logger.debug("Removed node %d", node.uid)
        return node

    def create_edge(self, a, b):
        """Links two existing nodes. Returns False if they were already linked."""
        a, b = self._uid(a, InvalidEdgeError), self._uid(b, InvalidEdgeError)
        if a == b:
            raise InvalidEdgeError(f"Cannot link node {a} to itself")
        missing = [uid for uid in (a, b) if uid not in self.nodes]
        if missing:
            raise InvalidEdgeError(f"Cannot create edge ({a}, {b}): unknown node(s) {missing}")
        return self._link(a, b)

    def remove_edge(self, a, b):
        """Unlinks two nodes. Returns False if there was no such edge."""
        return self._unlink(self._uid(a, InvalidEdgeError), self._uid(b, InvalidEdgeError))

    def sync_edges(self):
        """Links pending neighbor ids and drops the ones that never appeared."""
        created = 0
        for node in list(self.nodes.values()):
            for other in sorted(node.pending):
                if other in self.nodes:
                    if self._link(node.uid, other):
                        created += 1
                else:
                    logger.warning("Dropping neighbor %d of node %d: no such node", other, node.uid)
            node.pending.clear()
        return created

    def neighbors(self, ref):
        return [self.nodes[uid] for uid in sorted(self.node(ref).neighbors)]

    def check_invariants(self):
        """Returns a list of inconsistencies between neighbor sets and edges."""
        problems = []
        for a, b in self.edges:
            if a not in self.nodes or b not in self.nodes:
                problems.append(f"edge ({a}, {b}) references a removed node")
                continue
            if b not in self.nodes[a].neighbors or a not in self.nodes[b].neighbors:
                problems.append(f"edge ({a}, {b}) missing from a neighbor set")
        for node in self.nodes.values():
            for other in node.neighbors:
                if (node.uid, other) not in self.edges:
                    problems.append(f"node {node.uid} lists {other} without an edge")
            if not (math.isfinite(node.size) and node.size > 0):
                problems.append(f"node {node.uid} has invalid size {node.size}")
        return problems

    def _uid(self, ref, error=UnknownNodeError):
        if isinstance(ref, Node):
            return ref.uid
        if isinstance(ref, int) and not isinstance(ref, bool):
            return ref
        raise error(f"Invalid node id {ref!r}")

    def _link(self, a, b):
        node_a, node_b = self.nodes[a], self.nodes[b]
        node_a.neighbors.add(b)
        node_b.neighbors.add(a)
        if not self.edges.add(a, b):
            return False
        self._resize(node_a)
        self._resize(node_b)
        logger.debug("Created edge (%d, %d)", a, b)
        return True

    def _unlink(self, a, b):
        if not self.edges.discard(a, b):
            return False
        for uid, other in ((a, b), (b, a)):
            node = self.nodes.get(uid)
            if node is not None:
                node.neighbors.discard(other)
                self._resize(node)
        logger.debug("Removed edge (%d, %d)", a, b)
        return True

    def _resize(self, node):
        if not node.auto_size:
            return
        low, high = self.config.min_auto_size, self.config.max_auto_size
        count = len(node.neighbors)
        if self.config.auto_size is not None:
            size = self.config.auto_size(count)
        else:
            size = default_auto_size(count, low, high)
        if size is None or not math.isfinite(size):
            logger.warning("Auto-size returned %r for node %d; keeping %s", size, node.uid, node.size)
            return
        node.size = min(max(size, low), high)

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------
    @property
    def warming_up(self):
        return self.frame_count < self.config.warm_start_frames

    def warm_start_passes(self, frame):
        frames = self.config.warm_start_frames
        if frame >= frames:
            return 1
        passes = logistic(frame, self.config.warm_start_passes, 1, steepness=0.6, midpoint=frames / 2)
        return max(1, round(passes))

    def advance_frame(self):
        """Runs one scheduled tick. Returns False once the engine is stopped."""
        if not self.running:
            return False
        for _ in range(self.warm_start_passes(self.frame_count)):
            self.step()
        self.frame_count += 1
        if self.frame_count == self.config.warm_start_frames:
            logger.info("Warm start finished after %d frames", self.frame_count)
        return True

    def stop(self):
        if self.running:
            logger.info("Simulation stopped at frame %d", self.frame_count)
        self.running = False

    def start(self):
        if not self.running:
            logger.info("Simulation resumed at frame %d", self.frame_count)
        self.running = True

    def configure(self, **changes):
        """Revalidates the configuration with `changes` applied; raises InvalidConfigError."""
        self.config = load_config(**{**dict(self.config), **changes})
        if "width" in changes or "height" in changes:
            self.center = Point(*self.config.center)
        return self.config

    def set_bounds(self, width, height):
        self.center = Point(width / 2, height / 2)

    def step(self):
        """Updates node positions based on forces."""
        config = self.config
        node_items = list(self.nodes.values())

        # 1. Center gravity and repulsion (each pair once)
        for i, n1 in enumerate(node_items):
            forces.apply_center(self.center, n1, config)
            for n2 in node_items[i + 1:]:
                forces.apply_repulsion(n1, n2, config)

        # 2. Springs
        for a, b in self.edges:
            forces.apply_spring(self.nodes[a], self.nodes[b], config)

        # 3. Apply, averaging with last frame's delta
        for n in node_items:
            if n.held:
                n.last_x = 0.0
                n.last_y = 0.0
            else:
                dx = round((n.next_x + n.last_x) / 2, 2)
                dy = round((n.next_y + n.last_y) / 2, 2)
                n.x += dx
                n.y += dy
                n.last_x = dx
                n.last_y = dy

            n.next_x = 0.0
            n.next_y = 0.0

    # ------------------------------------------------------------------
    # networkx interop
    # ------------------------------------------------------------------
    def load_from_networkx(self, nx_graph, auto_size=True):
        """Adds every node and edge of a networkx graph; returns key -> uid."""
        mapping = {}
        for key, data in nx_graph.nodes(data=True):
            attrs = dict(data)
            label = str(attrs.pop("label", key))
            size = attrs.pop("size", None)
            color = attrs.pop("color", None)
            node = self.create_node(
                label=label,
                size=float(size) if size is not None else None,
                color=color,
                auto_size=auto_size and size is None,
                data=attrs,
            )
            mapping[key] = node.uid

        for u, v in nx_graph.edges():
            if u == v:
                logger.debug("Skipping self-loop on %r", u)
                continue
            self.create_edge(mapping[u], mapping[v])

        logger.info("Loaded %d nodes and %d edges", len(mapping), len(self.edges))
        return mapping

    def to_networkx(self):
        graph = nx.Graph()
        for node in self.nodes.values():
            graph.add_node(node.uid, label=node.label, size=node.size, x=node.x, y=node.y)
        graph.add_edges_from(self.edges)
        return graph
