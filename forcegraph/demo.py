"""Sample graph used by the demo window."""
import random

HUB_COLOR = "turquoise"


def _bell(rng):
    """Sample from a normal distribution squeezed into [0, 1)."""
    while True:
        value = rng.gauss(0.5, 0.1)
        if 0 <= value < 1:
            return value


def build_demo_graph(engine, count=200, extra_edges=250, hubs=4, seed=None):
    """Fill `engine` with auto-sized nodes whose links favour the middle ids.

    Every node ends with at least two neighbours; sparse ones are tied to one
    of the first two hubs.
    """
    rng = random.Random(seed)
    nodes = [
        engine.create_node(
            label=f"node {i}",
            auto_size=True,
            color=HUB_COLOR if i < hubs else None,
        )
        for i in range(count)
    ]

    for _ in range(extra_edges):
        node1 = nodes[int(_bell(rng) * len(nodes))]
        node2 = nodes[rng.randrange(len(nodes))]
        if node1 is not node2:
            engine.create_edge(node1, node2)

    for node in nodes:
        if len(node.neighbors) < 2:
            hub = nodes[0] if rng.random() < 0.75 else nodes[1]
            if hub is not node:
                engine.create_edge(node, hub)
    return nodes
