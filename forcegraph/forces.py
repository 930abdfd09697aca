from forcegraph.geometry import damp, dist, force_direction

# Scaling constants; the tunables live on GraphConfig
REPEL_SCALE = 2000.0
CENTER_SCALE = 0.00004
LINK_SCALE = 0.1


def repulsion(node1, node2, repel_force, cap):
    """Magnitude pushing two nodes apart, measured from their rims."""
    gap = dist(node1, node2) - node1.size - node2.size
    squared = gap * gap
    if gap <= 0 or squared == 0:
        return cap
    return min(repel_force * REPEL_SCALE / squared, cap)


def center_attraction(center, node, center_force):
    """Magnitude pulling a node towards the centre; grows with distance squared."""
    distance = dist(center, node)
    return center_force * CENTER_SCALE * distance * distance


def spring(node1, node2, link_force, link_distance):
    """Magnitude pulling linked nodes together once they exceed link_distance."""
    excess = dist(node1, node2) - link_distance
    return link_force * LINK_SCALE * max(excess, 0.0)


def apply_repulsion(node1, node2, config):
    force = damp(repulsion(node1, node2, config.repel_force, config.repulsion_cap), config.damping)
    x, y = force_direction(node1, node2, force)

    node1.next_x -= x
    node1.next_y -= y
    node2.next_x += x
    node2.next_y += y


def apply_center(center, node, config):
    force = damp(center_attraction(center, node, config.center_force), config.damping)
    x, y = force_direction(center, node, force)

    node.next_x -= x
    node.next_y -= y


def apply_spring(node1, node2, config):
    force = damp(spring(node1, node2, config.link_force, config.link_distance), config.damping)
    x, y = force_direction(node1, node2, force)

    node1.next_x += x
    node1.next_y += y
    node2.next_x -= x
    node2.next_y -= y
