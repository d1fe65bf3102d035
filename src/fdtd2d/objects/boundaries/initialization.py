from fdtd2d.config import SimulationConfig
from fdtd2d.objects.boundaries.mur import MurBoundary

# (axis, direction) of the edges in the order in which they are updated
EDGE_ORDER = (
    (1, "+"),
    (1, "-"),
    (0, "+"),
    (0, "-"),
)


def boundary_objects_from_config(
    config: SimulationConfig,
) -> dict[str, MurBoundary]:
    """Creates the absorbing boundaries on all four edges of the grid.

    The boundaries are returned in update order top, bottom, right, left. With the
    sequential corner treatment the corner cells end up with the value written by
    the last edge touching them.

    Args:
        config (SimulationConfig): Simulation configuration

    Returns:
        dict[str, MurBoundary]: Boundaries keyed by their descriptive name
    """
    boundaries = {}
    for axis, direction in EDGE_ORDER:
        boundary = MurBoundary(
            axis=axis,
            direction=direction,
            corner_treatment=config.corner_treatment,
        )
        boundaries[boundary.name] = boundary
    return boundaries
