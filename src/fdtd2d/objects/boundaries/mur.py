import jax
import jax.numpy as jnp
from typing_extensions import override

from fdtd2d.core.jax.pytrees import autoinit, frozen_field
from fdtd2d.materials import CoefficientMap2D
from fdtd2d.objects.boundaries.boundary import BaseBoundary, BaseBoundaryState
from fdtd2d.typing import CornerTreatment

# Number of cells next to the edge remembered by the boundary
MEMORY_DEPTH = 3

# Number of past time steps remembered by the boundary
MEMORY_TIME_LEVELS = 2


@autoinit
class MurBoundaryState(BaseBoundaryState):
    """Memory of a second order absorbing boundary.

    history[k, level, i] holds Ez at distance k from the edge and position i along
    the edge, observed `level + 1` time steps ago.
    """

    #: Past Ez values next to the edge, shape (3, 2, N)
    history: jax.Array


def mur_coefficients(coefficients: CoefficientMap2D) -> tuple[jax.Array, jax.Array, jax.Array]:
    """Computes the three weights of the second order absorbing boundary condition.

    The local Courant number sqrt(EzH * HyE) is taken from the grid corner, which
    is assumed to be free space.

    Args:
        coefficients (CoefficientMap2D): Update coefficients of the grid

    Returns:
        tuple[jax.Array, jax.Array, jax.Array]: Weights c1, c2, c3
    """
    courant = jnp.sqrt(coefficients.EzH[0, 0] * coefficients.HyE[0, 0])
    denominator = 1.0 / courant + 2.0 + courant
    c1 = -(1.0 / courant - 2.0 + courant) / denominator
    c2 = -2.0 * (courant - 1.0 / courant) / denominator
    c3 = 4.0 * (courant + 1.0 / courant) / denominator
    return c1, c2, c3


@autoinit
class MurBoundary(BaseBoundary[MurBoundaryState]):
    """Second order absorbing boundary condition on one edge of the grid.

    The new value on the edge is extrapolated from the two cells next to it and
    from their values of the two previous time steps, which approximates a one-way
    wave equation and lets outgoing waves leave the grid with little reflection.
    Only Ez is updated, the magnetic field at the far edges is never touched by the
    grid update and needs no boundary treatment.
    """

    #: "sequential" updates the whole edge, "skip" leaves out the two corner cells
    corner_treatment: CornerTreatment = frozen_field(default="sequential")

    @property
    @override
    def descriptive_name(self) -> str:
        """Gets a human-readable name describing this boundary's location.

        Returns:
            str: One of "left", "right", "bottom" or "top"
        """
        if self.axis == 0:
            return "left" if self.direction == "-" else "right"
        return "bottom" if self.direction == "-" else "top"

    @override
    def init_state(
        self,
        grid_size: int,
        dtype: jnp.dtype,
    ) -> MurBoundaryState:
        history = jnp.zeros((MEMORY_DEPTH, MEMORY_TIME_LEVELS, grid_size), dtype=dtype)
        return MurBoundaryState(history=history)

    @override
    def reset_state(self, state: MurBoundaryState) -> MurBoundaryState:
        return state.at["history"].set(jnp.zeros_like(state.history))

    @override
    def update_E(
        self,
        Ez: jax.Array,
        boundary_state: MurBoundaryState,
        coefficients: CoefficientMap2D,
    ) -> jax.Array:
        c1, c2, c3 = mur_coefficients(coefficients)
        old = boundary_state.history
        edge = (
            c1 * (self.get_line(Ez, 2) + old[0, 1])
            + c2 * (old[0, 0] + old[2, 0] - self.get_line(Ez, 1) - old[1, 1])
            + c3 * old[1, 0]
            - old[2, 1]
        )
        if self.corner_treatment == "skip":
            current = self.get_line(Ez, 0)
            edge = current.at[1:-1].set(edge[1:-1])
        return self.set_line(Ez, 0, edge.astype(Ez.dtype))

    @override
    def update_E_boundary_state(
        self,
        boundary_state: MurBoundaryState,
        Ez: jax.Array,
    ) -> MurBoundaryState:
        observed = jnp.stack([self.get_line(Ez, k) for k in range(MEMORY_DEPTH)], axis=0)
        history = jnp.stack([observed, boundary_state.history[:, 0]], axis=1)
        return boundary_state.at["history"].set(history)
