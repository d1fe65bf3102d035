"""Container module for the arrays and objects of a 2D FDTD simulation.

This module provides the containers threaded through the time loop: the field
state (electric/magnetic fields of the grid and of the incident wave line plus
the absorbing boundary memory), the constant update coefficient maps and the
collection of simulation objects (TFSF injector and boundaries).
"""

import jax

from fdtd2d.core.jax.pytrees import TreeClass, autoinit
from fdtd2d.materials import CoefficientMap1D, CoefficientMap2D
from fdtd2d.objects.boundaries.boundary import BaseBoundary, BaseBoundaryState
from fdtd2d.objects.sources.tfsf import TFSFBoundary


@autoinit
class CoefficientContainer(TreeClass):
    """Constant coefficient maps of the grid and the incident wave line."""

    grid: CoefficientMap2D
    line: CoefficientMap1D


@autoinit
class FieldState(TreeClass):
    """Mutable state of the simulation, replaced (not modified) every time step.

    Attributes:
        Ez (jax.Array): Out-of-plane electric field, shape (N, N), indexed [x, y].
        Hx (jax.Array): Magnetic field in x direction, shape (N, N).
        Hy (jax.Array): Magnetic field in y direction, shape (N, N).
        Ez1d (jax.Array): Electric field of the incident wave line, shape (N,).
        Hy1d (jax.Array): Magnetic field of the incident wave line, shape (N,).
        boundary_states (dict[str, BaseBoundaryState]): Memory of the absorbing boundaries,
            keyed by boundary name.
    """

    Ez: jax.Array
    Hx: jax.Array
    Hy: jax.Array
    Ez1d: jax.Array
    Hy1d: jax.Array
    boundary_states: dict[str, BaseBoundaryState]

    @property
    def grid_fields(self) -> dict[str, jax.Array]:
        return {"Ez": self.Ez, "Hx": self.Hx, "Hy": self.Hy}

    @property
    def line_fields(self) -> dict[str, jax.Array]:
        return {"Ez1d": self.Ez1d, "Hy1d": self.Hy1d}


@autoinit
class ObjectContainer(TreeClass):
    """Container for the simulation objects acting on the field state.

    Attributes:
        boundaries (list[BaseBoundary]): Absorbing boundaries, applied in list order.
        tfsf (TFSFBoundary): Injector coupling the incident wave line into the grid.
    """

    boundaries: list[BaseBoundary]
    tfsf: TFSFBoundary

    @property
    def boundary_names(self) -> list[str]:
        return [b.name for b in self.boundaries]

    def __getitem__(self, key: str) -> BaseBoundary:
        for b in self.boundaries:
            if b.name == key:
                return b
        raise ValueError(f"Key {key} does not exist in boundary list: {self.boundary_names}")


# Tuple of the number of completed time steps and the field state
SimulationState = tuple[jax.Array, FieldState]
