from abc import ABC, abstractmethod
from typing import Generic, TypeVar

import jax
import jax.numpy as jnp

from fdtd2d.core.jax.pytrees import TreeClass, autoinit, frozen_field
from fdtd2d.materials import CoefficientMap2D
from fdtd2d.typing import EdgeDirection


@autoinit
class BaseBoundaryState(TreeClass):
    pass


T = TypeVar("T", bound=BaseBoundaryState)


@autoinit
class BaseBoundary(TreeClass, ABC, Generic[T]):
    """Base class for all boundary conditions at the edges of the 2D grid.

    This class defines the interface for boundary conditions, including methods
    for initializing and resetting the boundary memory as well as updating the
    electric field at the boundary and the memory afterwards.
    """

    #: Axis normal to the boundary edge (0=x, 1=y)
    axis: int = frozen_field()

    #: Direction along axis ("-" for the lower edge, "+" for the upper edge)
    direction: EdgeDirection = frozen_field()

    @property
    @abstractmethod
    def descriptive_name(self) -> str:
        """Gets a human-readable name describing this boundary's location."""
        raise NotImplementedError()

    @property
    def name(self) -> str:
        return self.descriptive_name

    @abstractmethod
    def init_state(
        self,
        grid_size: int,
        dtype: jnp.dtype,
    ) -> T:
        raise NotImplementedError()

    @abstractmethod
    def reset_state(self, state: T) -> T:
        raise NotImplementedError()

    @abstractmethod
    def update_E(
        self,
        Ez: jax.Array,
        boundary_state: T,
        coefficients: CoefficientMap2D,
    ) -> jax.Array:
        raise NotImplementedError()

    @abstractmethod
    def update_E_boundary_state(
        self,
        boundary_state: T,
        Ez: jax.Array,
    ) -> T:
        raise NotImplementedError()

    def edge_index(self, offset: int, grid_size: int) -> int:
        """Index along the boundary axis of the cell `offset` cells away from the edge.

        Args:
            offset (int): Distance from the edge in grid cells, 0 is the edge itself
            grid_size (int): Number of grid cells along the axis

        Returns:
            int: Index of that cell along self.axis
        """
        if self.direction == "-":
            return offset
        elif self.direction == "+":
            return grid_size - 1 - offset
        raise Exception(f"Invalid direction: {self.direction=}")

    def get_line(self, Ez: jax.Array, offset: int) -> jax.Array:
        """Extracts the line of Ez values parallel to the edge at the given offset."""
        return jnp.take(Ez, self.edge_index(offset, Ez.shape[self.axis]), axis=self.axis)

    def set_line(self, Ez: jax.Array, offset: int, values: jax.Array) -> jax.Array:
        """Replaces the line of Ez values parallel to the edge at the given offset."""
        index: list[int | slice] = [slice(None), slice(None)]
        index[self.axis] = self.edge_index(offset, Ez.shape[self.axis])
        return Ez.at[tuple(index)].set(values)
