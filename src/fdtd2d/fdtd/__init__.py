"""FDTD simulation module providing the time stepping of the 2D TMz grid.

This module provides:

- The field state and coefficient containers threaded through the time loop
- The grid update equations and a single forward time step
- A compiled time loop and a chunked driver that feeds output sinks
"""

from fdtd2d.fdtd.container import (
    CoefficientContainer,
    FieldState,
    ObjectContainer,
    SimulationState,
)
from fdtd2d.fdtd.fdtd import run_steps
from fdtd2d.fdtd.forward import forward
from fdtd2d.fdtd.initialization import create_coefficients_1d, create_coefficients_2d, place_objects
from fdtd2d.fdtd.wrapper import run_fdtd

__all__ = [
    "CoefficientContainer",
    "FieldState",
    "ObjectContainer",
    "SimulationState",
    "run_steps",
    "forward",
    "create_coefficients_1d",
    "create_coefficients_2d",
    "place_objects",
    "run_fdtd",
]
