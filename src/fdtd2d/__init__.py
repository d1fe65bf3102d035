from fdtd2d import constants
from fdtd2d.config import SimulationConfig
from fdtd2d.core.errors import ConfigurationError, InstabilityError
from fdtd2d.core.jax.pytrees import TreeClass, autoinit, field, frozen_field
from fdtd2d.core.physics.metrics import compute_energy, compute_line_energy
from fdtd2d.fdtd.container import CoefficientContainer, FieldState, ObjectContainer, SimulationState
from fdtd2d.fdtd.forward import forward
from fdtd2d.fdtd.initialization import place_objects
from fdtd2d.fdtd.wrapper import run_fdtd
from fdtd2d.materials import CoefficientMap1D, CoefficientMap2D
from fdtd2d.objects.boundaries.initialization import boundary_objects_from_config
from fdtd2d.objects.boundaries.mur import MurBoundary
from fdtd2d.objects.sources.line import IncidentLine
from fdtd2d.objects.sources.profile import RickerProfile, SinusoidalProfile, planewave, ricker
from fdtd2d.objects.sources.tfsf import TFSFBoundary
from fdtd2d.utils.logger import Logger, LoggerSink
from fdtd2d.utils.plot_field import plot_field
from fdtd2d.utils.sink import MemorySink, MultiSink, TextBlockSink

__all__ = [
    # general
    "constants",
    "SimulationConfig",
    "ConfigurationError",
    "InstabilityError",
    # jax
    "TreeClass",
    "autoinit",
    "field",
    "frozen_field",
    # metrics
    "compute_energy",
    "compute_line_energy",
    # fdtd
    "CoefficientContainer",
    "FieldState",
    "ObjectContainer",
    "SimulationState",
    "forward",
    "place_objects",
    "run_fdtd",
    # objects
    "CoefficientMap1D",
    "CoefficientMap2D",
    "boundary_objects_from_config",
    "MurBoundary",
    "IncidentLine",
    "RickerProfile",
    "SinusoidalProfile",
    "TFSFBoundary",
    "planewave",
    "ricker",
    # utils
    "Logger",
    "LoggerSink",
    "plot_field",
    "MemorySink",
    "MultiSink",
    "TextBlockSink",
]
