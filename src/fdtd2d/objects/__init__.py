from fdtd2d.objects.boundaries.initialization import boundary_objects_from_config
from fdtd2d.objects.boundaries.mur import MurBoundary, MurBoundaryState
from fdtd2d.objects.sources.line import IncidentLine
from fdtd2d.objects.sources.profile import RickerProfile, SinusoidalProfile, TemporalProfile
from fdtd2d.objects.sources.tfsf import TFSFBoundary

__all__ = [
    "boundary_objects_from_config",
    "MurBoundary",
    "MurBoundaryState",
    "IncidentLine",
    "RickerProfile",
    "SinusoidalProfile",
    "TemporalProfile",
    "TFSFBoundary",
]
