from .errors import ConfigurationError, InstabilityError
from .physics.metrics import compute_energy, compute_line_energy

__all__ = ["ConfigurationError", "InstabilityError", "compute_energy", "compute_line_energy"]
