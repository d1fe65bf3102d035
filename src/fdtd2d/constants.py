"""Module containing physical and numerical constants for the 2D FDTD simulation.

The update equations work in normalized units: space is measured in grid cells
and time in time steps. The only physical quantity entering the coefficients is
the impedance of free space, which scales the magnetic field relative to the
electric field.
"""

import math

c: float = 299792458.0
"""Speed of light in vacuum (m/s)."""

mu0: float = 4e-7 * math.pi
"""Vacuum permeability (H/m)."""

eps0: float = 1.0 / (mu0 * c**2)
"""Vacuum permittivity (F/m)."""

eta0: float = mu0 * c
"""Free space impedance (Ohm)."""

default_impedance: float = 377.0
"""Rounded free space impedance used by the update coefficients."""

max_courant_number_2d: float = 1.0 / math.sqrt(2.0)
"""Largest stable Courant number of a 2D grid with square cells (CFL condition)."""

ricker_points_per_wavelength: float = 20.0
"""Points per wavelength at the peak frequency of the default Ricker wavelet."""

sinusoidal_points_per_wavelength: float = 30.0
"""Points per wavelength of the continuous plane wave source."""

sinusoidal_delay: float = 15.0
"""Delay (in grid cells) of the continuous plane wave source."""

variance_limit: float = 1000.0
"""Upper bound of the geometric variance factor of the lossy material model."""
