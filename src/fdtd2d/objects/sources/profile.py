from abc import ABC, abstractmethod

import jax
import jax.numpy as jnp

from fdtd2d import constants
from fdtd2d.config import SimulationConfig
from fdtd2d.core.jax.pytrees import TreeClass, autoinit, frozen_field


def ricker(
    time: jax.Array | float,
    delay: jax.Array | float,
    courant_number: float,
    points_per_wavelength: float = constants.ricker_points_per_wavelength,
) -> jax.Array:
    """Ricker wavelet (second derivative of a Gaussian) sampled on the grid.

    The peak of value one is reached when courant_number * time - delay equals
    points_per_wavelength, the wavelet is symmetric about that time.

    Args:
        time (jax.Array | float): Time step, may be fractional
        delay (jax.Array | float): Delay of the wavelet in grid cells
        courant_number (float): Courant number of the grid
        points_per_wavelength (float, optional): Points per wavelength at the peak frequency. Defaults to 20.

    Returns:
        jax.Array: Amplitude of the wavelet
    """
    arg = jnp.pi * ((courant_number * time - delay) / points_per_wavelength - 1.0)
    arg = arg * arg
    return (1.0 - 2.0 * arg) * jnp.exp(-arg)


def planewave(
    time: jax.Array | float,
    delay: jax.Array | float,
    courant_number: float,
    points_per_wavelength: float = constants.sinusoidal_points_per_wavelength,
) -> jax.Array:
    """Continuous sinusoidal plane wave sampled on the grid.

    Args:
        time (jax.Array | float): Time step, may be fractional
        delay (jax.Array | float): Delay of the wave in grid cells
        courant_number (float): Courant number of the grid
        points_per_wavelength (float, optional): Points per wavelength. Defaults to 30.

    Returns:
        jax.Array: Amplitude of the wave
    """
    return jnp.sin((2 * jnp.pi / points_per_wavelength) * (courant_number * time - delay))


@autoinit
class TemporalProfile(TreeClass, ABC):
    """Base class for temporal profiles of the hard source on the incident wave line.

    This class defines how the source amplitude varies in time.
    """

    #: Courant number of the grid
    courant_number: float = frozen_field(default=constants.max_courant_number_2d)

    #: Delay of the profile in grid cells
    delay: float = frozen_field(default=0.0)

    @abstractmethod
    def get_amplitude(
        self,
        time_step: jax.Array,
    ) -> jax.Array:
        """Calculate the temporal amplitude at given time steps.

        Args:
            time_step (jax.Array): Time steps to evaluate amplitude at

        Returns:
            jax.Array: Amplitude values at the given time steps
        """
        raise NotImplementedError()


@autoinit
class RickerProfile(TemporalProfile):
    """Ricker wavelet pulse, the default source."""

    points_per_wavelength: float = frozen_field(default=constants.ricker_points_per_wavelength)

    def get_amplitude(
        self,
        time_step: jax.Array,
    ) -> jax.Array:
        return ricker(time_step, self.delay, self.courant_number, self.points_per_wavelength)


@autoinit
class SinusoidalProfile(TemporalProfile):
    """Continuous sinusoidal plane wave switched on at time step zero."""

    points_per_wavelength: float = frozen_field(default=constants.sinusoidal_points_per_wavelength)

    def get_amplitude(
        self,
        time_step: jax.Array,
    ) -> jax.Array:
        return planewave(time_step, self.delay, self.courant_number, self.points_per_wavelength)


def profile_from_config(config: SimulationConfig) -> TemporalProfile:
    """Creates the temporal profile selected by config.source_kind.

    Args:
        config (SimulationConfig): Simulation configuration

    Returns:
        TemporalProfile: Ricker or sinusoidal profile with the configured parameters
    """
    kwargs = {
        "courant_number": config.courant_number,
        "delay": config.resolved_source_delay,
        "points_per_wavelength": config.resolved_points_per_wavelength,
    }
    if config.source_kind == "ricker":
        return RickerProfile(**kwargs)
    elif config.source_kind == "sinusoidal":
        return SinusoidalProfile(**kwargs)
    raise Exception(f"Unknown source kind: {config.source_kind}")
