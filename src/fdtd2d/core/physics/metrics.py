"""Field energy metrics.

This module provides functions for monitoring the electromagnetic energy of the
grid and of the incident wave line. The update equations use fields in which Ez
and impedance * H carry the same unit, so the magnetic contributions are scaled by
the squared impedance.
"""

import jax
import jax.numpy as jnp


def compute_energy(
    Ez: jax.Array,
    Hx: jax.Array,
    Hy: jax.Array,
    impedance: float,
) -> jax.Array:
    """Computes the electromagnetic energy density of the TMz field.

    Args:
        Ez (jax.Array): Electric field with shape (nx, ny)
        Hx (jax.Array): Magnetic field in x direction with shape (nx, ny)
        Hy (jax.Array): Magnetic field in y direction with shape (nx, ny)
        impedance (float): Free space impedance used in the update coefficients

    Returns:
        jax.Array: Energy density with shape (nx, ny)
    """
    energy_E = 0.5 * jnp.square(Ez)
    energy_H = 0.5 * impedance**2 * (jnp.square(Hx) + jnp.square(Hy))
    return energy_E + energy_H


def compute_line_energy(
    Ez1d: jax.Array,
    Hy1d_previous: jax.Array,
    Hy1d: jax.Array,
    impedance: float,
) -> jax.Array:
    """Computes the discrete energy of the incident wave line.

    Electric and magnetic field live half a time step apart. The product of the
    magnetic fields before and after the half step enclosing Ez1d gives a quantity
    that the lossless leapfrog update conserves exactly, as long as no source
    writes into the line and the end cells stay zero.

    Args:
        Ez1d (jax.Array): Electric field at time step n
        Hy1d_previous (jax.Array): Magnetic field at time step n - 1/2
        Hy1d (jax.Array): Magnetic field at time step n + 1/2
        impedance (float): Free space impedance used in the update coefficients

    Returns:
        jax.Array: Scalar energy of the line
    """
    return jnp.sum(jnp.square(Ez1d)) + impedance**2 * jnp.sum(Hy1d_previous * Hy1d)
