import jax
import jax.numpy as jnp

from fdtd2d import constants
from fdtd2d.core.jax.pytrees import TreeClass, autoinit


@autoinit
class CoefficientMap2D(TreeClass):
    """Update coefficients of the two dimensional grid, each of shape (N, N).

    The names follow the pattern <updated field><source field>, e.g. EzH scales
    the curl of H in the update of Ez and EzE scales the previous value of Ez.
    A cell with all coefficients equal to zero is a void: its fields are reset
    to zero every time step.
    """

    #: Scaling of the previous Ez value
    EzE: jax.Array

    #: Scaling of the curl of H in the Ez update
    EzH: jax.Array

    #: Scaling of the Ez difference in the Hx update
    HxE: jax.Array

    #: Scaling of the previous Hx value
    HxH: jax.Array

    #: Scaling of the Ez difference in the Hy update
    HyE: jax.Array

    #: Scaling of the previous Hy value
    HyH: jax.Array


@autoinit
class CoefficientMap1D(TreeClass):
    """Update coefficients of the incident wave line, each of shape (N,)."""

    EzE: jax.Array
    EzH: jax.Array
    HyE: jax.Array
    HyH: jax.Array


def vacuum_coefficients(
    courant_number: float,
    impedance: float,
) -> dict[str, float]:
    """Coefficients of lossless free space.

    Args:
        courant_number (float): Courant number of the grid
        impedance (float): Free space impedance

    Returns:
        dict[str, float]: Values of EzE, EzH, HxE, HxH, HyE and HyH
    """
    return {
        "EzE": 1.0,
        "EzH": courant_number * impedance,
        "HxE": courant_number / impedance,
        "HxH": 1.0,
        "HyE": courant_number / impedance,
        "HyH": 1.0,
    }


def lossy_coefficients(
    courant_number: float,
    impedance: float,
    loss: float,
    variance: jax.Array | float = 1.0,
) -> dict[str, jax.Array | float]:
    """Coefficients of a lossy medium whose permittivity and permeability are scaled by 1 / variance**2.

    A variance of one describes a lossy vacuum, which reduces to vacuum_coefficients
    for loss = 0.

    Args:
        courant_number (float): Courant number of the grid
        impedance (float): Free space impedance
        loss (float): Loss factor in [0, 1)
        variance (jax.Array | float, optional): Geometric variance factor. Defaults to 1.

    Returns:
        dict[str, jax.Array | float]: Values of EzE, EzH, HxE, HxH, HyE and HyH
    """
    relative_scale = 1.0 / (variance * variance)
    decay = (1.0 - loss) / (1.0 + loss)
    magnetic = courant_number * (relative_scale / impedance) / (1.0 + loss)
    return {
        "EzE": decay,
        "EzH": courant_number * impedance * relative_scale / (1.0 - loss),
        "HxE": magnetic,
        "HxH": decay,
        "HyE": magnetic,
        "HyH": decay,
    }


def variance_factor(
    distance: jax.Array,
    radius: float,
) -> jax.Array:
    """Geometric variance factor of the graded scatterer.

    Solves the depressed cubic of the lens profile with Cardano's formula. The
    result diverges towards the center of the scatterer, values which are not
    finite or larger than constants.variance_limit in magnitude are clamped to
    that limit.

    Args:
        distance (jax.Array): Distance of each cell to the scatterer center
        radius (float): Radius of the scatterer

    Returns:
        jax.Array: Variance factor with the same shape as distance
    """
    ratio = radius / distance
    q = jnp.cbrt(-ratio + jnp.sqrt(ratio * ratio + 1.0 / 27.0))
    variance = (q - 1.0 / (3.0 * q)) ** 2
    limit = constants.variance_limit
    return jnp.where(jnp.isnan(variance) | (jnp.abs(variance) > limit), limit, variance)
