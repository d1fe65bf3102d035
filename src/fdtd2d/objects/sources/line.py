import jax

from fdtd2d.core.jax.pytrees import TreeClass, autoinit, frozen_field
from fdtd2d.materials import CoefficientMap1D
from fdtd2d.objects.sources.profile import RickerProfile, TemporalProfile


def update_H_1d(
    Ez1d: jax.Array,
    Hy1d: jax.Array,
    coefficients: CoefficientMap1D,
) -> jax.Array:
    """Updates the magnetic field of the incident wave line.

    Hy1d[x] for x in [1, N-2] is advanced by the forward difference of Ez1d, the
    first and last cell keep their values.

    Args:
        Ez1d (jax.Array): Electric field of the line, shape (N,)
        Hy1d (jax.Array): Magnetic field of the line, shape (N,)
        coefficients (CoefficientMap1D): Update coefficients of the line

    Returns:
        jax.Array: Updated Hy1d
    """
    update = coefficients.HyH[1:-1] * Hy1d[1:-1] + coefficients.HyE[1:-1] * (Ez1d[2:] - Ez1d[1:-1])
    return Hy1d.at[1:-1].set(update)


def update_E_1d(
    Ez1d: jax.Array,
    Hy1d: jax.Array,
    coefficients: CoefficientMap1D,
) -> jax.Array:
    """Updates the electric field of the incident wave line.

    Ez1d[x] for x in [1, N-2] is advanced by the backward difference of Hy1d, the
    first and last cell keep their values.

    Args:
        Ez1d (jax.Array): Electric field of the line, shape (N,)
        Hy1d (jax.Array): Magnetic field of the line, shape (N,)
        coefficients (CoefficientMap1D): Update coefficients of the line

    Returns:
        jax.Array: Updated Ez1d
    """
    update = coefficients.EzE[1:-1] * Ez1d[1:-1] + coefficients.EzH[1:-1] * (Hy1d[1:-1] - Hy1d[:-2])
    return Ez1d.at[1:-1].set(update)


@autoinit
class IncidentLine(TreeClass):
    """Auxiliary 1D FDTD line generating the incident plane wave.

    The line runs along the x axis of the grid, Ez1d[x] is the incident electric
    field in column x of the grid. A hard source overwrites one cell of the line
    after every update.
    """

    #: Index of the hard source on the line
    source_position: int = frozen_field(default=10)

    #: Temporal profile written into the source cell
    profile: TemporalProfile = RickerProfile()

    def update(
        self,
        Ez1d: jax.Array,
        Hy1d: jax.Array,
        coefficients: CoefficientMap1D,
        time_step: jax.Array,
    ) -> tuple[jax.Array, jax.Array]:
        """Advances the line by one time step and writes the source value.

        Args:
            Ez1d (jax.Array): Electric field of the line
            Hy1d (jax.Array): Magnetic field of the line
            coefficients (CoefficientMap1D): Update coefficients of the line
            time_step (jax.Array): Time step at which the source is evaluated

        Returns:
            tuple[jax.Array, jax.Array]: Updated (Ez1d, Hy1d)
        """
        Hy1d = update_H_1d(Ez1d=Ez1d, Hy1d=Hy1d, coefficients=coefficients)
        Ez1d = update_E_1d(Ez1d=Ez1d, Hy1d=Hy1d, coefficients=coefficients)
        amplitude = self.profile.get_amplitude(time_step)
        Ez1d = Ez1d.at[self.source_position].set(amplitude.astype(Ez1d.dtype))
        return Ez1d, Hy1d
