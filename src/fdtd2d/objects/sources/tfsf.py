import jax

from fdtd2d.core.jax.pytrees import TreeClass, autoinit, frozen_field
from fdtd2d.materials import CoefficientMap1D, CoefficientMap2D
from fdtd2d.objects.sources.line import IncidentLine
from fdtd2d.typing import GridIndex2D


@autoinit
class TFSFBoundary(TreeClass):
    """Total-field/scattered-field boundary injecting a plane wave travelling in +x.

    Inside the rectangle [first, last] the grid holds the total field, outside only
    the scattered field. The incident field is taken from an auxiliary line, and
    the tangential fields on both sides of the rectangle are corrected by the
    incident field so that the plane wave appears inside the box only.

    The incident wave travels along x, so only the Hy corrections on the left and
    right faces and the Hx corrections on the bottom and top faces are non-zero
    (the incident Hx vanishes, and the incident Ez is constant along y).
    """

    #: Lower left corner (x, y) of the total field region
    first: GridIndex2D = frozen_field(default=(10, 10))

    #: Upper right corner (x, y) of the total field region, inclusive
    last: GridIndex2D = frozen_field(default=(290, 290))

    #: Auxiliary line providing the incident field
    line: IncidentLine = IncidentLine()

    def update_H(
        self,
        Hx: jax.Array,
        Hy: jax.Array,
        Ez1d: jax.Array,
        coefficients: CoefficientMap2D,
    ) -> tuple[jax.Array, jax.Array]:
        """Corrects the magnetic field next to the faces of the TFSF box.

        Args:
            Hx (jax.Array): Magnetic field in x direction after the grid update
            Hy (jax.Array): Magnetic field in y direction after the grid update
            Ez1d (jax.Array): Incident electric field of the previous time step
            coefficients (CoefficientMap2D): Update coefficients of the grid

        Returns:
            tuple[jax.Array, jax.Array]: Corrected (Hx, Hy)
        """
        (x0, y0), (x1, y1) = self.first, self.last
        ys = slice(y0, y1 + 1)
        xs = slice(x0, x1 + 1)

        # left and right faces
        Hy = Hy.at[x1, ys].add(coefficients.HyE[x1, ys] * Ez1d[x1])
        Hy = Hy.at[x0 - 1, ys].add(-coefficients.HyE[x0 - 1, ys] * Ez1d[x0])

        # bottom and top faces
        Hx = Hx.at[xs, y1].add(-coefficients.HxE[xs, y1] * Ez1d[xs])
        Hx = Hx.at[xs, y0 - 1].add(coefficients.HxE[xs, y0 - 1] * Ez1d[xs])
        return Hx, Hy

    def update_line(
        self,
        Ez1d: jax.Array,
        Hy1d: jax.Array,
        coefficients: CoefficientMap1D,
        time_step: jax.Array,
    ) -> tuple[jax.Array, jax.Array]:
        """Advances the incident field by one time step, see IncidentLine.update."""
        return self.line.update(
            Ez1d=Ez1d,
            Hy1d=Hy1d,
            coefficients=coefficients,
            time_step=time_step,
        )

    def update_E(
        self,
        Ez: jax.Array,
        Hy1d: jax.Array,
        coefficients: CoefficientMap2D,
    ) -> jax.Array:
        """Corrects the electric field on the left and right faces of the TFSF box.

        Args:
            Ez (jax.Array): Electric field before the grid update
            Hy1d (jax.Array): Incident magnetic field of the current time step
            coefficients (CoefficientMap2D): Update coefficients of the grid

        Returns:
            jax.Array: Corrected Ez
        """
        (x0, y0), (x1, y1) = self.first, self.last
        ys = slice(y0, y1 + 1)
        Ez = Ez.at[x1, ys].add(coefficients.EzH[x1, ys] * Hy1d[x1])
        Ez = Ez.at[x0, ys].add(-coefficients.EzH[x0, ys] * Hy1d[x0 - 1])
        return Ez
