from fdtd2d.fdtd.container import FieldState
from fdtd2d.materials import CoefficientMap2D


def update_H(
    arrays: FieldState,
    coefficients: CoefficientMap2D,
) -> FieldState:
    """Updates the magnetic field (Hx, Hy) of the grid by one time step.

    Implements the discretized form of dH/dt = -(1/mu) curl E for TMz polarization:
    Hx[x, y] is advanced by the difference of Ez along y for all x and y in [0, N-2],
    and Hy[x, y] by the difference of Ez along x for x in [0, N-2] and all y. Hx at
    y = N-1 and Hy at x = N-1 keep their values.

    Args:
        arrays (FieldState): Field state with Ez, Hx and Hy of shape (N, N)
        coefficients (CoefficientMap2D): Update coefficients of the grid

    Returns:
        FieldState: Field state with updated Hx and Hy
    """
    Ez, Hx, Hy = arrays.Ez, arrays.Hx, arrays.Hy
    c = coefficients

    Hx = Hx.at[:, :-1].set(c.HxH[:, :-1] * Hx[:, :-1] - c.HxE[:, :-1] * (Ez[:, 1:] - Ez[:, :-1]))
    Hy = Hy.at[:-1, :].set(c.HyH[:-1, :] * Hy[:-1, :] + c.HyE[:-1, :] * (Ez[1:, :] - Ez[:-1, :]))

    arrays = arrays.at["Hx"].set(Hx)
    arrays = arrays.at["Hy"].set(Hy)
    return arrays


def update_E(
    arrays: FieldState,
    coefficients: CoefficientMap2D,
) -> FieldState:
    """Updates the electric field Ez of the grid by one time step.

    Implements the discretized form of dE/dt = (1/eps) curl H for TMz polarization
    on all interior cells x, y in [1, N-2]. The outermost ring of cells is left to
    the absorbing boundaries.

    Args:
        arrays (FieldState): Field state with Ez, Hx and Hy of shape (N, N)
        coefficients (CoefficientMap2D): Update coefficients of the grid

    Returns:
        FieldState: Field state with updated Ez
    """
    Ez, Hx, Hy = arrays.Ez, arrays.Hx, arrays.Hy
    c = coefficients
    inner = (slice(1, -1), slice(1, -1))

    curl = (Hy[1:-1, 1:-1] - Hy[:-2, 1:-1]) - (Hx[1:-1, 1:-1] - Hx[1:-1, :-2])
    Ez = Ez.at[inner].set(c.EzE[inner] * Ez[inner] + c.EzH[inner] * curl)

    arrays = arrays.at["Ez"].set(Ez)
    return arrays
