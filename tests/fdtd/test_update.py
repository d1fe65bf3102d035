import jax
import jax.numpy as jnp
import numpy as np
import pytest

from fdtd2d.fdtd.container import FieldState
from fdtd2d.fdtd.update import update_E, update_H
from fdtd2d.materials import CoefficientMap2D


def _random_setup(n: int = 7, seed: int = 0):
    keys = jax.random.split(jax.random.PRNGKey(seed), 9)
    shape = (n, n)
    arrays = FieldState(
        Ez=jax.random.normal(keys[0], shape, dtype=jnp.float64),
        Hx=jax.random.normal(keys[1], shape, dtype=jnp.float64),
        Hy=jax.random.normal(keys[2], shape, dtype=jnp.float64),
        Ez1d=jnp.zeros((n,)),
        Hy1d=jnp.zeros((n,)),
        boundary_states={},
    )
    coefficients = CoefficientMap2D(
        EzE=jax.random.uniform(keys[3], shape, dtype=jnp.float64),
        EzH=jax.random.uniform(keys[4], shape, dtype=jnp.float64),
        HxE=jax.random.uniform(keys[5], shape, dtype=jnp.float64),
        HxH=jax.random.uniform(keys[6], shape, dtype=jnp.float64),
        HyE=jax.random.uniform(keys[7], shape, dtype=jnp.float64),
        HyH=jax.random.uniform(keys[8], shape, dtype=jnp.float64),
    )
    return arrays, coefficients


class TestUpdateH:
    @pytest.fixture
    def setup(self):
        return _random_setup()

    def test_matches_cellwise_equations(self, setup):
        arrays, c = setup
        new = update_H(arrays, c)

        Ez, Hx, Hy = (np.asarray(a) for a in (arrays.Ez, arrays.Hx, arrays.Hy))
        n = Ez.shape[0]
        expected_Hx, expected_Hy = Hx.copy(), Hy.copy()
        for x in range(n):
            for y in range(n - 1):
                expected_Hx[x, y] = c.HxH[x, y] * Hx[x, y] - c.HxE[x, y] * (Ez[x, y + 1] - Ez[x, y])
        for x in range(n - 1):
            for y in range(n):
                expected_Hy[x, y] = c.HyH[x, y] * Hy[x, y] + c.HyE[x, y] * (Ez[x + 1, y] - Ez[x, y])

        assert np.allclose(new.Hx, expected_Hx)
        assert np.allclose(new.Hy, expected_Hy)

    def test_far_row_and_column_untouched(self, setup):
        arrays, c = setup
        new = update_H(arrays, c)
        assert jnp.array_equal(new.Hx[:, -1], arrays.Hx[:, -1])
        assert jnp.array_equal(new.Hy[-1, :], arrays.Hy[-1, :])

    def test_last_column_of_Hx_advances(self):
        n = 5
        zeros = jnp.zeros((n, n), dtype=jnp.float64)
        ones = jnp.ones((n, n), dtype=jnp.float64)
        arrays = FieldState(
            Ez=zeros.at[n - 1, 1].set(1.0),
            Hx=zeros,
            Hy=zeros,
            Ez1d=jnp.zeros((n,)),
            Hy1d=jnp.zeros((n,)),
            boundary_states={},
        )
        c = CoefficientMap2D(EzE=ones, EzH=ones, HxE=0.5 * ones, HxH=ones, HyE=0.5 * ones, HyH=ones)
        new = update_H(arrays, c)
        assert new.Hx[n - 1, 0] == pytest.approx(-0.5)
        assert new.Hx[n - 1, 1] == pytest.approx(0.5)
        assert new.Hx[n - 1, n - 1] == 0

    def test_electric_field_unchanged(self, setup):
        arrays, c = setup
        new = update_H(arrays, c)
        assert jnp.array_equal(new.Ez, arrays.Ez)


class TestUpdateE:
    @pytest.fixture
    def setup(self):
        return _random_setup(seed=1)

    def test_matches_cellwise_equations(self, setup):
        arrays, c = setup
        new = update_E(arrays, c)

        Ez, Hx, Hy = (np.asarray(a) for a in (arrays.Ez, arrays.Hx, arrays.Hy))
        n = Ez.shape[0]
        expected = Ez.copy()
        for x in range(1, n - 1):
            for y in range(1, n - 1):
                curl = (Hy[x, y] - Hy[x - 1, y]) - (Hx[x, y] - Hx[x, y - 1])
                expected[x, y] = c.EzE[x, y] * Ez[x, y] + c.EzH[x, y] * curl

        assert np.allclose(new.Ez, expected)

    def test_outer_ring_untouched(self, setup):
        arrays, c = setup
        new = update_E(arrays, c)
        for edge in (np.s_[0, :], np.s_[-1, :], np.s_[:, 0], np.s_[:, -1]):
            assert jnp.array_equal(new.Ez[edge], arrays.Ez[edge])

    def test_magnetic_field_unchanged(self, setup):
        arrays, c = setup
        new = update_E(arrays, c)
        assert jnp.array_equal(new.Hx, arrays.Hx)
        assert jnp.array_equal(new.Hy, arrays.Hy)


def test_void_coefficients_zero_the_fields():
    arrays, c = _random_setup(n=5, seed=2)
    zeros = jnp.zeros((5, 5))
    void = CoefficientMap2D(EzE=zeros, EzH=zeros, HxE=zeros, HxH=zeros, HyE=zeros, HyH=zeros)
    new = update_E(update_H(arrays, void), void)
    assert jnp.all(new.Hx[:, :-1] == 0)
    assert jnp.all(new.Hy[:-1, :] == 0)
    assert jnp.all(new.Ez[1:-1, 1:-1] == 0)
