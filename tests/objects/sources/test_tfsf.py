import math

import jax
import jax.numpy as jnp
import numpy as np
import pytest

from fdtd2d.materials import CoefficientMap1D, CoefficientMap2D
from fdtd2d.objects.sources.line import IncidentLine
from fdtd2d.objects.sources.profile import RickerProfile
from fdtd2d.objects.sources.tfsf import TFSFBoundary

COURANT = 1 / math.sqrt(2)
IMPEDANCE = 377.0
N = 16


@pytest.fixture
def coefficients() -> CoefficientMap2D:
    ones = jnp.ones((N, N))
    return CoefficientMap2D(
        EzE=ones,
        EzH=ones * COURANT * IMPEDANCE,
        HxE=ones * COURANT / IMPEDANCE,
        HxH=ones,
        HyE=ones * COURANT / IMPEDANCE,
        HyH=ones,
    )


@pytest.fixture
def line_coefficients() -> CoefficientMap1D:
    ones = jnp.ones((N,))
    return CoefficientMap1D(
        EzE=ones,
        EzH=ones * COURANT * IMPEDANCE,
        HyE=ones * COURANT / IMPEDANCE,
        HyH=ones,
    )


@pytest.fixture
def tfsf() -> TFSFBoundary:
    return TFSFBoundary(
        first=(3, 4),
        last=(11, 12),
        line=IncidentLine(source_position=1, profile=RickerProfile(courant_number=COURANT)),
    )


def _random_fields(seed: int = 0):
    keys = jax.random.split(jax.random.PRNGKey(seed), 3)
    return tuple(jax.random.normal(k, (N, N), dtype=jnp.float64) for k in keys)


def test_zero_incident_field_changes_nothing(tfsf, coefficients):
    Ez, Hx, Hy = _random_fields()
    zeros = jnp.zeros((N,))
    new_Hx, new_Hy = tfsf.update_H(Hx, Hy, zeros, coefficients)
    new_Ez = tfsf.update_E(Ez, zeros, coefficients)
    assert jnp.array_equal(new_Hx, Hx)
    assert jnp.array_equal(new_Hy, Hy)
    assert jnp.array_equal(new_Ez, Ez)


def test_magnetic_corrections(tfsf, coefficients):
    Ez, Hx, Hy = _random_fields(1)
    Ez1d = jnp.arange(N, dtype=jnp.float64) + 1.0
    new_Hx, new_Hy = tfsf.update_H(Hx, Hy, Ez1d, coefficients)

    factor = COURANT / IMPEDANCE
    expected_Hx, expected_Hy = np.asarray(Hx).copy(), np.asarray(Hy).copy()
    for y in range(4, 13):
        expected_Hy[11, y] += factor * Ez1d[11]
        expected_Hy[2, y] -= factor * Ez1d[3]
    for x in range(3, 12):
        expected_Hx[x, 12] -= factor * Ez1d[x]
        expected_Hx[x, 3] += factor * Ez1d[x]

    assert np.allclose(new_Hx, expected_Hx)
    assert np.allclose(new_Hy, expected_Hy)


def test_electric_corrections(tfsf, coefficients):
    Ez, _, _ = _random_fields(2)
    Hy1d = jnp.linspace(0.1, 1.6, N)
    new_Ez = tfsf.update_E(Ez, Hy1d, coefficients)

    factor = COURANT * IMPEDANCE
    expected = np.asarray(Ez).copy()
    for y in range(4, 13):
        expected[11, y] += factor * Hy1d[11]
        expected[3, y] -= factor * Hy1d[2]

    assert np.allclose(new_Ez, expected)
    # rows outside the box are untouched
    assert jnp.array_equal(new_Ez[:, :4], Ez[:, :4])
    assert jnp.array_equal(new_Ez[:, 13:], Ez[:, 13:])


def test_update_line_delegates_to_incident_line(tfsf, line_coefficients):
    Ez1d, Hy1d = jnp.zeros((N,)), jnp.zeros((N,))
    time_step = jnp.asarray(5)
    expected = tfsf.line.update(Ez1d, Hy1d, line_coefficients, time_step)
    result = tfsf.update_line(Ez1d, Hy1d, line_coefficients, time_step)
    assert jnp.array_equal(result[0], expected[0])
    assert jnp.array_equal(result[1], expected[1])
