import math

import jax
import jax.numpy as jnp
import numpy as np
import pytest

from fdtd2d.config import SimulationConfig
from fdtd2d.materials import CoefficientMap2D
from fdtd2d.objects.boundaries.initialization import boundary_objects_from_config
from fdtd2d.objects.boundaries.mur import MurBoundary, MurBoundaryState, mur_coefficients

COURANT = 1 / math.sqrt(2)
IMPEDANCE = 377.0
N = 10


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


def test_mur_coefficients(coefficients):
    c1, c2, c3 = mur_coefficients(coefficients)
    t = COURANT
    d = 1 / t + 2 + t
    assert float(c1) == pytest.approx(-(1 / t - 2 + t) / d)
    assert float(c2) == pytest.approx(-2 * (t - 1 / t) / d)
    assert float(c3) == pytest.approx(4 * (t + 1 / t) / d)
    assert float(2 * c1 + c3) == pytest.approx(2.0)


@pytest.mark.parametrize("axis,direction,name", [(0, "-", "left"), (0, "+", "right"), (1, "-", "bottom"), (1, "+", "top")])
def test_descriptive_name(axis, direction, name):
    assert MurBoundary(axis=axis, direction=direction).name == name


@pytest.mark.parametrize("axis,direction", [(0, "-"), (0, "+"), (1, "-"), (1, "+")])
def test_uniform_field_is_a_fixed_point(axis, direction, coefficients):
    """Uniform history equal to the interior value leaves the edge unchanged"""
    boundary = MurBoundary(axis=axis, direction=direction)
    value = 0.37
    Ez = jnp.full((N, N), value)
    state = MurBoundaryState(history=jnp.full((3, 2, N), value))
    new_Ez = boundary.update_E(Ez, state, coefficients)
    assert jnp.allclose(new_Ez, value, rtol=1e-12)


def test_edge_value_formula(coefficients):
    boundary = MurBoundary(axis=1, direction="+")
    keys = jax.random.split(jax.random.PRNGKey(0), 2)
    Ez = jax.random.normal(keys[0], (N, N), dtype=jnp.float64)
    history = jax.random.normal(keys[1], (3, 2, N), dtype=jnp.float64)
    state = MurBoundaryState(history=history)

    new_Ez = boundary.update_E(Ez, state, coefficients)

    c1, c2, c3 = (float(c) for c in mur_coefficients(coefficients))
    h = np.asarray(history)
    expected = (
        c1 * (Ez[:, N - 3] + h[0, 1])
        + c2 * (h[0, 0] + h[2, 0] - Ez[:, N - 2] - h[1, 1])
        + c3 * h[1, 0]
        - h[2, 1]
    )
    assert np.allclose(new_Ez[:, N - 1], expected)
    assert jnp.array_equal(new_Ez[:, : N - 1], Ez[:, : N - 1])


def test_history_shift():
    boundary = MurBoundary(axis=0, direction="-")
    Ez = jnp.arange(N * N, dtype=jnp.float64).reshape(N, N)
    old = jnp.arange(3 * 2 * N, dtype=jnp.float64).reshape(3, 2, N) * -1.0
    state = boundary.update_E_boundary_state(MurBoundaryState(history=old), Ez)
    for k in range(3):
        assert jnp.array_equal(state.history[k, 0], Ez[k, :])
        assert jnp.array_equal(state.history[k, 1], old[k, 0])


def test_history_shift_upper_edge():
    boundary = MurBoundary(axis=0, direction="+")
    Ez = jnp.arange(N * N, dtype=jnp.float64).reshape(N, N)
    state = boundary.init_state(grid_size=N, dtype=jnp.float64)
    state = boundary.update_E_boundary_state(state, Ez)
    for k in range(3):
        assert jnp.array_equal(state.history[k, 0], Ez[N - 1 - k, :])
        assert jnp.all(state.history[k, 1] == 0)


def test_init_and_reset_state():
    boundary = MurBoundary(axis=1, direction="-")
    state = boundary.init_state(grid_size=N, dtype=jnp.float32)
    assert state.history.shape == (3, 2, N)
    assert state.history.dtype == jnp.float32
    assert jnp.all(state.history == 0)

    state = state.at["history"].set(jnp.ones((3, 2, N), dtype=jnp.float32))
    state = boundary.reset_state(state)
    assert jnp.all(state.history == 0)


def test_skip_corner_treatment_leaves_corners(coefficients):
    boundary = MurBoundary(axis=1, direction="-", corner_treatment="skip")
    Ez = jnp.full((N, N), 2.0)
    state = MurBoundaryState(history=jnp.zeros((3, 2, N)))
    new_Ez = boundary.update_E(Ez, state, coefficients)
    assert float(new_Ez[0, 0]) == 2.0
    assert float(new_Ez[N - 1, 0]) == 2.0
    assert not jnp.allclose(new_Ez[1:-1, 0], 2.0)


def test_boundary_objects_from_config_order():
    config = SimulationConfig(corner_treatment="skip")
    boundaries = boundary_objects_from_config(config)
    assert list(boundaries.keys()) == ["top", "bottom", "right", "left"]
    assert boundaries["top"].axis == 1
    assert boundaries["top"].direction == "+"
    assert boundaries["left"].axis == 0
    assert boundaries["left"].direction == "-"
    assert all(b.corner_treatment == "skip" for b in boundaries.values())
