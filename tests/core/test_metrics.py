import jax.numpy as jnp
import pytest

from fdtd2d.core.physics.metrics import compute_energy, compute_line_energy


def test_compute_energy_density():
    Ez = jnp.asarray([[1.0, 0.0], [0.0, 2.0]])
    Hx = jnp.asarray([[0.0, 1.0], [0.0, 0.0]])
    Hy = jnp.asarray([[0.0, 0.0], [1.0, 0.0]])
    energy = compute_energy(Ez, Hx, Hy, impedance=2.0)
    assert energy.shape == (2, 2)
    assert jnp.allclose(energy, jnp.asarray([[0.5, 2.0], [2.0, 2.0]]))


def test_compute_energy_is_zero_for_zero_fields():
    zeros = jnp.zeros((3, 3))
    assert jnp.all(compute_energy(zeros, zeros, zeros, impedance=377.0) == 0)


def test_compute_line_energy():
    Ez1d = jnp.asarray([0.0, 1.0, 2.0, 0.0])
    Hy_previous = jnp.asarray([0.0, 0.1, 0.2, 0.0])
    Hy = jnp.asarray([0.0, 0.3, -0.1, 0.0])
    energy = compute_line_energy(Ez1d, Hy_previous, Hy, impedance=10.0)
    assert float(energy) == pytest.approx(5.0 + 100.0 * (0.03 - 0.02))
