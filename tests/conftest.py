import jax
import jax.numpy as jnp
import pytest

from fdtd2d.config import SimulationConfig

# precision tests compare against analytical values in double precision
jax.config.update("jax_enable_x64", True)


@pytest.fixture
def small_config() -> SimulationConfig:
    """Small grid with the scatterer, TFSF box and source scaled down from the defaults."""
    return SimulationConfig(
        grid_size=40,
        time_steps_total=30,
        scatterer_center=(20, 14),
        scatterer_radius=5.0,
        tfsf_first=(4, 4),
        tfsf_last=(35, 35),
        source_position=3,
        dtype=jnp.float64,
    )
