import jax.numpy as jnp
import pytest

from fdtd2d.config import SimulationConfig
from fdtd2d.fdtd.initialization import (
    create_coefficients_1d,
    create_coefficients_2d,
    distance_to_scatterer,
    init_field_state,
    place_objects,
)
from fdtd2d.objects.boundaries.mur import MurBoundary, MurBoundaryState
from fdtd2d.objects.sources.profile import RickerProfile, SinusoidalProfile

COEFFICIENT_NAMES = ("EzE", "EzH", "HxE", "HxH", "HyE", "HyH")


def test_distance_to_scatterer(small_config):
    distance = distance_to_scatterer(small_config)
    assert distance.shape == (40, 40)
    assert float(distance[20, 14]) == 0.0
    assert float(distance[23, 18]) == pytest.approx(5.0)


def test_void_coefficients(small_config):
    """Vacuum values outside the scatterer, all coefficients zero inside"""
    coefficients = create_coefficients_2d(small_config)
    distance = distance_to_scatterer(small_config)
    inside = distance < small_config.scatterer_radius
    cour, imp = small_config.courant_number, small_config.impedance
    expected = {"EzE": 1.0, "EzH": cour * imp, "HxE": cour / imp, "HxH": 1.0, "HyE": cour / imp, "HyH": 1.0}

    for name in COEFFICIENT_NAMES:
        arr = getattr(coefficients, name)
        assert arr.shape == (40, 40)
        assert arr.dtype == jnp.float64
        assert jnp.all(jnp.where(inside, arr, 0.0) == 0.0)
        assert jnp.allclose(jnp.where(inside, expected[name], arr), expected[name])

    # boundary of the circle: distance == radius is outside
    assert float(coefficients.EzE[25, 14]) == 1.0
    assert float(coefficients.EzE[24, 14]) == 0.0


def test_lossy_coefficients_outside_equal_vacuum_without_loss(small_config):
    config = small_config.aset("material_model", "lossy")
    coefficients = create_coefficients_2d(config)
    void = create_coefficients_2d(small_config)
    outside = distance_to_scatterer(config) >= config.scatterer_radius
    for name in COEFFICIENT_NAMES:
        lossy_arr, void_arr = getattr(coefficients, name), getattr(void, name)
        assert jnp.allclose(jnp.where(outside, lossy_arr, 0.0), jnp.where(outside, void_arr, 0.0))
        assert jnp.all(jnp.isfinite(lossy_arr))


def test_lossy_coefficients_inside_are_scaled(small_config):
    config = small_config.aset("material_model", "lossy")
    coefficients = create_coefficients_2d(config)
    cour, imp = config.courant_number, config.impedance
    # at the center the variance is clamped to 1000
    assert float(coefficients.EzH[20, 14]) == pytest.approx(cour * imp / 1000.0**2)
    assert float(coefficients.EzE[20, 14]) == 1.0


def test_create_coefficients_1d(small_config):
    coefficients = create_coefficients_1d(small_config)
    cour, imp = small_config.courant_number, small_config.impedance
    assert coefficients.EzE.shape == (40,)
    assert jnp.allclose(coefficients.EzE, 1.0)
    assert jnp.allclose(coefficients.HyH, 1.0)
    assert jnp.allclose(coefficients.EzH, cour * imp)
    assert jnp.allclose(coefficients.HyE, cour / imp)


def test_place_objects(small_config):
    objects, arrays, coefficients = place_objects(small_config)

    assert objects.boundary_names == ["top", "bottom", "right", "left"]
    assert all(isinstance(b, MurBoundary) for b in objects.boundaries)
    assert objects.tfsf.first == (4, 4)
    assert objects.tfsf.last == (35, 35)
    assert objects.tfsf.line.source_position == 3
    assert isinstance(objects.tfsf.line.profile, RickerProfile)

    assert arrays.Ez.shape == (40, 40)
    assert arrays.Ez1d.shape == (40,)
    for arr in list(arrays.grid_fields.values()) + list(arrays.line_fields.values()):
        assert jnp.all(arr == 0)
        assert arr.dtype == jnp.float64
    assert set(arrays.boundary_states.keys()) == {"top", "bottom", "right", "left"}
    for state in arrays.boundary_states.values():
        assert isinstance(state, MurBoundaryState)
        assert state.history.shape == (3, 2, 40)

    assert coefficients.grid.EzE.shape == (40, 40)
    assert coefficients.line.EzE.shape == (40,)


def test_place_objects_with_sinusoidal_source():
    config = SimulationConfig(
        grid_size=20,
        scatterer_center=(10, 10),
        scatterer_radius=3.0,
        tfsf_first=(2, 2),
        tfsf_last=(17, 17),
        source_position=2,
        source_kind="sinusoidal",
    )
    objects, _, _ = place_objects(config)
    profile = objects.tfsf.line.profile
    assert isinstance(profile, SinusoidalProfile)
    assert profile.delay == 15.0
    assert profile.points_per_wavelength == 30.0


def test_object_lookup_by_name(small_config):
    objects, arrays, _ = place_objects(small_config)
    assert objects["left"].axis == 0
    assert objects["left"].direction == "-"
    with pytest.raises(ValueError):
        objects["front"]


def test_init_field_state_uses_config_dtype():
    config = SimulationConfig(
        grid_size=10,
        scatterer_center=(5, 5),
        scatterer_radius=2.0,
        tfsf_first=(2, 2),
        tfsf_last=(7, 7),
        source_position=1,
    )
    objects, _, _ = place_objects(config)
    arrays = init_field_state(config, objects)
    assert arrays.Ez.dtype == jnp.float32
    assert arrays.boundary_states["top"].history.dtype == jnp.float32
