import jax
import jax.numpy as jnp
from loguru import logger

from fdtd2d.config import SimulationConfig
from fdtd2d.fdtd.container import CoefficientContainer, FieldState, ObjectContainer
from fdtd2d.materials import (
    CoefficientMap1D,
    CoefficientMap2D,
    lossy_coefficients,
    vacuum_coefficients,
    variance_factor,
)
from fdtd2d.objects.boundaries.initialization import boundary_objects_from_config
from fdtd2d.objects.sources.line import IncidentLine
from fdtd2d.objects.sources.profile import profile_from_config
from fdtd2d.objects.sources.tfsf import TFSFBoundary


def distance_to_scatterer(config: SimulationConfig) -> jax.Array:
    """Euclidean distance of every grid cell to the scatterer center.

    Args:
        config (SimulationConfig): Simulation configuration

    Returns:
        jax.Array: Distances of shape (N, N), indexed [x, y]
    """
    coords = jnp.arange(config.grid_size, dtype=config.dtype)
    x, y = jnp.meshgrid(coords, coords, indexing="ij")
    cx, cy = config.scatterer_center
    return jnp.sqrt((x - cx) ** 2 + (y - cy) ** 2)


def create_coefficients_2d(config: SimulationConfig) -> CoefficientMap2D:
    """Builds the update coefficients of the grid from the scatterer geometry.

    With the "void" material model every cell closer to the scatterer center than
    its radius gets all coefficients set to zero, which turns the scatterer into a
    perfect absorber. All other cells get the coefficients of free space.

    With the "lossy" material model the scatterer is a graded medium described by
    variance_factor and every cell, inside and outside, is attenuated by the
    configured loss factor.

    Args:
        config (SimulationConfig): Simulation configuration

    Returns:
        CoefficientMap2D: Coefficient maps of shape (N, N)
    """
    distance = distance_to_scatterer(config)
    inside = distance < config.scatterer_radius

    if config.material_model == "void":
        values = vacuum_coefficients(config.courant_number, config.impedance)
        maps = {k: jnp.where(inside, 0.0, v) for k, v in values.items()}
    elif config.material_model == "lossy":
        variance = jnp.where(inside, variance_factor(distance, config.scatterer_radius), 1.0)
        values = lossy_coefficients(config.courant_number, config.impedance, config.loss, variance)
        maps = {k: jnp.broadcast_to(jnp.asarray(v), config.grid_shape) for k, v in values.items()}
    else:
        raise Exception(f"Unknown material model: {config.material_model}")

    logger.info(
        f"Scatterer with radius {config.scatterer_radius} at {config.scatterer_center} covers "
        f"{int(inside.sum())} of {config.grid_size**2} cells ({config.material_model})"
    )
    return CoefficientMap2D(**{k: v.astype(config.dtype) for k, v in maps.items()})


def create_coefficients_1d(config: SimulationConfig) -> CoefficientMap1D:
    """Builds the free space update coefficients of the incident wave line.

    Args:
        config (SimulationConfig): Simulation configuration

    Returns:
        CoefficientMap1D: Coefficient arrays of shape (N,)
    """
    values = vacuum_coefficients(config.courant_number, config.impedance)
    return CoefficientMap1D(
        EzE=jnp.full((config.grid_size,), values["EzE"], dtype=config.dtype),
        EzH=jnp.full((config.grid_size,), values["EzH"], dtype=config.dtype),
        HyE=jnp.full((config.grid_size,), values["HyE"], dtype=config.dtype),
        HyH=jnp.full((config.grid_size,), values["HyH"], dtype=config.dtype),
    )


def init_field_state(
    config: SimulationConfig,
    objects: ObjectContainer,
) -> FieldState:
    """Creates the all-zero field state of time step zero.

    Args:
        config (SimulationConfig): Simulation configuration
        objects (ObjectContainer): Objects whose boundary states are initialized

    Returns:
        FieldState: Zero fields and zero boundary memory
    """
    boundary_states = {
        boundary.name: boundary.init_state(grid_size=config.grid_size, dtype=config.dtype)
        for boundary in objects.boundaries
    }
    return FieldState(
        Ez=jnp.zeros(config.grid_shape, dtype=config.dtype),
        Hx=jnp.zeros(config.grid_shape, dtype=config.dtype),
        Hy=jnp.zeros(config.grid_shape, dtype=config.dtype),
        Ez1d=jnp.zeros((config.grid_size,), dtype=config.dtype),
        Hy1d=jnp.zeros((config.grid_size,), dtype=config.dtype),
        boundary_states=boundary_states,
    )


def place_objects(
    config: SimulationConfig,
) -> tuple[ObjectContainer, FieldState, CoefficientContainer]:
    """Creates all objects, arrays and coefficients needed to run a simulation.

    Args:
        config (SimulationConfig): Simulation configuration

    Returns:
        tuple[ObjectContainer, FieldState, CoefficientContainer]: A tuple containing:
            - ObjectContainer with the TFSF injector and the four absorbing boundaries
            - FieldState of time step zero
            - CoefficientContainer with the grid and line coefficients
    """
    line = IncidentLine(
        source_position=config.source_position,
        profile=profile_from_config(config),
    )
    tfsf = TFSFBoundary(
        first=config.tfsf_first,
        last=config.tfsf_last,
        line=line,
    )
    boundaries = boundary_objects_from_config(config)
    objects = ObjectContainer(
        boundaries=list(boundaries.values()),
        tfsf=tfsf,
    )

    arrays = init_field_state(config=config, objects=objects)
    coefficients = CoefficientContainer(
        grid=create_coefficients_2d(config),
        line=create_coefficients_1d(config),
    )
    logger.info(
        f"Placed {len(objects.boundaries)} boundaries and TFSF box {config.tfsf_first}-{config.tfsf_last} "
        f"on a {config.grid_size}x{config.grid_size} grid"
    )
    return objects, arrays, coefficients
