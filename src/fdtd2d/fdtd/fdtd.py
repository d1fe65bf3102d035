from functools import partial

import equinox.internal as eqxi
import jax
import jax.numpy as jnp

from fdtd2d.config import SimulationConfig
from fdtd2d.fdtd.container import CoefficientContainer, ObjectContainer, SimulationState
from fdtd2d.fdtd.forward import forward


def run_steps(
    state: SimulationState,
    end_time: int | jax.Array,
    objects: ObjectContainer,
    coefficients: CoefficientContainer,
    config: SimulationConfig,
    simulate_boundaries: bool = True,
    simulate_incident: bool = True,
) -> SimulationState:
    """Advances the simulation until the time step counter reaches end_time.

    The loop is a lax while loop, which compiles the time step once and lets XLA
    update the fields in place. The function can be jitted, in which case end_time
    may be a traced value and the same compiled loop is reused for every chunk.

    Args:
        state (SimulationState): Tuple of the current time step and the field state
        end_time (int | jax.Array): Time step counter at which the loop stops
        objects (ObjectContainer): TFSF injector and absorbing boundaries
        coefficients (CoefficientContainer): Update coefficients of grid and line
        config (SimulationConfig): Simulation configuration
        simulate_boundaries (bool, optional): Whether to apply the absorbing boundaries. Defaults to True.
        simulate_incident (bool, optional): Whether to inject the incident plane wave. Defaults to True.

    Returns:
        SimulationState: Tuple of the final time step and field state
    """
    time_step, arrays = state
    state = (jnp.asarray(time_step, dtype=jnp.int32), arrays)
    state = eqxi.while_loop(
        cond_fun=lambda s: end_time > s[0],
        body_fun=partial(
            forward,
            objects=objects,
            coefficients=coefficients,
            config=config,
            simulate_boundaries=simulate_boundaries,
            simulate_incident=simulate_incident,
        ),
        init_val=state,
        kind="lax",
    )
    return state


def next_chunk_end(
    time_step: int,
    config: SimulationConfig,
) -> int:
    """Computes the time step counter at which the next simulation chunk ends.

    A chunk ends right after the next sampled time step, i.e. after the step whose
    index is a multiple of sample_stride, or at the end of the simulation.

    Args:
        time_step (int): Number of time steps completed so far
        config (SimulationConfig): Simulation configuration

    Returns:
        int: Time step counter after the chunk
    """
    stride = config.sample_stride
    next_sample = -(-time_step // stride) * stride
    return min(next_sample + 1, config.time_steps_total)
