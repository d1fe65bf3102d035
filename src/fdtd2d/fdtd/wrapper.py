from functools import partial

import jax
import jax.numpy as jnp
import numpy as np
from loguru import logger
from rich.progress import Progress

from fdtd2d.config import SimulationConfig
from fdtd2d.core.errors import InstabilityError
from fdtd2d.fdtd.container import CoefficientContainer, FieldState, ObjectContainer, SimulationState
from fdtd2d.fdtd.fdtd import next_chunk_end, run_steps
from fdtd2d.utils.sink import FieldSink


def find_divergence(
    arrays: FieldState,
    threshold: float,
) -> tuple[str, float] | None:
    """Searches the fields for non-finite values or values above a threshold.

    Args:
        arrays (FieldState): Field state to check
        threshold (float): Largest accepted absolute field value

    Returns:
        tuple[str, float] | None: Name and largest absolute value of the first diverged
            field, or None if all fields are finite and below the threshold
    """
    fields = arrays.grid_fields | arrays.line_fields
    max_abs = jax.device_get({k: jnp.max(jnp.abs(v)) for k, v in fields.items()})
    for name, value in max_abs.items():
        value = float(value)
        if not np.isfinite(value) or value > threshold:
            return name, value
    return None


def run_fdtd(
    arrays: FieldState,
    objects: ObjectContainer,
    coefficients: CoefficientContainer,
    config: SimulationConfig,
    sink: FieldSink | None = None,
    progress: Progress | None = None,
    simulate_boundaries: bool = True,
    simulate_incident: bool = True,
) -> SimulationState:
    """Runs the full simulation of config.time_steps_total time steps.

    The time loop is compiled once and executed in chunks that end right after
    every sampled time step (every sample_stride-th step, starting with step 0).
    Between chunks the field state is handed to the sink and checked for
    divergence.

    Args:
        arrays (FieldState): Field state of time step zero
        objects (ObjectContainer): TFSF injector and absorbing boundaries
        coefficients (CoefficientContainer): Update coefficients of grid and line
        config (SimulationConfig): Simulation configuration
        sink (FieldSink | None, optional): Receiver of the sampled field states. Defaults to None.
        progress (Progress | None, optional): Rich progress bar to advance. Defaults to None.
        simulate_boundaries (bool, optional): Whether to apply the absorbing boundaries. Defaults to True.
        simulate_incident (bool, optional): Whether to inject the incident plane wave. Defaults to True.

    Returns:
        SimulationState: Tuple of the final time step and field state

    Raises:
        InstabilityError: If a field becomes non-finite or exceeds config.divergence_threshold
    """
    chunk_fn = jax.jit(
        partial(
            run_steps,
            config=config,
            simulate_boundaries=simulate_boundaries,
            simulate_incident=simulate_incident,
        )
    )
    task_id = None
    if progress is not None:
        task_id = progress.add_task("Simulating", total=config.time_steps_total)

    logger.info(f"Starting simulation of {config.time_steps_total} time steps")
    state: SimulationState = (jnp.asarray(0, dtype=jnp.int32), arrays)
    sample_steps = set(config.sample_time_steps)
    done = 0
    while done < config.time_steps_total:
        end = next_chunk_end(done, config)
        state = chunk_fn(
            state,
            end_time=jnp.asarray(end, dtype=jnp.int32),
            objects=objects,
            coefficients=coefficients,
        )
        _, arrays = state
        if progress is not None and task_id is not None:
            progress.update(task_id, advance=end - done)
        done = end

        divergence = find_divergence(arrays, config.divergence_threshold)
        if divergence is not None:
            field_name, max_abs = divergence
            logger.error(f"Field {field_name} diverged with max |{field_name}| = {max_abs:g} after time step {done}")
            raise InstabilityError(time_step=done, field_name=field_name, max_abs=max_abs)

        sampled = done - 1
        if sink is not None and sampled in sample_steps:
            sink.write(sampled, arrays)

    if progress is not None and task_id is not None:
        progress.update(task_id, visible=False)
    logger.info(f"Finished simulation after {done} time steps")
    return state
