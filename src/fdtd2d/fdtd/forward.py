from fdtd2d.config import SimulationConfig
from fdtd2d.fdtd.container import CoefficientContainer, ObjectContainer, SimulationState
from fdtd2d.fdtd.update import update_E, update_H


def forward(
    state: SimulationState,
    objects: ObjectContainer,
    coefficients: CoefficientContainer,
    config: SimulationConfig,
    simulate_boundaries: bool = True,
    simulate_incident: bool = True,
) -> SimulationState:
    """Performs one forward time step of the FDTD simulation.

    Implements the leapfrog scheme of the TMz Yee grid. Updates include:
    1. Magnetic field update using the differences of Ez
    2. TFSF correction of the magnetic field with the incident Ez of the previous step
    3. Advance of the incident wave line, whose source is evaluated at the current time step
    4. TFSF correction of the electric field with the new incident Hy
    5. Electric field update using the curl of H
    6. Absorbing boundaries on all edges, in the order of objects.boundaries

    The incident field of the line is taken from the step before it is advanced, the
    magnetic corrections therefore lag the line by half a time step, as required by
    the staggering in time.

    Args:
        state (SimulationState): Tuple of the current time step and the field state
        objects (ObjectContainer): TFSF injector and absorbing boundaries
        coefficients (CoefficientContainer): Update coefficients of grid and line
        config (SimulationConfig): Simulation configuration
        simulate_boundaries (bool, optional): Whether to apply the absorbing boundaries. Defaults to True.
        simulate_incident (bool, optional): Whether to inject the incident plane wave. Defaults to True.

    Returns:
        SimulationState: Tuple of the incremented time step and the updated field state
    """
    del config
    time_step, arrays = state
    tfsf = objects.tfsf

    arrays = update_H(arrays=arrays, coefficients=coefficients.grid)

    if simulate_incident:
        Hx, Hy = tfsf.update_H(
            Hx=arrays.Hx,
            Hy=arrays.Hy,
            Ez1d=arrays.Ez1d,
            coefficients=coefficients.grid,
        )
        Ez1d, Hy1d = tfsf.update_line(
            Ez1d=arrays.Ez1d,
            Hy1d=arrays.Hy1d,
            coefficients=coefficients.line,
            time_step=time_step,
        )
        Ez = tfsf.update_E(
            Ez=arrays.Ez,
            Hy1d=Hy1d,
            coefficients=coefficients.grid,
        )
        arrays = arrays.at["Hx"].set(Hx)
        arrays = arrays.at["Hy"].set(Hy)
        arrays = arrays.at["Ez1d"].set(Ez1d)
        arrays = arrays.at["Hy1d"].set(Hy1d)
        arrays = arrays.at["Ez"].set(Ez)

    arrays = update_E(arrays=arrays, coefficients=coefficients.grid)

    if simulate_boundaries:
        Ez = arrays.Ez
        boundary_states = {}
        for boundary in objects.boundaries:
            Ez = boundary.update_E(
                Ez=Ez,
                boundary_state=arrays.boundary_states[boundary.name],
                coefficients=coefficients.grid,
            )
            boundary_states[boundary.name] = boundary.update_E_boundary_state(
                boundary_state=arrays.boundary_states[boundary.name],
                Ez=Ez,
            )
        arrays = arrays.at["Ez"].set(Ez)
        arrays = arrays.aset("boundary_states", boundary_states)

    return time_step + 1, arrays
