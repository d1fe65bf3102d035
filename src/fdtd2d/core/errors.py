class ConfigurationError(ValueError):
    """Raised when a simulation configuration cannot be run.

    Raised during construction of a SimulationConfig, i.e. before any array is
    allocated or any time step is taken.
    """


class InstabilityError(RuntimeError):
    """Raised when the field values of a running simulation diverge.

    Attributes:
        time_step (int): Number of completed time steps when the divergence was detected.
        field_name (str): Name of the first field array found to be non-finite or too large.
        max_abs (float): Largest absolute value of that array (nan or inf if non-finite).
    """

    def __init__(self, time_step: int, field_name: str, max_abs: float):
        self.time_step = time_step
        self.field_name = field_name
        self.max_abs = max_abs
        super().__init__(
            f"Simulation became unstable after {time_step} time steps: "
            f"{field_name} reached max |value| = {max_abs}. "
            "Check the Courant number and the material coefficients."
        )
