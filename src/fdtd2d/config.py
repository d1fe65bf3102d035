import math

import jax
import jax.numpy as jnp
from loguru import logger

from fdtd2d import constants
from fdtd2d.core.errors import ConfigurationError
from fdtd2d.core.jax.pytrees import TreeClass, autoinit, frozen_field
from fdtd2d.typing import BackendOption, CornerTreatment, GridIndex2D, GridShape2D, MaterialModel, SourceKind

_SOURCE_KINDS = ("ricker", "sinusoidal")
_MATERIAL_MODELS = ("void", "lossy")
_CORNER_TREATMENTS = ("sequential", "skip")
_BACKENDS = ("cpu", "gpu", "tpu")


@autoinit
class SimulationConfig(TreeClass):
    """Configuration settings for a 2D TMz FDTD scattering simulation.

    The simulation domain is a square grid of grid_size x grid_size cells. A plane
    wave generated on an auxiliary 1D line is injected through a rectangular
    total-field/scattered-field (TFSF) boundary and scatters off a circular object.
    All lengths are measured in grid cells and all times in time steps.

    Every value is validated on construction, an invalid configuration raises a
    ConfigurationError before any array is allocated.

    Attributes:
        grid_size (int, optional): Side length N of the square grid. Defaults to 300.
        time_steps_total (int, optional): Number of time steps to simulate. Defaults to 3000.
        impedance (float, optional): Free space impedance used in the update coefficients. Defaults to 377.0.
        courant_number (float, optional): Courant number of the grid. Must not exceed 1/sqrt(2) for a stable
            simulation, larger values are accepted but logged as a warning. Defaults to 1/sqrt(2).
        loss (float, optional): Loss factor of the lossy material model, in [0, 1). Defaults to 0.
        scatterer_center (GridIndex2D, optional): Center (x, y) of the circular scatterer. Defaults to (150, 100).
        scatterer_radius (float, optional): Radius of the scatterer in grid cells. Defaults to 40.
        tfsf_first (GridIndex2D, optional): Lower left corner of the TFSF box. Defaults to (10, 10).
        tfsf_last (GridIndex2D, optional): Upper right corner of the TFSF box. Defaults to (290, 290).
        source_position (int, optional): Index of the hard source on the incident wave line. Defaults to 10.
        source_kind (SourceKind, optional): "ricker" pulse or continuous "sinusoidal" plane wave.
            Defaults to "ricker".
        points_per_wavelength (float | None, optional): Spectral parameter of the source. None selects
            20 for the Ricker wavelet and 30 for the sinusoidal source.
        source_delay (float | None, optional): Delay of the source in grid cells. None selects 0 for the
            Ricker wavelet and 15 for the sinusoidal source.
        material_model (MaterialModel, optional): "void" makes the scatterer fully absorbing,
            "lossy" uses the graded lossy coefficients. Defaults to "void".
        corner_treatment (CornerTreatment, optional): "sequential" lets every edge of the absorbing
            boundary update its corner cells in turn, "skip" excludes the corners. Defaults to "sequential".
        sample_stride (int, optional): Time and space stride of field samples sent to a sink. Defaults to 5.
        divergence_threshold (float, optional): Largest absolute field value accepted before the
            simulation is declared unstable. Defaults to 1e8.
        dtype (jnp.dtype, optional): Floating point type of all arrays. Defaults to jnp.float32.
        backend (BackendOption, optional): Computation backend ('cpu', 'gpu' or 'tpu'). Defaults to "cpu".
    """

    grid_size: int = frozen_field(default=300)
    time_steps_total: int = frozen_field(default=3000)
    impedance: float = frozen_field(default=constants.default_impedance)
    courant_number: float = frozen_field(default=constants.max_courant_number_2d)
    loss: float = frozen_field(default=0.0)
    scatterer_center: GridIndex2D = frozen_field(default=(150, 100))
    scatterer_radius: float = frozen_field(default=40.0)
    tfsf_first: GridIndex2D = frozen_field(default=(10, 10))
    tfsf_last: GridIndex2D = frozen_field(default=(290, 290))
    source_position: int = frozen_field(default=10)
    source_kind: SourceKind = frozen_field(default="ricker")
    points_per_wavelength: float | None = frozen_field(default=None)
    source_delay: float | None = frozen_field(default=None)
    material_model: MaterialModel = frozen_field(default="void")
    corner_treatment: CornerTreatment = frozen_field(default="sequential")
    sample_stride: int = frozen_field(default=5)
    divergence_threshold: float = frozen_field(default=1e8)
    dtype: jnp.dtype = frozen_field(default=jnp.float32)
    backend: BackendOption = frozen_field(default="cpu")

    def __post_init__(self):
        self._validate()

        if not self.is_stable:
            logger.warning(
                f"Courant number {self.courant_number:.4f} exceeds the 2D stability limit "
                f"{constants.max_courant_number_2d:.4f}, the simulation will likely diverge"
            )

        if self.backend in ["gpu", "tpu"]:
            try:
                jax.config.update("jax_default_device", jax.devices(self.backend)[0])
                logger.info(f"{str.upper(self.backend)} found and will be used for computations")
            except RuntimeError:
                logger.warning(f"{str.upper(self.backend)} not found, falling back to CPU!")
                self.backend = "cpu"

    def _validate(self):
        n = self.grid_size
        if n < 3:
            raise ConfigurationError(f"Grid size must be at least 3 for the absorbing boundary, got {n}")
        if self.time_steps_total < 0:
            raise ConfigurationError(f"Number of time steps must be non-negative, got {self.time_steps_total}")
        if self.sample_stride < 1:
            raise ConfigurationError(f"Sample stride must be at least 1, got {self.sample_stride}")
        if not self.courant_number > 0:
            raise ConfigurationError(f"Courant number must be positive, got {self.courant_number}")
        if not self.impedance > 0:
            raise ConfigurationError(f"Impedance must be positive, got {self.impedance}")
        if not self.divergence_threshold > 0:
            raise ConfigurationError(f"Divergence threshold must be positive, got {self.divergence_threshold}")
        if not 0 <= self.loss < 1:
            raise ConfigurationError(f"Loss factor must lie in [0, 1), got {self.loss}")

        for axis_name, lo, hi in zip("xy", self.tfsf_first, self.tfsf_last):
            if not 1 <= lo < hi <= n - 2:
                raise ConfigurationError(
                    f"TFSF box {self.tfsf_first}-{self.tfsf_last} does not fit into a grid of size {n}: "
                    f"need 1 <= first.{axis_name} < last.{axis_name} <= {n - 2}"
                )

        if not 0 < self.scatterer_radius < n:
            raise ConfigurationError(
                f"Scatterer radius must lie in (0, {n}) for a grid of size {n}, got {self.scatterer_radius}"
            )
        if not all(0 <= c < n for c in self.scatterer_center):
            raise ConfigurationError(f"Scatterer center {self.scatterer_center} lies outside a grid of size {n}")
        # the absorbing boundaries take the free space Courant number from cell (0, 0)
        if math.hypot(*self.scatterer_center) < self.scatterer_radius:
            raise ConfigurationError(
                f"Scatterer at {self.scatterer_center} with radius {self.scatterer_radius} "
                "covers the grid corner (0, 0)"
            )
        if not 1 <= self.source_position <= n - 2:
            raise ConfigurationError(f"Source position must lie in [1, {n - 2}], got {self.source_position}")

        if self.source_kind not in _SOURCE_KINDS:
            raise ConfigurationError(f"Unknown source kind {self.source_kind!r}, expected one of {_SOURCE_KINDS}")
        if self.material_model not in _MATERIAL_MODELS:
            raise ConfigurationError(
                f"Unknown material model {self.material_model!r}, expected one of {_MATERIAL_MODELS}"
            )
        if self.corner_treatment not in _CORNER_TREATMENTS:
            raise ConfigurationError(
                f"Unknown corner treatment {self.corner_treatment!r}, expected one of {_CORNER_TREATMENTS}"
            )
        if self.backend not in _BACKENDS:
            raise ConfigurationError(f"Unknown backend {self.backend!r}, expected one of {_BACKENDS}")
        if self.points_per_wavelength is not None and not self.points_per_wavelength > 0:
            raise ConfigurationError(f"Points per wavelength must be positive, got {self.points_per_wavelength}")

    @property
    def grid_shape(self) -> GridShape2D:
        """Shape (N, N) of the two dimensional field arrays."""
        return self.grid_size, self.grid_size

    @property
    def tfsf_bound(self) -> tuple[GridIndex2D, GridIndex2D]:
        """Corners (first, last) of the total-field/scattered-field box."""
        return self.tfsf_first, self.tfsf_last

    @property
    def resolved_points_per_wavelength(self) -> float:
        """Points per wavelength of the source, falling back to the default of the selected source kind."""
        if self.points_per_wavelength is not None:
            return self.points_per_wavelength
        if self.source_kind == "sinusoidal":
            return constants.sinusoidal_points_per_wavelength
        return constants.ricker_points_per_wavelength

    @property
    def resolved_source_delay(self) -> float:
        """Delay of the source in grid cells, falling back to the default of the selected source kind."""
        if self.source_delay is not None:
            return self.source_delay
        if self.source_kind == "sinusoidal":
            return constants.sinusoidal_delay
        return 0.0

    @property
    def is_stable(self) -> bool:
        """Check whether the Courant number satisfies the 2D CFL condition.

        Returns:
            bool: True if courant_number <= 1/sqrt(2).
        """
        return self.courant_number <= constants.max_courant_number_2d + 1e-12

    @property
    def sample_time_steps(self) -> list[int]:
        """Time steps after which field samples are emitted.

        Returns:
            list[int]: Every sample_stride-th time step, starting at 0.
        """
        return list(range(0, self.time_steps_total, self.sample_stride))

    @property
    def max_travel_distance(self) -> float:
        """Maximum distance in grid cells a wave can travel during the simulation.

        Returns:
            float: courant_number * time_steps_total.
        """
        return self.courant_number * self.time_steps_total
