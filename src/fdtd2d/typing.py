from typing import Literal

GridShape2D = tuple[int, int]
"""2D shape with integer dimensions in grid points."""

GridIndex2D = tuple[int, int]
"""Integer (x, y) coordinate of a grid cell."""

SourceKind = Literal["ricker", "sinusoidal"]
"""Temporal profile of the hard source driving the incident wave line."""

MaterialModel = Literal["void", "lossy"]
"""Coefficient model inside the scatterer: fully absorbing void or lossy medium."""

CornerTreatment = Literal["sequential", "skip"]
"""Handling of the four grid corners by the absorbing boundary condition."""

BackendOption = Literal["cpu", "gpu", "tpu"]
"""Computation backend of JAX."""

EdgeDirection = Literal["+", "-"]
"""Direction along an axis: "-" is the lower edge, "+" the upper edge."""
