from pathlib import Path
from typing import Any

import jax.numpy as jnp
import matplotlib.pyplot as plt
from matplotlib.figure import Figure
from matplotlib.patches import Circle, Rectangle

from fdtd2d.config import SimulationConfig


def plot_field_component(
    field: jnp.ndarray,
    component_name: str,
    ax: Any,
    plot_legend: bool = True,
) -> None:
    """Plots a single field array of the grid.

    Args:
        field (jnp.ndarray): 2D array of shape (N, N), indexed [x, y]
        component_name (str): Name of the component (e.g., 'Ez', 'Hy')
        ax (Any): Matplotlib axis to plot on
        plot_legend (bool, optional): Whether to add a colorbar legend

    Raises:
        ValueError: If field is not 2D or contains invalid values
    """
    if field.ndim != 2:
        raise ValueError(f"Field must be 2D, got shape {field.shape}")

    if jnp.any(jnp.isnan(field)):
        raise ValueError(f"{component_name} contains NaN values")

    if jnp.any(jnp.isinf(field)):
        raise ValueError(f"{component_name} contains infinite values")

    # symmetric color range, centered at zero
    limit = float(jnp.max(jnp.abs(field)))
    limit = limit if limit > 0 else 1.0
    im = ax.imshow(
        field.T,
        origin="lower",
        aspect="equal",
        cmap="RdBu_r",
        interpolation="nearest",
        vmin=-limit,
        vmax=limit,
    )

    ax.set_xlabel("x (grid points)")
    ax.set_ylabel("y (grid points)")
    ax.set_title(component_name)

    if plot_legend:
        cbar = plt.colorbar(im, ax=ax)
        cbar.set_label("Field value")


def plot_field(
    Ez: jnp.ndarray,
    Hx: jnp.ndarray,
    Hy: jnp.ndarray,
    config: SimulationConfig | None = None,
    filename: str | Path | None = None,
    plot_legend: bool = True,
) -> Figure:
    """Creates a figure with the three field components Ez, Hx and Hy side by side.

    If a configuration is given, the outline of the scatterer and of the TFSF box
    are drawn on top of every component.

    Args:
        Ez (jnp.ndarray): Electric field of shape (N, N)
        Hx (jnp.ndarray): Magnetic field in x direction of shape (N, N)
        Hy (jnp.ndarray): Magnetic field in y direction of shape (N, N)
        config (SimulationConfig | None, optional): Configuration used to draw the geometry
        filename (str | Path | None, optional): If provided, saves the plot to this file
        plot_legend (bool, optional): Whether to add colorbar legends

    Returns:
        Figure: The generated figure object

    Raises:
        ValueError: If arrays have different shapes or contain invalid values
    """
    if not Ez.shape == Hx.shape == Hy.shape:
        raise ValueError(f"Field arrays must have the same shape, got Ez: {Ez.shape}, Hx: {Hx.shape}, Hy: {Hy.shape}")

    fig, axs = plt.subplots(1, 3, figsize=(15, 5))
    for ax, name, field in zip(axs, ("Ez", "Hx", "Hy"), (Ez, Hx, Hy)):
        plot_field_component(field=field, component_name=name, ax=ax, plot_legend=plot_legend)
        if config is not None:
            ax.add_patch(
                Circle(
                    config.scatterer_center,
                    config.scatterer_radius,
                    fill=False,
                    edgecolor="black",
                    linewidth=0.8,
                )
            )
            (x0, y0), (x1, y1) = config.tfsf_bound
            ax.add_patch(
                Rectangle(
                    (x0, y0),
                    x1 - x0,
                    y1 - y0,
                    fill=False,
                    edgecolor="gray",
                    linestyle="--",
                    linewidth=0.8,
                )
            )

    plt.tight_layout()

    if filename is not None:
        plt.savefig(filename, bbox_inches="tight", dpi=300)
        plt.close(fig)

    return fig
