import atexit
import csv
import shutil
from datetime import datetime
from pathlib import Path
from typing import Any

import jax
import jax.numpy as jnp
import seaborn as sns
from loguru import logger
from matplotlib import pyplot as plt
from matplotlib.figure import Figure
from rich.console import Console
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, TimeElapsedColumn
from rich.table import Table

from fdtd2d.config import SimulationConfig
from fdtd2d.core.physics.metrics import compute_energy
from fdtd2d.fdtd.container import FieldState
from fdtd2d.utils.plot_field import plot_field
from fdtd2d.utils.sink import FieldSink


def init_working_directory(experiment_name: str, wd_name: str | None) -> Path:
    """Initialize working directory for experiment outputs.

    Creates a timestamped directory structure for experiment outputs under outputs/nobackup/.
    Uses current date/time unless a specific working directory name is provided.

    Args:
        experiment_name (str): Name of the experiment
        wd_name (str | None): Optional specific name for the working directory. If None, uses timestamp.

    Returns:
        Path: Created working directory path
    """
    cur_time = datetime.now().strftime("%Y-%m-%d_%H-%M-%S.%f")
    day, daytime = cur_time.split("_")
    new_cwd = Path().cwd() / "outputs" / "nobackup" / day / experiment_name / (daytime if wd_name is None else wd_name)
    new_cwd.mkdir(parents=True)
    return new_cwd


def _log_formatter(record: Any) -> str:
    """Log message formatter"""
    color_map = {
        "TRACE": "dim blue",
        "DEBUG": "cyan",
        "INFO": "bold",
        "SUCCESS": "bold green",
        "WARNING": "yellow",
        "ERROR": "bold red",
        "CRITICAL": "bold white on red",
    }
    lvl_color = color_map.get(record["level"].name, "cyan")
    loc = record["file"].path + ":" + str(record["line"])
    message = escape(record["message"])
    return (
        "[not bold green]{time:DD.MM.YYYY HH:mm:ss.SSS}[/not bold green] | "
        + f"{loc}"
        + f" - [{lvl_color}]{message}[/{lvl_color}]"
    )


def snapshot_python_files(snapshot_dir: Path):
    """Archives the source files of the package and the example scripts as code.zip next to snapshot_dir."""
    snapshot_dir.mkdir(parents=True, exist_ok=True)
    root_dir = Path(__file__).parent.parent
    source_dirs = [root_dir]
    # example scripts of a source checkout
    examples_dir = root_dir.parent.parent / "examples"
    if examples_dir.is_dir():
        source_dirs.append(examples_dir)

    files = [(f, d) for d in source_dirs for f in d.rglob("*.py")]
    for python_file, source_dir in files:
        relative_path = python_file.relative_to(source_dir.parent)
        destination = snapshot_dir / relative_path
        destination.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy(python_file, destination)
    shutil.make_archive(str(snapshot_dir.parent / "code"), "zip", snapshot_dir)
    shutil.rmtree(snapshot_dir)


class Logger:
    """Logger for managing experiment outputs and visualization.

    Handles experiment logging, metrics tracking, and visualization of simulation results.
    Creates a working directory structure, routes loguru output through a rich console
    and into logs.log, and provides methods for saving figures and metrics.

    Args:
        experiment_name (str): Name of the experiment. This is the naming of the parent directory where the experiment
            will be saved.
        name (str | None, optional): Optional specific name for the working directory. If None, uses timestamp.
        snapshot_code (bool, optional): Whether to archive the source code in the working directory. Defaults to True.
    """

    def __init__(self, experiment_name: str, name: str | None = None, snapshot_code: bool = True):
        sns.set_theme(context="paper", style="white", palette="colorblind")
        self.cwd = init_working_directory(experiment_name, wd_name=name)
        self.console = Console()
        self.progress = Progress(
            SpinnerColumn(),
            *Progress.get_default_columns(),
            TimeElapsedColumn(),
            console=self.console,
        ).__enter__()
        atexit.register(self.progress.stop)
        logger.remove()
        logger.add(
            self.console.print,
            level="TRACE",
            format=_log_formatter,
            colorize=True,
        )
        logger.add(
            self.cwd / "logs.log",
            level="TRACE",
            format="{time:DD.MM.YYYY HH:mm:ss:ssss} | {level} - {message}",
        )
        logger.info(f"Starting experiment {experiment_name} in {self.cwd}")
        if snapshot_code:
            snapshot_python_files(self.cwd / "code")
        self.fieldnames = None
        self.writer = None
        self.csvfile = open(self.cwd / "metrics.csv", "w", newline="")
        atexit.register(self.csvfile.close)

    @property
    def fields_dir(self) -> Path:
        """Directory for storing field snapshots.

        Returns:
            Path: Directory for field snapshot outputs
        """
        directory = self.cwd / "fields"
        directory.mkdir(parents=True, exist_ok=True)
        return directory

    def savefig(self, directory: Path, filename: str, fig: Figure, dpi: int = 300):
        """Save a matplotlib figure to file.

        Creates a figures subdirectory if needed and saves the figure with specified settings.

        Args:
            directory (Path): Base directory to save in
            filename (str): Name for the figure file
            fig (Figure): Matplotlib figure to save
            dpi (int, optional): Resolution in dots per inch. Defaults to 300.
        """
        figure_directory = directory / "figures"
        figure_directory.mkdir(parents=True, exist_ok=True)
        fig.savefig(directory / "figures" / filename, dpi=dpi, bbox_inches="tight")
        plt.close(fig)

    def write(self, stats: dict, do_print: bool = True):
        """Write statistics to CSV file and optionally print them.

        Records metrics in a CSV file and optionally displays them in a formatted table.
        Automatically initializes CSV headers on first write.

        Args:
            stats (dict): Dictionary of statistics to record
            do_print (bool, optional): Whether to print stats to console. Defaults to true.
        """
        stats = {
            k: v.item() if isinstance(v, jax.Array) else v
            for k, v in stats.items()
            if isinstance(v, (int, float)) or (isinstance(v, jax.Array) and v.size == 1)
        }
        if self.fieldnames is None:
            self.fieldnames = list(stats.keys())
            self.writer = csv.DictWriter(self.csvfile, fieldnames=self.fieldnames)
            self.writer.writeheader()
        assert self.writer is not None
        self.writer.writerow(stats)
        self.csvfile.flush()
        if do_print:
            table = Table(box=None)
            for k, v in stats.items():
                table.add_column(k)
                table.add_column(str(v))
            self.console.print(table)

    def log_fields(
        self,
        time_step: int,
        arrays: FieldState,
        config: SimulationConfig,
        export_figure: bool = True,
        do_print: bool = False,
    ) -> dict[str, float]:
        """Log energy metrics of the field state and optionally a snapshot figure.

        Args:
            time_step (int): Time step of the field state
            arrays (FieldState): Field state to log
            config (SimulationConfig): Simulation configuration
            export_figure (bool, optional): Whether to save a figure of Ez, Hx and Hy. Defaults to True.
            do_print (bool, optional): Whether to print the metrics to console. Defaults to False.

        Returns:
            dict[str, float]: The recorded metrics
        """
        energy = compute_energy(arrays.Ez, arrays.Hx, arrays.Hy, config.impedance)
        stats = {
            "time_step": int(time_step),
            "energy": float(jnp.sum(energy)),
            "max_abs_Ez": float(jnp.max(jnp.abs(arrays.Ez))),
            "max_abs_Ez1d": float(jnp.max(jnp.abs(arrays.Ez1d))),
        }
        self.write(stats, do_print=do_print)
        if export_figure:
            fig = plot_field(
                Ez=arrays.Ez,
                Hx=arrays.Hx,
                Hy=arrays.Hy,
                config=config,
            )
            self.savefig(self.fields_dir, f"fields_{time_step:06d}.png", fig)
        return stats


class LoggerSink(FieldSink):
    """Sink forwarding every received field state to Logger.log_fields.

    Args:
        exp_logger (Logger): Logger of the experiment
        config (SimulationConfig): Simulation configuration
        figure_stride (int | None, optional): Save a figure for every figure_stride-th received
            state. None disables figures. Defaults to None.
    """

    def __init__(self, exp_logger: Logger, config: SimulationConfig, figure_stride: int | None = None):
        self.exp_logger = exp_logger
        self.config = config
        self.figure_stride = figure_stride
        self.num_received = 0

    def write(self, time_step: int, arrays: FieldState):
        export_figure = self.figure_stride is not None and self.num_received % self.figure_stride == 0
        self.exp_logger.log_fields(
            time_step=time_step,
            arrays=arrays,
            config=self.config,
            export_figure=export_figure,
        )
        self.num_received += 1
