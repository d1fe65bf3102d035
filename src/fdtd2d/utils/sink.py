from abc import ABC, abstractmethod
from pathlib import Path
from typing import TextIO

import jax
import numpy as np
from loguru import logger

from fdtd2d.fdtd.container import FieldState

#: Column layout of a sample record
RECORD_COLUMNS = ("t", "x", "y", "Ez", "Hy", "Hx")

#: printf formats reproducing the default formatting of C++ output streams
RECORD_FORMATS = ("%d", "%d", "%d", "%g", "%g", "%g")


def sample_records(
    time_step: int,
    arrays: FieldState,
    stride: int,
) -> np.ndarray:
    """Collects the sampled field values of one time step as a table.

    Every stride-th cell in both directions is sampled, starting at the origin. The
    rows are ordered by x first and y second.

    Args:
        time_step (int): Time step written into the first column
        arrays (FieldState): Field state to sample
        stride (int): Spacing between sampled cells

    Returns:
        np.ndarray: Array of shape (ceil(N / stride)**2, 6) with rows (t, x, y, Ez, Hy, Hx)
    """
    if stride < 1:
        raise ValueError(f"Sample stride must be at least 1, got {stride}")
    Ez, Hx, Hy = jax.device_get((arrays.Ez, arrays.Hx, arrays.Hy))
    if Ez.ndim != 2 or Ez.shape != Hx.shape or Ez.shape != Hy.shape:
        raise ValueError(f"Expected three field arrays of the same 2D shape, got {Ez.shape}, {Hx.shape}, {Hy.shape}")

    xs = np.arange(0, Ez.shape[0], stride)
    ys = np.arange(0, Ez.shape[1], stride)
    x, y = np.meshgrid(xs, ys, indexing="ij")
    x, y = x.ravel(), y.ravel()
    return np.stack(
        [
            np.full(x.shape, time_step, dtype=np.float64),
            x.astype(np.float64),
            y.astype(np.float64),
            np.asarray(Ez[x, y], dtype=np.float64),
            np.asarray(Hy[x, y], dtype=np.float64),
            np.asarray(Hx[x, y], dtype=np.float64),
        ],
        axis=1,
    )


class FieldSink(ABC):
    """Receiver of the sampled field states of a running simulation.

    Sinks are usable as context managers, leaving the context closes the sink.
    """

    @abstractmethod
    def write(self, time_step: int, arrays: FieldState):
        """Receives the field state after the given time step."""
        raise NotImplementedError()

    def close(self):
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()


class TextBlockSink(FieldSink):
    """Writes samples as tab separated text blocks, readable by gnuplot.

    Each sampled cell becomes one line "t, x, y, Ez, Hy, Hx" terminated by a tab and
    a newline. The blocks of different time steps are separated by two newlines.

    Args:
        path (Path | str): File to write, an existing file is overwritten
        stride (int, optional): Spacing between sampled cells. Defaults to 5.
    """

    def __init__(self, path: Path | str, stride: int = 5):
        self.path = Path(path)
        self.stride = stride
        self.num_blocks = 0
        self._file: TextIO | None = open(self.path, "w")
        logger.info(f"Writing field samples to {self.path}")

    def write(self, time_step: int, arrays: FieldState):
        if self._file is None:
            raise ValueError(f"Cannot write to closed sink {self.path}")
        records = sample_records(time_step=time_step, arrays=arrays, stride=self.stride)
        np.savetxt(self._file, records, fmt=RECORD_FORMATS, delimiter="\t", newline="\t\n")
        self._file.write("\n\n")
        self.num_blocks += 1

    def close(self):
        if self._file is not None:
            self._file.close()
            self._file = None
            logger.info(f"Wrote {self.num_blocks} sample blocks to {self.path}")


class MemorySink(FieldSink):
    """Keeps host copies of the full field arrays of every received time step."""

    def __init__(self):
        self.time_steps: list[int] = []
        self.Ez: list[np.ndarray] = []
        self.Hx: list[np.ndarray] = []
        self.Hy: list[np.ndarray] = []

    def write(self, time_step: int, arrays: FieldState):
        Ez, Hx, Hy = jax.device_get((arrays.Ez, arrays.Hx, arrays.Hy))
        self.time_steps.append(int(time_step))
        self.Ez.append(np.asarray(Ez))
        self.Hx.append(np.asarray(Hx))
        self.Hy.append(np.asarray(Hy))

    def __len__(self) -> int:
        return len(self.time_steps)

    def stacked(self, name: str) -> np.ndarray:
        """Stacks the recorded arrays of one field along a new leading time axis.

        Args:
            name (str): One of "Ez", "Hx" or "Hy"

        Returns:
            np.ndarray: Array of shape (num_samples, N, N)
        """
        if name not in ("Ez", "Hx", "Hy"):
            raise ValueError(f"Unknown field name: {name}")
        return np.stack(getattr(self, name), axis=0)


class MultiSink(FieldSink):
    """Forwards every field state to several sinks, in order."""

    def __init__(self, *sinks: FieldSink):
        self.sinks = list(sinks)

    def write(self, time_step: int, arrays: FieldState):
        for sink in self.sinks:
            sink.write(time_step, arrays)

    def close(self):
        for sink in self.sinks:
            sink.close()
