from .logger import Logger, LoggerSink
from .plot_field import plot_field
from .sink import FieldSink, MemorySink, MultiSink, TextBlockSink, sample_records

__all__ = [
    "Logger",
    "LoggerSink",
    "plot_field",
    "FieldSink",
    "MemorySink",
    "MultiSink",
    "TextBlockSink",
    "sample_records",
]
