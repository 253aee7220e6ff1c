"""Cooperative poll-loop runtime with promises, coroutines, a command console, printf/scanf and small containers."""

__version__ = "0.2.0"

__all__ = [
    "aio",
    "console",
    "enums",
    "log",
    "mappings",
    "poll",
    "printf",
    "promise",
    "ringbuf",
    "scanf",
    "sequences",
]