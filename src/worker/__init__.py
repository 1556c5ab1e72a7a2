"""Worker module for the load balancer simulation.

This module provides the worker state machine and the pool that owns workers.
"""

from .worker import Worker, WorkerState
from .pool import WorkerPool
from .exceptions import WorkerError, WorkerBusyError, WorkerPoolError

__all__ = [
    "Worker",
    "WorkerState",
    "WorkerPool",
    "WorkerError",
    "WorkerBusyError",
    "WorkerPoolError",
]

__version__ = "2.0.0"
