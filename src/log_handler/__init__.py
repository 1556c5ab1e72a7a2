# src/log_handler/__init__.py
from .logging_config import setup_logging, shutdown_logging
from .simulation_log import SimulationLog, SimulationStats

__all__ = [
    "setup_logging",
    "shutdown_logging",
    "SimulationLog",
    "SimulationStats",
]

__version__ = "1.0.0"
