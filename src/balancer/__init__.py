# src/balancer/__init__.py
from .load_balancer import LoadBalancer, SubmissionResult
from .models import SimulationConfig, SimulationSummary
from .auto_scaler import AutoScaler, ScalingConfig, ScalingAction
from .config import load_config, load_config_or_default
from .exceptions import SimulationError, InvariantViolationError, ConfigError

__all__ = [
    'LoadBalancer',
    'SubmissionResult',
    'SimulationConfig',
    'SimulationSummary',
    'AutoScaler',
    'ScalingConfig',
    'ScalingAction',
    'load_config',
    'load_config_or_default',
    'SimulationError',
    'InvariantViolationError',
    'ConfigError'
]

__version__ = '1.0.0'
