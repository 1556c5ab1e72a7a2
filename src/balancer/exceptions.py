# src/balancer/exceptions.py
class SimulationError(Exception):
    """Base exception for simulation errors"""
    pass

class InvariantViolationError(SimulationError):
    """Raised when the queue or pool reaches a state the cycle order should rule out"""
    pass

class ConfigError(SimulationError):
    """Raised when a configuration file cannot be read"""
    pass
