# src/worker/exceptions.py

class WorkerError(Exception):
    """Base exception for worker operations"""
    pass


class WorkerBusyError(WorkerError):
    """Raised when trying to assign a request to a busy worker"""
    pass


class WorkerPoolError(WorkerError):
    """Raised when a pool operation would break a pool invariant"""
    pass
