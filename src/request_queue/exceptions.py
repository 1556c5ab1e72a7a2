# src/request_queue/exceptions.py
class QueueError(Exception):
    """Base exception for request queue operations"""

    pass


class QueueEmptyError(QueueError):
    """Raised when trying to pop or peek an empty queue"""

    pass
