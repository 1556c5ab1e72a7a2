from .models import Request, JobType, IpRange, ip_to_int, is_blocked
from .queue import RequestQueue
from .generator import RequestGenerator
from .exceptions import QueueError, QueueEmptyError

__all__ = [
    'Request',
    'JobType',
    'IpRange',
    'ip_to_int',
    'is_blocked',
    'RequestQueue',
    'RequestGenerator',
    'QueueError',
    'QueueEmptyError'
]

__version__ = '1.0.0'
