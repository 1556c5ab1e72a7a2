# src/request_queue/queue.py
import logging
from collections import deque
from threading import Lock

from .models import Request
from .exceptions import QueueEmptyError

logger = logging.getLogger(__name__)


class RequestQueue:
    """Unbounded FIFO buffer of requests waiting for a worker."""

    def __init__(self):
        self.queue = deque()
        self.lock = Lock()
        logger.debug("Initialized RequestQueue")

    def push(self, request: Request) -> None:
        """
        Append a request to the tail of the queue
        """
        with self.lock:
            self.queue.append(request)

    def pop(self) -> Request:
        """
        Remove and return the request at the head of the queue

        Raises:
            QueueEmptyError: If the queue holds no requests
        """
        with self.lock:
            if not self.queue:
                logger.error("Attempted to pop from empty queue")
                raise QueueEmptyError("Queue is empty")
            return self.queue.popleft()

    def peek(self) -> Request:
        """
        Return the request at the head of the queue without removing it
        """
        with self.lock:
            if not self.queue:
                logger.error("Attempted to peek at empty queue")
                raise QueueEmptyError("Queue is empty")
            return self.queue[0]

    def size(self) -> int:
        return len(self.queue)

    def is_empty(self) -> bool:
        return self.size() == 0

    def __len__(self) -> int:
        return self.size()
