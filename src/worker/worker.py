# src/worker/worker.py
import logging
from enum import Enum
from typing import Optional, Dict, Any

from src.request_queue.models import Request
from .exceptions import WorkerBusyError

logger = logging.getLogger(__name__)


class WorkerState(str, Enum):
    IDLE = "idle"
    BUSY = "busy"


class Worker:
    """
    Processes one request at a time, counting down its duration in cycles.

    A completing ``tick()`` flips the worker back to idle but keeps the
    finished request available through ``current_request`` so the caller can
    report it; ``set_idle()`` then releases it.
    """

    def __init__(self, worker_id: int):
        self.worker_id = worker_id
        self.is_busy = False
        self.current_request: Optional[Request] = None
        self.remaining_cycles = 0

    @property
    def state(self) -> WorkerState:
        return WorkerState.BUSY if self.is_busy else WorkerState.IDLE

    def assign_request(self, request: Request) -> None:
        if self.is_busy:
            raise WorkerBusyError(
                f"Worker {self.worker_id} is still processing a request"
            )
        self.current_request = request
        self.remaining_cycles = request.process_time
        self.is_busy = True

    def tick(self) -> bool:
        """
        Advance the owned request by one cycle.

        Returns:
            True if the request finished on this tick, False otherwise
            (including when the worker is idle)
        """
        if not self.is_busy:
            return False

        # zero-duration requests finish on their first tick
        self.remaining_cycles = max(0, self.remaining_cycles - 1)

        if self.remaining_cycles == 0:
            self.is_busy = False
            return True
        return False

    def set_idle(self) -> None:
        self.is_busy = False
        self.remaining_cycles = 0
        self.current_request = None

    def force_idle(self) -> None:
        """Drop whatever the worker holds, busy or not."""
        if self.is_busy:
            logger.warning(
                f"Worker {self.worker_id} forced idle with {self.remaining_cycles} cycles remaining"
            )
        self.set_idle()

    def get_status(self) -> Dict[str, Any]:
        return {
            "worker_id": self.worker_id,
            "is_busy": self.is_busy,
            "remaining_cycles": self.remaining_cycles,
            "current_request": self.current_request,
        }

    def __repr__(self) -> str:
        return (
            f"Worker(worker_id={self.worker_id}, state={self.state.value}, "
            f"remaining_cycles={self.remaining_cycles})"
        )
