# src/worker/pool.py
import logging
from typing import Dict, Iterator, List, Optional

from .worker import Worker
from .exceptions import WorkerPoolError

logger = logging.getLogger(__name__)


class WorkerPool:
    """
    Owns every active worker, keyed by a stable integer id.

    Ids are handed out in increasing order starting at 1 and are never
    reused, even after the worker holding one has been removed. Iteration
    follows insertion order, which decides which idle worker goes first on
    scale-down.
    """

    def __init__(self):
        self.workers: Dict[int, Worker] = {}
        self._next_worker_id = 1

    def add_worker(self) -> Worker:
        worker = Worker(self._next_worker_id)
        self._next_worker_id += 1
        self.workers[worker.worker_id] = worker
        logger.debug(f"Added worker {worker.worker_id}, pool size {len(self.workers)}")
        return worker

    def remove_worker(self, worker_id: int) -> Worker:
        """
        Remove an idle worker from the pool.

        Raises:
            WorkerPoolError: If the worker is unknown, busy, or the last one left
        """
        worker = self.workers.get(worker_id)
        if worker is None:
            raise WorkerPoolError(f"Worker {worker_id} is not in the pool")
        if worker.is_busy:
            raise WorkerPoolError(f"Worker {worker_id} is busy and cannot be removed")
        if len(self.workers) <= 1:
            raise WorkerPoolError("Pool cannot shrink below one worker")

        del self.workers[worker_id]
        logger.debug(f"Removed worker {worker_id}, pool size {len(self.workers)}")
        return worker

    def first_idle_worker(self) -> Optional[Worker]:
        for worker in self.workers.values():
            if not worker.is_busy:
                return worker
        return None

    def remove_first_idle(self) -> Optional[Worker]:
        """Remove the earliest-added idle worker, or return None when all are busy."""
        worker = self.first_idle_worker()
        if worker is None:
            return None
        return self.remove_worker(worker.worker_id)

    def get(self, worker_id: int) -> Optional[Worker]:
        return self.workers.get(worker_id)

    def busy_workers(self) -> List[Worker]:
        return [worker for worker in self.workers.values() if worker.is_busy]

    def idle_workers(self) -> List[Worker]:
        return [worker for worker in self.workers.values() if not worker.is_busy]

    def __len__(self) -> int:
        return len(self.workers)

    def __iter__(self) -> Iterator[Worker]:
        return iter(list(self.workers.values()))
