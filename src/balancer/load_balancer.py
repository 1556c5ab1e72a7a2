# src/balancer/load_balancer.py
import logging
import random
from enum import Enum
from typing import List, Optional

from src.request_queue.models import Request, is_blocked
from src.request_queue.queue import RequestQueue
from src.request_queue.generator import RequestGenerator
from src.request_queue.exceptions import QueueError
from src.worker.pool import WorkerPool
from src.worker.worker import Worker
from src.worker.exceptions import WorkerError
from src.log_handler.simulation_log import SimulationLog
from .models import SimulationConfig, SimulationSummary
from .auto_scaler import AutoScaler, ScalingAction, ScalingConfig
from .exceptions import InvariantViolationError, SimulationError

logger = logging.getLogger(__name__)

STATUS_SNAPSHOTS_PER_RUN = 20


class SubmissionResult(str, Enum):
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class LoadBalancer:
    """
    Discrete-time simulation of a self-scaling worker pool.

    Each cycle runs four steps in a fixed order: a request may arrive,
    busy workers advance, idle workers pick up queued requests, and the
    auto-scaler may grow or shrink the pool. A worker freed in step two is
    therefore eligible for new work in the same cycle.
    """

    def __init__(
        self,
        config: SimulationConfig,
        sim_log: Optional[SimulationLog] = None,
        rng: Optional[random.Random] = None,
    ):
        self.config = config
        self.sim_log = sim_log if sim_log is not None else SimulationLog()
        self.rng = rng if rng is not None else random.Random()

        self.request_queue = RequestQueue()
        self.worker_pool = WorkerPool()
        self.generator = RequestGenerator(
            config.min_process_time, config.max_process_time, rng=self.rng
        )
        self.auto_scaler = AutoScaler(
            ScalingConfig(
                min_queue_per_worker=config.min_queue_per_server,
                max_queue_per_worker=config.max_queue_per_server,
                cooldown_cycles=config.scale_cooldown_time,
            )
        )
        self.blocked_ip_ranges = list(config.blocked_ip_ranges)

        self.current_cycle = 0
        self._is_initialized = False

    @property
    def queue_size(self) -> int:
        return self.request_queue.size()

    @property
    def pool_size(self) -> int:
        return len(self.worker_pool)

    @property
    def workers(self) -> List[Worker]:
        return list(self.worker_pool)

    @property
    def status_interval(self) -> int:
        return max(1, self.config.total_run_time // STATUS_SNAPSHOTS_PER_RUN)

    def initialize(self) -> None:
        """Create the initial pool and seed the backlog."""
        if self._is_initialized:
            raise SimulationError("Load balancer already initialized")

        self.sim_log.log_header(self.config)
        self.sim_log.log_event(self.current_cycle, "Initializing Load Balancer")

        for _ in range(self.config.init_servers):
            worker = self.worker_pool.add_worker()
            self.sim_log.log_server_added(self.current_cycle, worker.worker_id)

        for _ in range(self.config.initial_queue_size):
            self.submit_request(self.generator.generate())

        self._is_initialized = True
        self.sim_log.log_event(self.current_cycle, "Initialization complete")
        self.sim_log.log_status(self.current_cycle, self.queue_size, self.pool_size)
        logger.info(
            f"Load balancer initialized with {self.pool_size} workers "
            f"and {self.queue_size} queued requests"
        )

    def submit_request(self, request: Request) -> SubmissionResult:
        """Single entry point for new requests; applies the IP blocklist."""
        if is_blocked(request.ip_in, self.blocked_ip_ranges):
            self.sim_log.log_request_blocked(self.current_cycle, request.ip_in)
            return SubmissionResult.REJECTED

        self.request_queue.push(request)
        return SubmissionResult.ACCEPTED

    def run_cycle(self) -> None:
        try:
            self._add_new_request()
            self._process_workers()
            self._distribute_requests()
            self._check_and_scale()
        except (QueueError, WorkerError) as e:
            logger.error(f"Invariant violated at cycle {self.current_cycle}: {str(e)}")
            raise InvariantViolationError(
                f"Scheduling invariant violated at cycle {self.current_cycle}: {str(e)}"
            ) from e

        if self.current_cycle % self.status_interval == 0:
            self.sim_log.log_status(self.current_cycle, self.queue_size, self.pool_size)

        self.current_cycle += 1

    def run(self) -> SimulationSummary:
        if not self._is_initialized:
            self.initialize()

        total_run_time = self.config.total_run_time
        self.sim_log.log_event(self.current_cycle, "RUN: Starting simulation")

        while self.current_cycle < total_run_time:
            self.run_cycle()

        self.sim_log.log_event(self.current_cycle, "RUN: Simulation complete")
        self.sim_log.write_summary(self.current_cycle, self.pool_size, self.queue_size)

        return SimulationSummary(
            total_cycles=self.current_cycle,
            final_pool_size=self.pool_size,
            final_queue_size=self.queue_size,
            stats=self.sim_log.stats.model_copy(),
        )

    def _add_new_request(self) -> None:
        if self.generator.should_arrive(self.config.new_request_prob):
            self.submit_request(self.generator.generate())

    def _process_workers(self) -> None:
        for worker in self.worker_pool.busy_workers():
            if worker.tick():
                self.sim_log.log_request_completed(
                    self.current_cycle, worker.worker_id, worker.current_request
                )
                worker.set_idle()

    def _distribute_requests(self) -> None:
        # snapshot so each idle worker gets at most one request this cycle
        for worker in self.worker_pool.idle_workers():
            if self.request_queue.is_empty():
                break
            request = self.request_queue.pop()
            worker.assign_request(request)
            self.sim_log.log_request_started(self.current_cycle, worker.worker_id, request)

    def _check_and_scale(self) -> None:
        action = self.auto_scaler.decide(self.current_cycle, self.queue_size, self.pool_size)

        if action == ScalingAction.SCALE_UP:
            self.sim_log.log_event(
                self.current_cycle, "SCALE UP: Queue size exceeds max threshold, adding server"
            )
            worker = self.worker_pool.add_worker()
            self.sim_log.log_server_added(self.current_cycle, worker.worker_id)
            self.auto_scaler.record_scaling(self.current_cycle)

        elif action == ScalingAction.SCALE_DOWN:
            self.sim_log.log_event(
                self.current_cycle, "SCALE DOWN: Queue size below min threshold, removing server"
            )
            worker = self.worker_pool.remove_first_idle()
            if worker is not None:
                self.sim_log.log_server_removed(self.current_cycle, worker.worker_id)
                self.auto_scaler.record_scaling(self.current_cycle)
            else:
                logger.debug(f"No idle worker to remove at cycle {self.current_cycle}")
