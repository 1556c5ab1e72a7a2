# src/log_handler/simulation_log.py
import logging
from typing import Optional, TYPE_CHECKING

from pydantic import BaseModel

from src.request_queue.models import Request

if TYPE_CHECKING:
    from src.balancer.models import SimulationConfig


class SimulationStats(BaseModel):
    servers_created: int = 0
    servers_deleted: int = 0
    requests_started: int = 0
    requests_processed: int = 0
    requests_blocked: int = 0


class SimulationLog:
    """
    Event log for a simulation run.

    Every line is stamped with the simulation cycle rather than wall-clock
    time. The counters behind the final summary live in a SimulationStats
    instance that can be handed in, so a caller can inspect or share them.
    """

    SEPARATOR = "=" * 80

    def __init__(
        self,
        stats: Optional[SimulationStats] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.stats = stats if stats is not None else SimulationStats()
        self.logger = logger if logger is not None else logging.getLogger("simulation")

    @staticmethod
    def format_line(cycle: int, message: str) -> str:
        return f"[Cycle {cycle:05d}] {message}"

    def _emit(self, level: int, cycle: int, message: str) -> None:
        self.logger.log(level, self.format_line(cycle, message))

    def log_event(self, cycle: int, message: str) -> None:
        self._emit(logging.INFO, cycle, message)

    def log_server_added(self, cycle: int, worker_id: int) -> None:
        self.stats.servers_created += 1
        self._emit(logging.INFO, cycle, f"ADDED: Server {worker_id} created")

    def log_server_removed(self, cycle: int, worker_id: int) -> None:
        self.stats.servers_deleted += 1
        self._emit(logging.INFO, cycle, f"REMOVED: Server {worker_id} deallocated")

    def log_request_started(self, cycle: int, worker_id: int, request: Request) -> None:
        self.stats.requests_started += 1
        self._emit(
            logging.DEBUG,
            cycle,
            f"START: Server {worker_id} processing {request.ip_in} -> {request.ip_out} "
            f"({request.process_time} cycles, {request.job_type.value})",
        )

    def log_request_completed(self, cycle: int, worker_id: int, request: Request) -> None:
        self.stats.requests_processed += 1
        self._emit(
            logging.DEBUG,
            cycle,
            f"COMPLETE: Request {request.ip_in} -> {request.ip_out} finished "
            f"on Server {worker_id}",
        )

    def log_request_blocked(self, cycle: int, ip: str) -> None:
        self.stats.requests_blocked += 1
        self._emit(
            logging.INFO, cycle, f"BLOCKED: Request from {ip} rejected (IP in blocked range)"
        )

    def log_status(self, cycle: int, queue_size: int, pool_size: int) -> None:
        self._emit(
            logging.INFO,
            cycle,
            f"STATUS: Queue size: {queue_size} | Active servers: {pool_size}",
        )

    def log_header(self, config: "SimulationConfig") -> str:
        ranges = ", ".join(str(r) for r in config.blocked_ip_ranges) or "N/A"
        header = "\n".join(
            [
                self.SEPARATOR,
                "                         LOAD BALANCER SIMULATION",
                self.SEPARATOR,
                f"  Initial Servers:             {config.init_servers}",
                f"  Total Clock Cycles:          {config.total_run_time}",
                f"  Process Time Range:          {config.min_process_time}-{config.max_process_time} cycles",
                f"  Starting Queue Size:         {config.initial_queue_size}",
                f"  Blocked IP Ranges:           {ranges}",
                self.SEPARATOR,
            ]
        )
        self.logger.info("\n" + header)
        return header

    def write_summary(self, total_cycles: int, final_pool_size: int, final_queue_size: int) -> str:
        stats = self.stats
        summary = "\n".join(
            [
                self.SEPARATOR,
                "                           SIMULATION SUMMARY",
                self.SEPARATOR,
                "",
                "RUN STATISTICS:",
                f"  Total Clock Cycles:          {total_cycles}",
                f"  Final Server Count:          {final_pool_size}",
                f"  Final Queue Size:            {final_queue_size}",
                "",
                "REQUEST STATISTICS:",
                f"  Total Requests Started:      {stats.requests_started}",
                f"  Total Requests Processed:    {stats.requests_processed}",
                f"  Total Requests Blocked:      {stats.requests_blocked}",
                "",
                "SERVER STATISTICS:",
                f"  Servers Created:             {stats.servers_created}",
                f"  Servers Deleted:             {stats.servers_deleted}",
                "",
                self.SEPARATOR,
            ]
        )
        self.logger.info("\n" + summary)
        return summary
