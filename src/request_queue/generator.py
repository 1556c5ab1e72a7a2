# src/request_queue/generator.py
import random
from typing import Optional

from .models import JobType, Request


class RequestGenerator:
    """
    Synthesizes random requests for the simulated workload.

    The source of randomness is injected so callers can replay a run from a
    seed or script the draws in tests. Any object with ``random()``,
    ``randint(a, b)`` and ``choice(seq)`` will do.
    """

    JOB_TYPES = (JobType.PROCESSING, JobType.STREAMING)

    def __init__(
        self,
        min_process_time: int,
        max_process_time: int,
        rng: Optional[random.Random] = None,
    ):
        if min_process_time > max_process_time:
            raise ValueError(
                f"min_process_time ({min_process_time}) exceeds "
                f"max_process_time ({max_process_time})"
            )
        self.min_process_time = min_process_time
        self.max_process_time = max_process_time
        self.rng = rng if rng is not None else random.Random()

    def random_ip(self) -> str:
        return ".".join(str(self.rng.randint(0, 255)) for _ in range(4))

    def generate(self) -> Request:
        return Request(
            ip_in=self.random_ip(),
            ip_out=self.random_ip(),
            process_time=self.rng.randint(self.min_process_time, self.max_process_time),
            job_type=self.rng.choice(self.JOB_TYPES),
        )

    def should_arrive(self, probability: float) -> bool:
        """Single uniform draw deciding whether a new request shows up this cycle."""
        return self.rng.random() < probability
