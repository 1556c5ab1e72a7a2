# src/balancer/auto_scaler.py
import logging
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger(__name__)


@dataclass
class ScalingConfig:
    min_queue_per_worker: int  # queue length / worker below which the pool shrinks
    max_queue_per_worker: int  # queue length / worker above which the pool grows
    cooldown_cycles: int  # cycles to wait between scaling operations


class ScalingAction(str, Enum):
    SCALE_UP = "scale_up"
    SCALE_DOWN = "scale_down"
    HOLD = "hold"


class AutoScaler:
    """
    Threshold policy deciding, once per cycle, whether the pool grows,
    shrinks or stays put.

    Thresholds are per worker, so the trigger depth scales with the pool.
    Only actions that actually changed the pool should be reported back via
    ``record_scaling``; that restarts the cooldown.
    """

    def __init__(self, config: ScalingConfig, last_scale_cycle: int = 0):
        self.config = config
        self.last_scale_cycle = last_scale_cycle

    def can_scale(self, current_cycle: int) -> bool:
        return current_cycle - self.last_scale_cycle >= self.config.cooldown_cycles

    def decide(self, current_cycle: int, queue_length: int, worker_count: int) -> ScalingAction:
        if not self.can_scale(current_cycle):
            return ScalingAction.HOLD

        if queue_length > self.config.max_queue_per_worker * worker_count:
            return ScalingAction.SCALE_UP

        if queue_length < self.config.min_queue_per_worker * worker_count and worker_count > 1:
            return ScalingAction.SCALE_DOWN

        return ScalingAction.HOLD

    def record_scaling(self, current_cycle: int) -> None:
        logger.debug(f"Scaling recorded at cycle {current_cycle}")
        self.last_scale_cycle = current_cycle
