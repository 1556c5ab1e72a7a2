# src/balancer/models.py
import logging
from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from src.request_queue.models import IpRange
from src.log_handler.simulation_log import SimulationStats

logger = logging.getLogger(__name__)

INITIAL_QUEUE_MULTIPLIER = 100


class SimulationConfig(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    init_servers: int = Field(default=10, ge=1, alias="initServers")
    total_run_time: int = Field(default=10000, ge=0, alias="totalRunTime")
    min_queue_per_server: int = Field(default=50, ge=0, alias="minQueuePerServer")
    max_queue_per_server: int = Field(default=80, ge=0, alias="maxQueuePerServer")
    scale_cooldown_time: int = Field(default=100, ge=0, alias="scaleCooldownTime")
    min_process_time: int = Field(default=5, ge=0, alias="minProcessTime")
    max_process_time: int = Field(default=20, ge=0, alias="maxProcessTime")
    new_request_prob: float = Field(default=0.25, ge=0.0, le=1.0, alias="newRequestProb")
    blocked_ip_ranges: List[IpRange] = Field(default_factory=list, alias="blockedIpRanges")

    @field_validator("blocked_ip_ranges", mode="before")
    @classmethod
    def parse_ranges(cls, value: Any) -> Any:
        """Accept the config file form "start-end,start-end"."""
        if not isinstance(value, str):
            return value
        ranges = []
        for item in value.split(","):
            item = item.strip()
            if not item:
                continue
            try:
                ranges.append(IpRange.parse(item))
            except ValueError as e:
                logger.warning(f"Skipping invalid blocked IP range '{item}': {str(e)}")
        return ranges

    @model_validator(mode="after")
    def check_process_time_range(self) -> "SimulationConfig":
        if self.min_process_time > self.max_process_time:
            raise ValueError(
                f"min_process_time ({self.min_process_time}) exceeds "
                f"max_process_time ({self.max_process_time})"
            )
        return self

    @property
    def initial_queue_size(self) -> int:
        return self.init_servers * INITIAL_QUEUE_MULTIPLIER

    def with_overrides(self, **values: Any) -> "SimulationConfig":
        """Return a validated copy with the given fields replaced."""
        return SimulationConfig.model_validate({**self.model_dump(), **values})

    def describe(self) -> str:
        ranges = ", ".join(str(r) for r in self.blocked_ip_ranges)
        return "\n".join(
            [
                "===== Current Configuration =====",
                f"initServers:                     {self.init_servers}",
                f"totalRunTime:                    {self.total_run_time}",
                f"minQueuePerServer:               {self.min_queue_per_server}",
                f"maxQueuePerServer:               {self.max_queue_per_server}",
                f"scaleCooldownTime:               {self.scale_cooldown_time}",
                f"minProcessTime:                  {self.min_process_time}",
                f"maxProcessTime:                  {self.max_process_time}",
                f"newRequestProb:                  {self.new_request_prob}",
                f"blockedIpRanges:                 {ranges}",
                "=================================",
            ]
        )


class SimulationSummary(BaseModel):
    total_cycles: int
    final_pool_size: int
    final_queue_size: int
    stats: SimulationStats
