# src/request_queue/models.py
import ipaddress
from enum import Enum
from typing import Iterable

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class JobType(str, Enum):
    PROCESSING = "processing"
    STREAMING = "streaming"


def ip_to_int(ip: str) -> int:
    """
    Convert a dotted-quad IPv4 address to its 32-bit integer form.

    Octets are combined big-endian, so "10.0.1.0" > "10.0.0.255" even though
    the strings compare the other way round.

    Raises:
        ValueError: If the string is not a valid IPv4 address
    """
    return int(ipaddress.IPv4Address(ip.strip()))


class Request(BaseModel):
    model_config = ConfigDict(frozen=True)

    ip_in: str
    ip_out: str
    process_time: int = Field(ge=0)
    job_type: JobType = JobType.PROCESSING

    @field_validator("ip_in", "ip_out")
    @classmethod
    def validate_ip(cls, value: str) -> str:
        value = value.strip()
        ip_to_int(value)
        return value


class IpRange(BaseModel):
    model_config = ConfigDict(frozen=True)

    start_ip: str
    end_ip: str

    @field_validator("start_ip", "end_ip")
    @classmethod
    def validate_ip(cls, value: str) -> str:
        value = value.strip()
        ip_to_int(value)
        return value

    @model_validator(mode="after")
    def validate_order(self) -> "IpRange":
        if ip_to_int(self.start_ip) > ip_to_int(self.end_ip):
            raise ValueError(
                f"Range start {self.start_ip} is greater than range end {self.end_ip}"
            )
        return self

    @classmethod
    def parse(cls, text: str) -> "IpRange":
        """Build a range from its "start-end" form."""
        start, sep, end = text.partition("-")
        if not sep:
            raise ValueError(f"Invalid IP range '{text}': expected 'start-end'")
        return cls(start_ip=start, end_ip=end)

    def contains(self, ip: str) -> bool:
        ip_num = ip_to_int(ip)
        return ip_to_int(self.start_ip) <= ip_num <= ip_to_int(self.end_ip)

    def __str__(self) -> str:
        return f"{self.start_ip}-{self.end_ip}"


def is_blocked(ip: str, ranges: Iterable[IpRange]) -> bool:
    """Check whether an address falls inside any of the given ranges."""
    return any(ip_range.contains(ip) for ip_range in ranges)
