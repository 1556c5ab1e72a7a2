import logging
import pytest
from unittest.mock import MagicMock

from src.log_handler.simulation_log import SimulationLog, SimulationStats
from src.balancer.models import SimulationConfig
from src.request_queue.models import JobType, Request


@pytest.fixture
def sim_log():
    """Create a log writing to the 'simulation' logger"""
    return SimulationLog()


@pytest.fixture
def sample_request():
    return Request(ip_in="1.2.3.4", ip_out="5.6.7.8", process_time=7, job_type=JobType.STREAMING)


def test_cycle_prefix():
    """Test cycle numbers are zero padded to five digits"""
    assert SimulationLog.format_line(7, "hello") == "[Cycle 00007] hello"
    assert SimulationLog.format_line(123456, "x") == "[Cycle 123456] x"


def test_event_lines(sim_log, sample_request, caplog):
    """Test message wording for each event"""
    with caplog.at_level(logging.DEBUG, logger="simulation"):
        sim_log.log_server_added(1, 3)
        sim_log.log_server_removed(2, 3)
        sim_log.log_request_started(3, 4, sample_request)
        sim_log.log_request_completed(10, 4, sample_request)
        sim_log.log_request_blocked(11, "10.0.0.5")
        sim_log.log_status(12, 120, 4)

    messages = [record.getMessage() for record in caplog.records]
    assert messages == [
        "[Cycle 00001] ADDED: Server 3 created",
        "[Cycle 00002] REMOVED: Server 3 deallocated",
        "[Cycle 00003] START: Server 4 processing 1.2.3.4 -> 5.6.7.8 (7 cycles, streaming)",
        "[Cycle 00010] COMPLETE: Request 1.2.3.4 -> 5.6.7.8 finished on Server 4",
        "[Cycle 00011] BLOCKED: Request from 10.0.0.5 rejected (IP in blocked range)",
        "[Cycle 00012] STATUS: Queue size: 120 | Active servers: 4",
    ]


def test_request_lines_log_at_debug(sample_request):
    """Test per-request detail stays at DEBUG"""
    logger = MagicMock()
    quiet_log = SimulationLog(logger=logger)

    quiet_log.log_request_started(0, 1, sample_request)
    quiet_log.log_request_completed(0, 1, sample_request)
    quiet_log.log_status(0, 1, 1)

    levels = [c.args[0] for c in logger.log.call_args_list]
    assert levels == [logging.DEBUG, logging.DEBUG, logging.INFO]


def test_counters(sim_log, sample_request):
    """Test each event bumps its counter"""
    sim_log.log_server_added(0, 1)
    sim_log.log_server_added(0, 2)
    sim_log.log_server_removed(5, 1)
    sim_log.log_request_started(1, 2, sample_request)
    sim_log.log_request_completed(8, 2, sample_request)
    sim_log.log_request_blocked(9, "10.0.0.1")
    sim_log.log_event(9, "nothing counted")
    sim_log.log_status(9, 0, 1)

    assert sim_log.stats == SimulationStats(
        servers_created=2,
        servers_deleted=1,
        requests_started=1,
        requests_processed=1,
        requests_blocked=1,
    )


def test_injected_stats_are_shared(sample_request):
    """Test the caller's accumulator is the one updated"""
    stats = SimulationStats()
    sim_log = SimulationLog(stats=stats)

    sim_log.log_request_blocked(0, "1.1.1.1")

    assert stats.requests_blocked == 1


def test_summary(sim_log):
    """Test the final summary block"""
    sim_log.log_server_added(0, 1)
    sim_log.log_request_blocked(0, "1.1.1.1")

    summary = sim_log.write_summary(500, 3, 42)

    assert "SIMULATION SUMMARY" in summary
    assert "Total Clock Cycles:          500" in summary
    assert "Final Server Count:          3" in summary
    assert "Final Queue Size:            42" in summary
    assert "Total Requests Blocked:      1" in summary
    assert "Servers Created:             1" in summary


def test_header(sim_log):
    """Test the run header"""
    header = sim_log.log_header(SimulationConfig(init_servers=3, blocked_ip_ranges="1.1.1.1-1.1.1.9"))

    assert "Initial Servers:             3" in header
    assert "Starting Queue Size:         300" in header
    assert "1.1.1.1-1.1.1.9" in header

    assert "N/A" in sim_log.log_header(SimulationConfig())
