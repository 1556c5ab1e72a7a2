import argparse
import logging
import pytest
from unittest.mock import MagicMock, patch

from src.main import bounded_int, build_parser, main, prompt_int, resolve_config
from src.balancer.exceptions import InvariantViolationError


def test_prompt_int_retries_until_valid():
    """Test non-integers and out-of-range values are asked again"""
    input_fn = MagicMock(side_effect=["abc", "0", "101", " 5 "])
    output_fn = MagicMock()

    value = prompt_int("Servers: ", 1, 100, input_fn=input_fn, output_fn=output_fn)

    assert value == 5
    assert input_fn.call_count == 4
    messages = [c.args[0] for c in output_fn.call_args_list]
    assert messages == [
        "Invalid input. Please enter an integer.",
        "Value must be between 1 and 100.",
        "Value must be between 1 and 100.",
    ]


def test_bounded_int():
    """Test command-line range checks"""
    parse = bounded_int(1, 100)

    assert parse("42") == 42
    with pytest.raises(argparse.ArgumentTypeError):
        parse("0")
    with pytest.raises(argparse.ArgumentTypeError):
        parse("many")


def test_resolve_config_from_arguments(tmp_path):
    """Test command-line values override the config file"""
    config_file = tmp_path / "config.txt"
    config_file.write_text("initServers=8\nnewRequestProb=0.4\n")
    args = build_parser().parse_args(
        ["--config", str(config_file), "--servers", "3", "--cycles", "200"]
    )

    config = resolve_config(args, input_fn=MagicMock(side_effect=AssertionError("no prompt")))

    assert config.init_servers == 3
    assert config.total_run_time == 200
    assert config.new_request_prob == 0.4


def test_resolve_config_prompts_for_missing_values(tmp_path):
    """Test interactive prompts fill in servers and cycles"""
    args = build_parser().parse_args(["--config", str(tmp_path / "missing.txt")])

    config = resolve_config(args, input_fn=MagicMock(side_effect=["4", "150"]))

    assert config.init_servers == 4
    assert config.total_run_time == 150


def test_resolve_config_without_prompt(tmp_path):
    """Test --no-prompt keeps config values"""
    config_file = tmp_path / "config.txt"
    config_file.write_text("initServers=2\ntotalRunTime=300\n")
    args = build_parser().parse_args(["--config", str(config_file), "--no-prompt"])

    config = resolve_config(args, input_fn=MagicMock(side_effect=AssertionError("no prompt")))

    assert config.init_servers == 2
    assert config.total_run_time == 300


@patch("src.main.shutdown_logging")
@patch("src.main.setup_logging")
def test_main_runs_simulation(mock_setup, mock_shutdown, tmp_path):
    """Test a complete run from the command line"""
    exit_code = main(
        [
            "--config", str(tmp_path / "missing.txt"),
            "--log-file", str(tmp_path / "log.txt"),
            "--servers", "1",
            "--cycles", "100",
            "--seed", "3",
            "--no-prompt",
        ]
    )

    assert exit_code == 0
    mock_setup.assert_called_once()
    mock_shutdown.assert_called_once()


@patch("src.main.shutdown_logging")
@patch("src.main.setup_logging")
@patch("src.main.LoadBalancer")
def test_main_reports_invariant_violation(mock_balancer, mock_setup, mock_shutdown, tmp_path):
    """Test a fatal invariant violation exits with status 1"""
    mock_balancer.return_value.run.side_effect = InvariantViolationError("queue underflow")

    exit_code = main(["--config", str(tmp_path / "missing.txt"), "--no-prompt"])

    assert exit_code == 1
    mock_shutdown.assert_called_once()


@patch("src.main.shutdown_logging")
@patch("src.main.setup_logging")
@patch("src.main.prompt_int", side_effect=EOFError)
def test_main_exits_cleanly_when_input_closes(mock_prompt, mock_setup, mock_shutdown, tmp_path):
    """Test closed stdin during the prompts ends with status 1"""
    exit_code = main(["--config", str(tmp_path / "missing.txt")])

    assert exit_code == 1
    mock_prompt.assert_called_once()
    mock_shutdown.assert_called_once()


@patch("src.main.shutdown_logging")
@patch("src.main.setup_logging")
def test_main_quiets_package_debug_logs(mock_setup, mock_shutdown, tmp_path):
    """Test the root logger keeps DEBUG while package modules log at INFO"""
    main(["--config", str(tmp_path / "missing.txt"), "--no-prompt", "--cycles", "100", "--seed", "1"])

    kwargs = mock_setup.call_args.kwargs
    assert kwargs["log_level"] == logging.DEBUG
    assert kwargs["module_levels"] == {"src": logging.INFO}
