import argparse
import logging
import random
import sys
from typing import Callable, List, Optional

from src.balancer import LoadBalancer, SimulationConfig, InvariantViolationError
from src.balancer.config import load_config_or_default
from src.log_handler.logging_config import setup_logging, shutdown_logging
from src.log_handler.simulation_log import SimulationLog


logger = logging.getLogger(__name__)

SERVER_RANGE = (1, 100)
CYCLE_RANGE = (100, 1000000)


def prompt_int(
    prompt: str,
    min_value: int,
    max_value: int,
    input_fn: Callable[[str], str] = input,
    output_fn: Callable[[str], None] = print,
) -> int:
    """Ask until the user enters an integer within [min_value, max_value]."""
    while True:
        raw = input_fn(prompt)
        try:
            value = int(raw.strip())
        except ValueError:
            output_fn("Invalid input. Please enter an integer.")
            continue

        if value < min_value or value > max_value:
            output_fn(f"Value must be between {min_value} and {max_value}.")
            continue
        return value


def bounded_int(min_value: int, max_value: int) -> Callable[[str], int]:
    def parse(raw: str) -> int:
        try:
            value = int(raw)
        except ValueError:
            raise argparse.ArgumentTypeError(f"invalid integer: {raw!r}")
        if value < min_value or value > max_value:
            raise argparse.ArgumentTypeError(
                f"must be between {min_value} and {max_value}"
            )
        return value

    return parse


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Simulate a self-scaling pool of request-processing servers."
    )
    parser.add_argument("--config", default="config.txt", help="key=value config file")
    parser.add_argument("--log-file", default="log.txt", help="simulation log output")
    parser.add_argument(
        "--servers", type=bounded_int(*SERVER_RANGE), help="initial number of servers"
    )
    parser.add_argument(
        "--cycles", type=bounded_int(*CYCLE_RANGE), help="total clock cycles to simulate"
    )
    parser.add_argument("--seed", type=int, help="seed for a reproducible run")
    parser.add_argument("--no-console", action="store_true", help="only write the log file")
    parser.add_argument(
        "--verbose", action="store_true", help="echo per-request events to the console"
    )
    parser.add_argument(
        "--no-prompt",
        action="store_true",
        help="use config values instead of asking for servers and cycles",
    )
    return parser


def resolve_config(args: argparse.Namespace, input_fn: Callable[[str], str] = input) -> SimulationConfig:
    config = load_config_or_default(args.config)

    servers = args.servers
    cycles = args.cycles
    if not args.no_prompt:
        if servers is None:
            servers = prompt_int(
                f"Enter initial number of servers ({SERVER_RANGE[0]}-{SERVER_RANGE[1]}): ",
                *SERVER_RANGE,
                input_fn=input_fn,
            )
        if cycles is None:
            cycles = prompt_int(
                f"Enter total simulation time in clock cycles ({CYCLE_RANGE[0]}-{CYCLE_RANGE[1]}): ",
                *CYCLE_RANGE,
                input_fn=input_fn,
            )

    overrides = {}
    if servers is not None:
        overrides["init_servers"] = servers
    if cycles is not None:
        overrides["total_run_time"] = cycles
    return config.with_overrides(**overrides) if overrides else config


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    setup_logging(
        log_level=logging.DEBUG,
        log_file=args.log_file,
        module_levels={"src": logging.INFO},
        console=not args.no_console,
        console_level=logging.DEBUG if args.verbose else logging.INFO,
    )

    try:
        config = resolve_config(args)
        logger.info("\n" + config.describe())

        rng = random.Random(args.seed) if args.seed is not None else None
        load_balancer = LoadBalancer(config, SimulationLog(), rng=rng)
        load_balancer.initialize()
        logger.info("Load balancer initialized. Starting simulation...")

        summary = load_balancer.run()
        logger.info(
            f"Simulation complete after {summary.total_cycles} cycles. "
            f"Log written to {args.log_file}"
        )
        return 0
    except EOFError:
        logger.error("Input closed before all simulation parameters were entered")
        return 1
    except InvariantViolationError as e:
        logger.error(f"Simulation aborted: {str(e)}")
        return 1
    finally:
        shutdown_logging()


if __name__ == "__main__":
    sys.exit(main())
