#!/usr/bin/env python3
"""
Timelock claim harness entry point.

Usage:
    # Deploy, fund, claim, advance the clock, withdraw (no flags needed)
    python -m timelock_harness

    # Negative paths / everything, each isolated by an evm snapshot
    python -m timelock_harness --scenario premature
    python -m timelock_harness --scenario all --strict

Configuration comes from the environment (optionally a .env file):
RPC_URL, PRIVATE_KEY, AIRDROP_ARTIFACT, COLLATERAL_ADDRESS, RELEASE_DELAY, ...
"""
from __future__ import annotations

import argparse
import logging
from typing import Callable, Optional, Sequence

from .config.logging_config import get_harness_logger
from .config.settings import HarnessSettings, load_settings
from .errors import HarnessError
from .harness.backend import build_backend
from .harness.lifecycle import TimelockClaimHarness
from .harness.scenarios import SCENARIOS, ScenarioConfig, run_scenarios


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Exercise a timelock airdrop's claim/withdraw lifecycle")
    parser.add_argument("--env-file", help="Load environment variables from this .env file first")
    parser.add_argument(
        "--scenario",
        choices=[*SCENARIOS, "all"],
        default="lifecycle",
        help="Scenario to run (default: lifecycle)",
    )
    parser.add_argument("--strict", action="store_true", help="Exit non-zero when a scenario's checks fail")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    return parser


def main(argv: Optional[Sequence[str]] = None, backend_factory: Callable = build_backend) -> int:
    args = build_parser().parse_args(argv)
    logger = get_harness_logger(debug=args.verbose)

    try:
        settings: HarnessSettings = load_settings(args.env_file)
        backend, clock = backend_factory(settings)
        harness = TimelockClaimHarness(backend, clock, logger=logger)
        config = ScenarioConfig.from_settings(settings)

        names = list(SCENARIOS) if args.scenario == "all" else [args.scenario]
        results = run_scenarios(harness, config, names, isolate=len(names) > 1)
    except HarnessError as e:
        logger.error("Harness aborted: %s", e)
        return 1

    failed = [r for r in results if not r.passed]
    if len(results) > 1:
        logger.info("%d/%d scenarios passed", len(results) - len(failed), len(results))
    if failed and args.strict:
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
