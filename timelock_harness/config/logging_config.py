"""
Logging Configuration for the Timelock Claim Harness

Provides structured logging with:
- Timestamps
- Log levels (DEBUG, INFO, WARNING, ERROR, CRITICAL)
- File rotation (1 file per day)
- Separate error log
- Console and file handlers
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler, TimedRotatingFileHandler
from pathlib import Path
from typing import Optional


# Log formats
DETAILED_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s"
SIMPLE_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
ERROR_HANDLER_NAME = "errors"


def get_log_dir() -> Path:
    """Log directory, taken from HARNESS_LOG_DIR (default ./logs)."""
    return Path(os.getenv("HARNESS_LOG_DIR", "logs"))


def setup_logger(
    name: str,
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    console: bool = True,
    detailed: bool = False,
    log_dir: Optional[Path] = None,
) -> logging.Logger:
    """
    Setup a logger with console and file handlers.

    Args:
        name: Logger name (typically module name)
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional log file name (defaults to name.log)
        console: Whether to log to console
        detailed: Whether to use detailed format (includes file/line)
        log_dir: Directory for log files (defaults to HARNESS_LOG_DIR)

    Returns:
        Configured logger instance

    Example:
        >>> logger = setup_logger("harness", level=logging.DEBUG)
        >>> logger.info("Deploying airdrop")
        >>> logger.error("Withdraw failed", exc_info=True)
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Prevent duplicate handlers; re-level the existing ones instead
    if logger.handlers:
        for handler in logger.handlers:
            if handler.get_name() != ERROR_HANDLER_NAME:
                handler.setLevel(level)
        return logger

    log_format = DETAILED_FORMAT if detailed else SIMPLE_FORMAT
    formatter = logging.Formatter(log_format, datefmt=DATE_FORMAT)

    if console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    log_dir = log_dir or get_log_dir()
    log_dir.mkdir(parents=True, exist_ok=True)

    if log_file is None:
        log_file = f"{name}.log"

    file_handler = TimedRotatingFileHandler(
        log_dir / log_file,
        when="midnight",
        interval=1,
        backupCount=30,  # Keep 30 days of logs
        encoding="utf-8",
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    # Separate error log
    error_handler = RotatingFileHandler(
        log_dir / f"{name}_errors.log",
        maxBytes=10 * 1024 * 1024,  # 10 MB
        backupCount=5,
        encoding="utf-8",
    )
    error_handler.set_name(ERROR_HANDLER_NAME)
    error_handler.setLevel(logging.ERROR)
    error_handler.setFormatter(logging.Formatter(DETAILED_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(error_handler)

    return logger


def log_claim_state(
    logger: logging.Logger,
    label: str,
    address: str,
    locked_amount: int,
    timestamp: int,
    state: Optional[str] = None,
):
    """
    Log a claim record in structured format.

    Args:
        logger: Logger instance
        label: Where in the lifecycle the read happened (e.g. "Before withdraw")
        address: Claimant address
        locked_amount: Locked amount in the smallest token unit
        timestamp: Claim timestamp (0 when unclaimed)
        state: Derived claim state name
    """
    msg = f"CLAIM STATE | {label} | {address} | locked={locked_amount} | claimed_at={timestamp}"
    if state:
        msg += f" | {state}"
    logger.debug(msg)


def log_withdraw_result(
    logger: logging.Logger,
    address: str,
    success: bool,
    amount: int = 0,
    tx_hash: Optional[str] = None,
    error: Optional[str] = None,
):
    """
    Log a withdraw outcome in structured format.

    A reverted withdraw is an expected outcome for premature calls, so it is
    logged at WARNING rather than ERROR.
    """
    status = "SUCCESS" if success else "REVERTED"
    msg = f"WITHDRAW {status} | {address} | amount={amount}"
    if tx_hash:
        msg += f" | TX: {tx_hash}"
    if error:
        msg += f" | {error}"

    if success:
        logger.info(msg)
    else:
        logger.warning(msg)


def get_harness_logger(debug: bool = False) -> logging.Logger:
    """Get logger for harness runs."""
    level = logging.DEBUG if debug else logging.INFO
    return setup_logger("timelock_harness", level=level, detailed=debug)
