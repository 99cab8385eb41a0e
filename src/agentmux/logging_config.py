"""
Logging setup for agentmux.

All loggers live under the "agentmux" namespace. The TUI owns the terminal,
so while it runs logs go to a file only; the CLI gets a Rich console handler.
"""

import logging
from pathlib import Path
from typing import Optional

from rich.logging import RichHandler

from .config import get_agentmux_dir

ROOT_LOGGER_NAME = "agentmux"
LOG_FILE_NAME = "agentmux.log"

FILE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def get_log_file() -> Path:
    """Default log file, under the agentmux directory."""
    return get_agentmux_dir() / "logs" / LOG_FILE_NAME


def get_logger(name: str) -> logging.Logger:
    """Get a logger in the agentmux namespace.

    Args:
        name: Component name (e.g. "collector")

    Returns:
        Logger named "agentmux.<name>"
    """
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[Path] = None,
    console: bool = True,
) -> logging.Logger:
    """Configure the agentmux root logger.

    Existing handlers are removed first, so calling this twice does not
    duplicate output.

    Args:
        level: Logging level for the agentmux logger
        log_file: Optional file to append plain-text records to
        console: Whether to attach a Rich console handler

    Returns:
        The configured root agentmux logger
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.handlers.clear()
    logger.setLevel(level)
    logger.propagate = False

    if console:
        handler = RichHandler(show_path=False, rich_tracebacks=True)
        handler.setLevel(level)
        logger.addHandler(handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        logger.addHandler(file_handler)

    return logger


def setup_tui_logging(debug: bool = False, log_file: Optional[Path] = None) -> logging.Logger:
    """File-only logging for the TUI."""
    return setup_logging(
        level=logging.DEBUG if debug else logging.INFO,
        log_file=log_file or get_log_file(),
        console=False,
    )


def setup_cli_logging(debug: bool = False) -> logging.Logger:
    """Console logging for one-shot CLI commands (warnings only by default)."""
    setup_logging(level=logging.DEBUG if debug else logging.WARNING, console=True)
    return get_logger("cli")
