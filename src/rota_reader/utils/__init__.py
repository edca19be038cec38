"""Utilities package for Rota Reader."""
from .logging_setup import (
    TRACE,
    ExtractionLogger,
    get_logger,
    log_function_call,
    setup_logging,
)

__all__ = [
    "setup_logging",
    "get_logger",
    "log_function_call",
    "ExtractionLogger",
    "TRACE",
]
