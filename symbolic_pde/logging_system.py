"""
Logging System for Symbolic Network Training

Centralized logger with verbosity levels so that training diagnostics (cost
values, weight values, gradient sizes) can be turned up for debugging without
cluttering normal runs.
"""

import logging
import sys
import time
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Mapping, Optional


class LogLevel(Enum):
    """Enumeration of logging levels for training"""
    SILENT = 0      # No output except critical errors
    MINIMAL = 1     # Only final results and critical info
    MODERATE = 2    # Progress updates and key milestones
    DETAILED = 3    # Gradient construction details
    VERBOSE = 4     # Per-point weight values


class TrainingLogger:
    """
    Centralized logger for network training with context-aware formatting
    """

    def __init__(self, log_level: LogLevel = LogLevel.MODERATE,
                 log_to_file: bool = False, log_file_path: Optional[str] = None):
        self.log_level = log_level
        self.log_to_file = log_to_file
        self.start_time = time.time()

        self.logger = logging.getLogger('symbolic_pde')
        self.logger.setLevel(logging.DEBUG)
        self.logger.handlers.clear()  # Remove any existing handlers

        formatter = logging.Formatter(
            '%(asctime)s - %(levelname)s - %(message)s',
            datefmt='%H:%M:%S'
        )

        if self.log_level != LogLevel.SILENT:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setFormatter(formatter)
            self.logger.addHandler(console_handler)

        if log_to_file:
            if log_file_path is None:
                log_file_path = f"symbolic_pde_{datetime.now().strftime('%Y%m%d_%H%M%S')}.log"
            file_handler = logging.FileHandler(log_file_path)
            file_handler.setFormatter(formatter)
            self.logger.addHandler(file_handler)

    def _should_log(self, required_level: LogLevel) -> bool:
        """Check if message should be logged based on current log level"""
        return self.log_level.value >= required_level.value

    def is_enabled_for(self, level: LogLevel) -> bool:
        return self._should_log(level)

    def critical(self, message: str):
        """Always logged - critical errors and failures"""
        if self.log_level != LogLevel.SILENT:
            self.logger.error(f"CRITICAL: {message}")

    def info(self, message: str, required_level: LogLevel = LogLevel.MINIMAL):
        """General information with configurable level"""
        if self._should_log(required_level):
            self.logger.info(message)

    def training_step(self, point_index: int, cost: float, weights: Mapping[int, float]):
        """Cost and weight values at one training point"""
        if not self._should_log(LogLevel.VERBOSE):
            return

        formatted = ", ".join(f"{value:.3f}" for value in weights.values())
        self.logger.debug(f"Point {point_index:4d}: cost={cost:.6f} weights: {formatted}")

    def milestone(self, message: str):
        """Important milestones - always shown except in silent mode"""
        if self.log_level != LogLevel.SILENT:
            self.logger.info(f"MILESTONE: {message}")

    def warning(self, message: str):
        """Warnings - shown from minimal level onwards"""
        if self._should_log(LogLevel.MINIMAL):
            self.logger.warning(message)

    def detail(self, message: str):
        if self._should_log(LogLevel.DETAILED):
            self.logger.info(message)

    def debug(self, message: str):
        """Debug information - only in verbose mode"""
        if self._should_log(LogLevel.VERBOSE):
            self.logger.debug(f"DEBUG: {message}")

    def result_summary(self, results: Dict[str, Any]):
        """Log final results summary"""
        if self.log_level == LogLevel.SILENT:
            return

        self.logger.info("=" * 60)
        self.logger.info("TRAINING RESULTS:")
        self.logger.info("=" * 60)

        for key, value in results.items():
            if isinstance(value, float):
                self.logger.info(f"{key:.<30} {value:.6f}")
            else:
                self.logger.info(f"{key:.<30} {value}")

        self.logger.info(f"{'elapsed_seconds':.<30} {time.time() - self.start_time:.2f}")


# Global logger instance
_global_logger: Optional[TrainingLogger] = None


def get_logger() -> TrainingLogger:
    """Get or create the global logger instance"""
    global _global_logger
    if _global_logger is None:
        _global_logger = TrainingLogger()
    return _global_logger


def set_log_level(level: LogLevel):
    """Set the global logging level"""
    global _global_logger
    if _global_logger is None:
        _global_logger = TrainingLogger(log_level=level)
    else:
        _global_logger.log_level = level


def configure_logging(log_level: LogLevel = LogLevel.MODERATE,
                      log_to_file: bool = False,
                      log_file_path: Optional[str] = None) -> TrainingLogger:
    """Configure the global logging system"""
    global _global_logger
    _global_logger = TrainingLogger(
        log_level=log_level,
        log_to_file=log_to_file,
        log_file_path=log_file_path
    )
    return _global_logger


# Convenience functions for common operations
def log_info(message: str, level: LogLevel = LogLevel.MINIMAL):
    """Log info message at specified level"""
    get_logger().info(message, level)


def log_milestone(message: str):
    """Log milestone message"""
    get_logger().milestone(message)


def log_warning(message: str):
    """Log warning message"""
    get_logger().warning(message)


def log_debug(message: str):
    """Log debug message"""
    get_logger().debug(message)
