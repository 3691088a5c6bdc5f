"""Tests for logging utilities."""

import logging
from io import StringIO

from minopt import DifferentiableFunction, newton
from minopt.logging import configure_logging, get_logger, set_log_level
from minopt.objectives import square_root


def test_get_logger_returns_logger():
    """Test that get_logger returns a logger instance."""
    logger = get_logger("test_module")
    assert isinstance(logger, logging.Logger)
    assert logger.name == "minopt.test_module"


def test_get_logger_keeps_package_prefix():
    """Module names already under minopt are not prefixed twice."""
    assert get_logger("minopt.optimize.adam").name == "minopt.optimize.adam"
    assert get_logger().name == "minopt"


def test_get_logger_caching():
    """Test that get_logger caches loggers."""
    assert get_logger("test_module") is get_logger("test_module")


def test_set_log_level_string():
    """Test that set_log_level accepts string levels."""
    logger = get_logger("test_module")
    try:
        set_log_level("DEBUG")
        assert logger.level == logging.DEBUG
        set_log_level("ERROR")
        assert logger.level == logging.ERROR
    finally:
        set_log_level(logging.WARNING)


def test_configure_logging_redirects_stream():
    """Test configure_logging function."""
    logger = get_logger("test_module")
    stream = StringIO()
    try:
        configure_logging(level=logging.DEBUG, stream=stream)
        logger.debug("Debug message")
        assert "[DEBUG] minopt.test_module: Debug message" in stream.getvalue()
    finally:
        configure_logging(level=logging.WARNING)


def test_solver_iterations_logged_at_debug():
    """Root finders log one line per iteration at DEBUG."""
    f = DifferentiableFunction.from_combined_probe_function(square_root, 2.0)
    stream = StringIO()
    try:
        configure_logging(level=logging.DEBUG, stream=stream)
        newton(f, 2.0)
    finally:
        configure_logging(level=logging.WARNING)
    lines = [line for line in stream.getvalue().splitlines() if "residual" in line]
    assert len(lines) == 5


def test_logger_does_not_propagate():
    """Test that loggers don't propagate to root logger."""
    assert get_logger("test_module").propagate is False
