"""Tests for training log levels."""

import logging

import pytest

from symbolic_pde import (
    Network, LogLevel, TrainingLogger, ConstantNode, PowerNode, SumNode,
    ProductNode, configure_logging, get_logger, set_log_level,
)


def build_network(log_level):
    network = Network(logger=TrainingLogger(log_level=log_level))
    w = network.declare_weight()
    x = network.declare_input()
    network.cost = PowerNode(SumNode([ProductNode([w, x]), ConstantNode(-3)]), ConstantNode(2))
    return network


def messages(caplog):
    return [record.getMessage() for record in caplog.records if record.name == 'symbolic_pde']


def test_verbose_logs_every_point(caplog):
    caplog.set_level(logging.DEBUG, logger='symbolic_pde')
    build_network(LogLevel.VERBOSE).train(0.1, [[1.0]] * 3)

    steps = [m for m in messages(caplog) if m.startswith("Point")]
    assert len(steps) == 3
    assert "cost=4.000000" in steps[0]


def test_detailed_logs_gradient_construction(caplog):
    caplog.set_level(logging.DEBUG, logger='symbolic_pde')
    build_network(LogLevel.DETAILED).train(0.1, [[1.0]] * 3)

    logged = messages(caplog)
    assert sum(m.startswith("Gradient for X0") for m in logged) == 1
    assert not any(m.startswith("Point") for m in logged)


def test_minimal_only_shows_milestones(caplog):
    caplog.set_level(logging.DEBUG, logger='symbolic_pde')
    build_network(LogLevel.MINIMAL).train(0.1, [[1.0]])

    logged = messages(caplog)
    assert logged
    assert all(m.startswith("MILESTONE") for m in logged)


def test_silent_logs_nothing(caplog):
    caplog.set_level(logging.DEBUG, logger='symbolic_pde')
    build_network(LogLevel.SILENT).train(0.1, [[1.0]])

    assert messages(caplog) == []


def test_global_logger_configuration():
    logger = configure_logging(LogLevel.DETAILED)
    assert get_logger() is logger
    set_log_level(LogLevel.MINIMAL)
    assert get_logger().log_level == LogLevel.MINIMAL


def test_log_file(tmp_path):
    path = tmp_path / "training.log"
    logger = TrainingLogger(LogLevel.MODERATE, log_to_file=True, log_file_path=str(path))
    logger.milestone("done")
    for handler in logger.logger.handlers:
        handler.flush()
    assert "MILESTONE: done" in path.read_text()


@pytest.fixture(autouse=True)
def reset_global_logger():
    yield
    configure_logging(LogLevel.SILENT)


def test_result_summary_and_helpers(caplog):
    from symbolic_pde.logging_system import log_info, log_milestone, log_warning, log_debug

    caplog.set_level(logging.DEBUG, logger='symbolic_pde')
    configure_logging(LogLevel.VERBOSE)
    get_logger().result_summary({"final_cost": 0.25, "points": 4})
    log_info("info")
    log_milestone("halfway")
    log_warning("careful")
    log_debug("internals")

    logged = messages(caplog)
    assert "TRAINING RESULTS:" in logged
    assert any(m.startswith("final_cost") and m.endswith("0.250000") for m in logged)
    assert any(m.startswith("elapsed_seconds") for m in logged)
    assert {"info", "MILESTONE: halfway", "careful", "DEBUG: internals"} <= set(logged)
