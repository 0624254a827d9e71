import numpy as np
import pytest

from symbolic_pde import LogLevel, TrainingLogger


def central_difference(node, point, index, step=1e-6):
    """Central finite-difference estimate of the partial derivative"""
    forward = np.array(point, dtype=np.float64)
    backward = np.array(point, dtype=np.float64)
    forward[index] += step
    backward[index] -= step
    return (node.evaluate(forward) - node.evaluate(backward)) / (2 * step)


@pytest.fixture
def finite_difference():
    return central_difference


@pytest.fixture
def silent_logger():
    return TrainingLogger(log_level=LogLevel.SILENT)
