# Python

"""Symbolic PDE Package

Symbolic expression trees with exact partial derivatives and simplification,
and a small feed-forward network trained by gradient descent on a symbolic
cost such as a PDE residual.
"""

from .expression_tree import (
  Expression, Node, VariableNode, ConstantNode, SumNode, ProductNode,
  PowerNode, LogNode, AbsoluteValueNode, ConditionalNode, TanhNode,
  IdentityNode, negate, inverse, piecewise,
  DomainError, Comparison,
  ExpressionSimplifier, ExpressionValidator,
  to_sympy_expression, from_sympy_expression, latex_representation
)
from .network import ComputationNode, Network, laplace
from .logging_system import (
  LogLevel, TrainingLogger, get_logger, set_log_level, configure_logging
)

__version__ = "0.1.0"
__all__ = [
  "Expression", "Node", "VariableNode", "ConstantNode", "SumNode", "ProductNode",
  "PowerNode", "LogNode", "AbsoluteValueNode", "ConditionalNode", "TanhNode",
  "IdentityNode", "negate", "inverse", "piecewise",
  "DomainError", "Comparison",
  "ExpressionSimplifier", "ExpressionValidator",
  "to_sympy_expression", "from_sympy_expression", "latex_representation",
  "ComputationNode", "Network", "laplace",
  "LogLevel", "TrainingLogger", "get_logger", "set_log_level", "configure_logging"
]
