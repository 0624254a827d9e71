"""Expression Tree Module

Symbolic expression trees: evaluation, differentiation and simplification.
"""

from .expression import Expression
from .core.node import (
    Node,
    VariableNode,
    ConstantNode,
    SumNode,
    ProductNode,
    PowerNode,
    LogNode,
    AbsoluteValueNode,
    ConditionalNode,
    TanhNode,
    IdentityNode,
    negate,
    inverse,
    piecewise
)
from .core.operators import DomainError
from .core.predicates import Comparison
from .utils import (
    ExpressionSimplifier, ExpressionValidator,
    to_sympy_expression, from_sympy_expression, latex_representation
)

__all__ = [
    "Expression",
    "Node", "VariableNode", "ConstantNode", "SumNode", "ProductNode", "PowerNode",
    "LogNode", "AbsoluteValueNode", "ConditionalNode", "TanhNode", "IdentityNode",
    "negate", "inverse", "piecewise",
    "DomainError", "Comparison",
    "ExpressionSimplifier", "ExpressionValidator",
    "to_sympy_expression", "from_sympy_expression", "latex_representation"
]
