"""Core expression tree components."""

from .node import (
    Node, VariableNode, ConstantNode, SumNode, ProductNode, PowerNode, LogNode,
    AbsoluteValueNode, ConditionalNode, TanhNode, IdentityNode,
    negate, inverse, piecewise, variable_index
)
from .operators import (
    DomainError,
    evaluate_power, evaluate_log, evaluate_tanh, evaluate_absolute
)
from .predicates import Comparison, COMPARISON_OPS, describe_predicate

__all__ = [
    'Node', 'VariableNode', 'ConstantNode', 'SumNode', 'ProductNode', 'PowerNode', 'LogNode',
    'AbsoluteValueNode', 'ConditionalNode', 'TanhNode', 'IdentityNode',
    'negate', 'inverse', 'piecewise', 'variable_index',
    'DomainError',
    'evaluate_power', 'evaluate_log', 'evaluate_tanh', 'evaluate_absolute',
    'Comparison', 'COMPARISON_OPS', 'describe_predicate'
]
