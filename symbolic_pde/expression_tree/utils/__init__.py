"""Utilities for expression trees."""

from .simplifier import ExpressionSimplifier
from .sympy_utils import to_sympy_expression, from_sympy_expression, latex_representation
from .tree_utils import (
    get_all_nodes, calculate_tree_depth, count_node_types,
    get_variables, get_constants
)
from .validator import ExpressionValidator

__all__ = [
    'ExpressionSimplifier',
    'to_sympy_expression', 'from_sympy_expression', 'latex_representation',
    'get_all_nodes', 'calculate_tree_depth', 'count_node_types',
    'get_variables', 'get_constants',
    'ExpressionValidator'
]
