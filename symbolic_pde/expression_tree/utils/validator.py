import numpy as np
from typing import Optional, Set
from ..core.node import Node, ConstantNode, VariableNode, ConditionalNode
from ..core.predicates import Comparison
from .tree_utils import get_all_nodes


class ExpressionValidator:

  @staticmethod
  def is_valid_expression(node: Node, n_vars: Optional[int] = None) -> bool:
    if not ExpressionValidator._is_structurally_valid(node):
      return False
    if n_vars is not None:
      return all(index < n_vars for index in ExpressionValidator.read_variables(node))
    return True

  @staticmethod
  def _is_structurally_valid(node: Node) -> bool:
    for current in get_all_nodes(node):
      if isinstance(current, ConstantNode) and np.isnan(current.value):
        return False
    return True

  @staticmethod
  def read_variables(node: Node) -> Set[int]:
    """Indices read by the tree, including those read by comparison predicates"""
    indices: Set[int] = set()
    for current in get_all_nodes(node):
      if isinstance(current, VariableNode):
        indices.add(current.index)
      elif isinstance(current, ConditionalNode) and isinstance(current.predicate, Comparison):
        indices |= ExpressionValidator.read_variables(current.predicate.expression)
    return indices

  @staticmethod
  def check_variable_bounds(node: Node, n_vars: int):
    """Raise IndexError if the tree reads a variable outside ``range(n_vars)``"""
    out_of_range = sorted(index for index in ExpressionValidator.read_variables(node)
                          if index >= n_vars)
    if out_of_range:
      names = ', '.join(VariableNode(index).render() for index in out_of_range)
      raise IndexError(f"expression reads {names} but only {n_vars} variables are declared")
