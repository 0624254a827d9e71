import numpy as np
import sympy as sp
from typing import Optional, Set
from .core.node import Node, variable_index
from .utils.simplifier import ExpressionSimplifier
from .utils.sympy_utils import to_sympy_expression, from_sympy_expression, latex_representation
from .utils.tree_utils import calculate_tree_depth, get_variables


class Expression:
  """Expression class wrapping a root node with a cached rendering"""

  __slots__ = ('root', '_string_cache')

  def __init__(self, root: Node):
    if not isinstance(root, Node):
      raise TypeError(f"expression root must be a node, got {type(root).__name__}")
    self.root = root
    self._string_cache: Optional[str] = None

  def value(self, point) -> float:
    return self.root.evaluate(point)

  def evaluate(self, X: np.ndarray) -> np.ndarray:
    """Value at every row of a 2-D array of points"""
    X = np.atleast_2d(np.asarray(X, dtype=np.float64))
    return np.array([self.root.evaluate(row) for row in X], dtype=np.float64)

  def partial(self, variable) -> 'Expression':
    return Expression(self.root.partial(variable_index(variable)))

  def simplify(self) -> 'Expression':
    return Expression(ExpressionSimplifier.simplify_expression(self.root))

  def to_string(self) -> str:
    if self._string_cache is not None:
      return self._string_cache
    text = self.root.to_string()
    if not self.root.is_growable():
      self._string_cache = text
    return text

  def size(self) -> int:
    """Node count"""
    return self.root.size()

  def depth(self) -> int:
    return calculate_tree_depth(self.root)

  def variables(self) -> Set[int]:
    return get_variables(self.root)

  def to_sympy(self) -> sp.Expr:
    return to_sympy_expression(self.root)

  def to_latex(self) -> str:
    return latex_representation(self.root)

  @classmethod
  def from_sympy(cls, sympy_expr: sp.Expr) -> 'Expression':
    return cls(from_sympy_expression(sympy_expr))

  @classmethod
  def from_string(cls, expr_str: str) -> 'Expression':
    """Parse text such as ``"x0**2*x1 + tanh(x1)"``; ``^`` is accepted for powers"""
    sympy_expr = sp.sympify(expr_str.replace('^', '**'))
    return cls.from_sympy(sympy_expr)

  def __str__(self) -> str:
    return self.to_string()

  def __repr__(self) -> str:
    return f"Expression({self.root.render()})"
