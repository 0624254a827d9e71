import operator
from typing import Callable, Dict, TYPE_CHECKING

import sympy as sp

if TYPE_CHECKING:
  from .node import Node


COMPARISON_OPS: Dict[str, Callable[[float, float], bool]] = {
  '>=': operator.ge,
  '>': operator.gt,
  '<=': operator.le,
  '<': operator.lt,
  '==': operator.eq,
  '!=': operator.ne,
}

SYMPY_RELATIONS = {
  '>=': sp.Ge,
  '>': sp.Gt,
  '<=': sp.Le,
  '<': sp.Lt,
  '==': sp.Eq,
  '!=': sp.Ne,
}


class Comparison:
  """Predicate comparing the value of an expression against a fixed threshold.

  The expression is evaluated at whatever point the predicate is called with,
  so a conditional built from it selects its branch at use time rather than at
  construction or differentiation time.
  """

  __slots__ = ('expression', 'operator', 'threshold')

  def __init__(self, expression: 'Node', operator: str = '>=', threshold: float = 0.0):
    from .node import Node
    if not isinstance(expression, Node):
      raise TypeError(f"comparison needs an expression node, got {type(expression).__name__}")
    if operator not in COMPARISON_OPS:
      raise ValueError(f"unknown comparison operator: {operator}")
    self.expression = expression
    self.operator = operator
    self.threshold = float(threshold)

  def __call__(self, x) -> bool:
    return bool(COMPARISON_OPS[self.operator](self.expression.evaluate(x), self.threshold))

  def __str__(self) -> str:
    return f"{self.expression.render()} {self.operator} {self.threshold:g}"

  def to_sympy(self):
    return SYMPY_RELATIONS[self.operator](self.expression.to_sympy(), self.threshold)


def describe_predicate(predicate: Callable) -> str:
  if isinstance(predicate, Comparison):
    return str(predicate)
  return getattr(predicate, '__name__', type(predicate).__name__)
