import re
import sympy as sp
from ..core.node import (
  Node, VariableNode, ConstantNode, SumNode, ProductNode, PowerNode, LogNode,
  AbsoluteValueNode, TanhNode
)
from .simplifier import ExpressionSimplifier

_VARIABLE_NAME = re.compile(r'^[xX]_?(\d+)$')


def to_sympy_expression(node: Node, simplify: bool = False) -> sp.Expr:
  """Convert an expression tree to sympy; variables become real symbols x0, x1, ..."""
  if simplify:
    node = ExpressionSimplifier.simplify_expression(node)
  return node.materialize().to_sympy()


def from_sympy_expression(expr: sp.Expr) -> Node:
  """Convert a sympy expression built from x{i} symbols back to nodes"""
  if expr.is_Symbol:
    match = _VARIABLE_NAME.match(expr.name)
    if match is None:
      raise ValueError(f"symbol {expr.name} does not name a variable (expected x<index>)")
    return VariableNode(int(match.group(1)))

  if expr.is_Number:
    return ConstantNode(float(expr))

  if isinstance(expr, sp.Add):
    return SumNode([from_sympy_expression(arg) for arg in expr.args])
  if isinstance(expr, sp.Mul):
    return ProductNode([from_sympy_expression(arg) for arg in expr.args])
  if isinstance(expr, sp.Pow):
    return PowerNode(from_sympy_expression(expr.base), from_sympy_expression(expr.exp))
  if isinstance(expr, sp.exp):
    return PowerNode(ConstantNode(float(sp.E)), from_sympy_expression(expr.args[0]))
  if isinstance(expr, sp.log):
    return LogNode(from_sympy_expression(expr.args[0]))
  if isinstance(expr, sp.Abs):
    return AbsoluteValueNode(from_sympy_expression(expr.args[0]))
  if isinstance(expr, sp.tanh):
    return TanhNode(from_sympy_expression(expr.args[0]))

  if expr.is_number:
    return ConstantNode(float(expr))

  raise ValueError(f"unsupported sympy construct: {type(expr).__name__}")


def latex_representation(node: Node) -> str:
  """LaTeX of the simplified tree"""
  return sp.latex(to_sympy_expression(node, simplify=True))
