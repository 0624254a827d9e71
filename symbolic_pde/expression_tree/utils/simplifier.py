import numpy as np
from typing import Dict, List, Tuple
from ..core.node import (
  Node, VariableNode, ConstantNode, SumNode, ProductNode, PowerNode, LogNode,
  AbsoluteValueNode, ConditionalNode, TanhNode, IdentityNode
)
from ..core.operators import DomainError, evaluate_power


def _is_constant(node: Node, value: float) -> bool:
  return isinstance(node, ConstantNode) and node.value == value


class ExpressionSimplifier:
  """Value-preserving structural reduction of expression trees.

  Children are simplified first. The result never changes which branch a
  conditional selects, since predicates are carried over untouched.
  """

  @staticmethod
  def simplify_expression(node: Node) -> Node:
    node = node.materialize()

    if isinstance(node, (VariableNode, ConstantNode)):
      return node
    if isinstance(node, SumNode):
      return ExpressionSimplifier._simplify_sum(node)
    if isinstance(node, ProductNode):
      return ExpressionSimplifier._simplify_product(node)
    if isinstance(node, PowerNode):
      return ExpressionSimplifier._simplify_power(node)
    if isinstance(node, LogNode):
      return LogNode(ExpressionSimplifier.simplify_expression(node.argument))
    if isinstance(node, AbsoluteValueNode):
      return AbsoluteValueNode(ExpressionSimplifier.simplify_expression(node.argument))
    if isinstance(node, TanhNode):
      return TanhNode(ExpressionSimplifier.simplify_expression(node.argument))
    if isinstance(node, IdentityNode):
      return ExpressionSimplifier.simplify_expression(node.argument)
    if isinstance(node, ConditionalNode):
      return ConditionalNode(
        node.predicate,
        ExpressionSimplifier.simplify_expression(node.if_true),
        ExpressionSimplifier.simplify_expression(node.if_false),
      )
    raise TypeError(f"cannot simplify node of type {type(node).__name__}")

  @staticmethod
  def _simplify_sum(node: SumNode) -> Node:
    terms: List[Node] = []
    constant_total = 0.0
    for term in node.terms:
      simple = ExpressionSimplifier.simplify_expression(term)
      if isinstance(simple, ConstantNode):
        constant_total += simple.value
        continue
      terms.append(simple)

    if constant_total != 0:
      terms.append(ConstantNode(constant_total))

    if not terms:
      return ConstantNode(0.0)
    if len(terms) == 1:
      return terms[0]
    return SumNode(terms)

  @staticmethod
  def _simplify_product(node: ProductNode) -> Node:
    flattened: List[Node] = []
    for factor in node.factors:
      simple = ExpressionSimplifier.simplify_expression(factor)
      if _is_constant(simple, 0.0):
        return ConstantNode(0.0)  # x * 0 = 0, whatever x is
      if _is_constant(simple, 1.0):
        continue
      if isinstance(simple, ProductNode):
        flattened.extend(simple.factors)
      else:
        flattened.append(simple)

    # v^a * v^b -> v^(a+b) for a shared variable base; a bare v counts as v^1
    powers: Dict[int, Tuple[VariableNode, List[Node]]] = {}
    others: List[Node] = []
    constant_total = 1.0
    for factor in flattened:
      if isinstance(factor, ConstantNode):
        constant_total *= factor.value
      elif isinstance(factor, VariableNode):
        powers.setdefault(factor.index, (factor, []))[1].append(ConstantNode(1.0))
      elif isinstance(factor, PowerNode) and isinstance(factor.base, VariableNode):
        powers.setdefault(factor.base.index, (factor.base, []))[1].append(factor.exponent)
      else:
        others.append(factor)

    merged: List[Node] = []
    for base, exponents in powers.values():
      if len(exponents) == 1:
        exponent = exponents[0]
      else:
        exponent = ExpressionSimplifier.simplify_expression(SumNode(exponents))
      combined = ExpressionSimplifier._simplify_power(PowerNode(base, exponent))
      if isinstance(combined, ConstantNode):
        constant_total *= combined.value
      else:
        merged.append(combined)

    if constant_total == 0:
      return ConstantNode(0.0)

    simpler: List[Node] = []
    if constant_total != 1:
      simpler.append(ConstantNode(constant_total))
    simpler.extend(others)
    simpler.extend(merged)

    if not simpler:
      return ConstantNode(1.0)
    if len(simpler) == 1:
      return simpler[0]
    return ProductNode(simpler)

  @staticmethod
  def _simplify_power(node: PowerNode) -> Node:
    base = ExpressionSimplifier.simplify_expression(node.base)
    exponent = ExpressionSimplifier.simplify_expression(node.exponent)

    if _is_constant(exponent, 0.0):
      return ConstantNode(1.0)
    if _is_constant(exponent, 1.0):
      return base

    if isinstance(base, ConstantNode) and isinstance(exponent, ConstantNode):
      try:
        folded = evaluate_power(base.value, exponent.value)
      except DomainError:
        return PowerNode(base, exponent)
      if np.isfinite(folded):
        return ConstantNode(folded)

    return PowerNode(base, exponent)
