import numbers
import sympy as sp
from abc import ABC, abstractmethod
from typing import Callable, Optional, Sequence, Tuple, Union
from .operators import (
  evaluate_power, evaluate_log, evaluate_tanh, evaluate_absolute
)
from .predicates import Comparison, describe_predicate


def variable_index(variable: Union['VariableNode', int]) -> int:
  """Accept either a variable node or a raw index"""
  if isinstance(variable, VariableNode):
    return variable.index
  if isinstance(variable, numbers.Integral) and not isinstance(variable, bool):
    return int(variable)
  raise TypeError(f"expected a VariableNode or integer index, got {type(variable).__name__}")


def _check_child(child, owner: str) -> 'Node':
  if not isinstance(child, Node):
    raise TypeError(f"{owner} child must be an expression node, got {type(child).__name__}")
  return child


class Node(ABC):
  """Immutable symbolic scalar function of an indexed input vector"""

  __slots__ = ('_size_cache', '_growable_cache')

  def __init__(self):
    self._size_cache: Optional[int] = None
    self._growable_cache: Optional[bool] = None

  @abstractmethod
  def evaluate(self, x) -> float:
    pass

  @abstractmethod
  def partial(self, index: int) -> 'Node':
    """Symbolic partial derivative with respect to variable ``index``"""
    pass

  @abstractmethod
  def render(self) -> str:
    """Text of the tree exactly as built"""
    pass

  @abstractmethod
  def to_sympy(self) -> sp.Expr:
    pass

  @abstractmethod
  def children(self) -> Tuple['Node', ...]:
    pass

  def materialize(self) -> 'Node':
    return self

  def to_string(self) -> str:
    """Text of the simplified tree"""
    from ..utils.simplifier import ExpressionSimplifier
    return ExpressionSimplifier.simplify_expression(self).render()

  def is_growable(self) -> bool:
    """True if the tree contains a node whose inputs can still be extended"""
    if self._growable_cache is None:
      self._growable_cache = any(child.is_growable() for child in self.children())
    return self._growable_cache

  def size(self) -> int:
    if self._size_cache is not None:
      return self._size_cache
    size = self._compute_size()
    if not self.is_growable():
      self._size_cache = size
    return size

  def _compute_size(self) -> int:
    return 1 + sum(child.size() for child in self.children())

  def __str__(self) -> str:
    return self.to_string()

  def __repr__(self) -> str:
    return f"{type(self).__name__}({self.render()})"


class VariableNode(Node):
  __slots__ = ('index',)

  def __init__(self, index: int):
    super().__init__()
    if isinstance(index, bool) or not isinstance(index, numbers.Integral):
      raise TypeError(f"variable index must be an integer, got {type(index).__name__}")
    if index < 0:
      raise IndexError(f"variable index must be non-negative, got {index}")
    self.index = int(index)

  def evaluate(self, x) -> float:
    return float(x[self.index])

  def partial(self, index: int) -> Node:
    if variable_index(index) == self.index:
      return ConstantNode(1.0)
    return ConstantNode(0.0)

  def render(self) -> str:
    return f"X{self.index}"

  def to_sympy(self) -> sp.Expr:
    return sp.Symbol(f'x{self.index}', real=True)

  def children(self) -> Tuple[Node, ...]:
    return ()


class ConstantNode(Node):
  __slots__ = ('value',)

  def __init__(self, value: float):
    super().__init__()
    self.value = float(value)

  def evaluate(self, x) -> float:
    return self.value

  def partial(self, index: int) -> Node:
    return ConstantNode(0.0)

  def render(self) -> str:
    return f"{self.value:g}"

  def to_sympy(self) -> sp.Expr:
    if self.value.is_integer():
      return sp.Integer(int(self.value))
    return sp.Float(self.value)

  def children(self) -> Tuple[Node, ...]:
    return ()


class SumNode(Node):
  """Addition over zero or more terms; the empty sum is 0"""

  __slots__ = ('terms',)

  def __init__(self, terms: Sequence[Node] = ()):
    super().__init__()
    self.terms: Tuple[Node, ...] = tuple(_check_child(t, 'Sum') for t in terms)

  def evaluate(self, x) -> float:
    total = 0.0
    for term in self.terms:
      total += term.evaluate(x)
    return total

  def partial(self, index: int) -> Node:
    return SumNode([term.partial(index) for term in self.terms])

  def render(self) -> str:
    if not self.terms:
      return "0"
    if len(self.terms) == 1:
      return self.terms[0].render()
    return "(" + " + ".join(term.render() for term in self.terms) + ")"

  def to_sympy(self) -> sp.Expr:
    return sp.Add(*[term.to_sympy() for term in self.terms])

  def children(self) -> Tuple[Node, ...]:
    return self.terms


class ProductNode(Node):
  """Multiplication over zero or more factors; the empty product is 1"""

  __slots__ = ('factors',)

  def __init__(self, factors: Sequence[Node] = ()):
    super().__init__()
    self.factors: Tuple[Node, ...] = tuple(_check_child(f, 'Product') for f in factors)

  def evaluate(self, x) -> float:
    total = 1.0
    for factor in self.factors:
      value = factor.evaluate(x)
      # value-time shortcut only; the skipped factors still matter to partial()
      if value == 0:
        return 0.0
      total *= value
    return total

  def partial(self, index: int) -> Node:
    if not self.factors:
      return ConstantNode(0.0)
    head = self.factors[0]
    tail = ProductNode(self.factors[1:])
    return SumNode([
      ProductNode([head.partial(index), tail]),
      ProductNode([head, tail.partial(index)]),
    ])

  def render(self) -> str:
    if not self.factors:
      return "1"
    if len(self.factors) == 1:
      return self.factors[0].render()
    return "(" + " * ".join(factor.render() for factor in self.factors) + ")"

  def to_sympy(self) -> sp.Expr:
    return sp.Mul(*[factor.to_sympy() for factor in self.factors])

  def children(self) -> Tuple[Node, ...]:
    return self.factors


class PowerNode(Node):
  __slots__ = ('base', 'exponent')

  def __init__(self, base: Node, exponent: Node):
    super().__init__()
    self.base = _check_child(base, 'Power')
    self.exponent = _check_child(exponent, 'Power')

  def evaluate(self, x) -> float:
    return evaluate_power(self.base.evaluate(x), self.exponent.evaluate(x))

  def partial(self, index: int) -> Node:
    # d(b^e) = b^e * (e' * ln|b| + b' * e / b), valid wherever b != 0
    return ProductNode([
      self,
      SumNode([
        ProductNode([self.exponent.partial(index), LogNode(AbsoluteValueNode(self.base))]),
        ProductNode([self.base.partial(index), inverse(self.base), self.exponent]),
      ]),
    ])

  def render(self) -> str:
    return f"({self.base.render()}^{self.exponent.render()})"

  def to_sympy(self) -> sp.Expr:
    return sp.Pow(self.base.to_sympy(), self.exponent.to_sympy())

  def children(self) -> Tuple[Node, ...]:
    return (self.base, self.exponent)


class LogNode(Node):
  """Natural logarithm"""

  __slots__ = ('argument',)

  def __init__(self, argument: Node):
    super().__init__()
    self.argument = _check_child(argument, 'Log')

  def evaluate(self, x) -> float:
    return evaluate_log(self.argument.evaluate(x))

  def partial(self, index: int) -> Node:
    return ProductNode([self.argument.partial(index), inverse(self.argument)])

  def render(self) -> str:
    return f"ln({self.argument.render()})"

  def to_sympy(self) -> sp.Expr:
    return sp.log(self.argument.to_sympy())

  def children(self) -> Tuple[Node, ...]:
    return (self.argument,)


class ConditionalNode(Node):
  """Selects a branch by calling ``predicate`` on the evaluation point.

  Only the selected branch is evaluated. The derivative keeps the predicate
  and differentiates each branch separately, which is a sub-gradient away
  from the predicate's boundary; no boundary term is produced.
  """

  __slots__ = ('predicate', 'if_true', 'if_false')

  def __init__(self, predicate: Callable, if_true: Node, if_false: Node):
    super().__init__()
    if not callable(predicate):
      raise TypeError(f"conditional predicate must be callable, got {type(predicate).__name__}")
    self.predicate = predicate
    self.if_true = _check_child(if_true, 'Conditional')
    self.if_false = _check_child(if_false, 'Conditional')

  def evaluate(self, x) -> float:
    if self.predicate(x):
      return self.if_true.evaluate(x)
    return self.if_false.evaluate(x)

  def partial(self, index: int) -> Node:
    return ConditionalNode(self.predicate, self.if_true.partial(index), self.if_false.partial(index))

  def render(self) -> str:
    return f"({describe_predicate(self.predicate)} ? {self.if_true.render()} : {self.if_false.render()})"

  def to_sympy(self) -> sp.Expr:
    if not isinstance(self.predicate, Comparison):
      raise TypeError(f"cannot convert opaque predicate {describe_predicate(self.predicate)} to sympy")
    return sp.Piecewise(
      (self.if_true.to_sympy(), self.predicate.to_sympy()),
      (self.if_false.to_sympy(), True),
    )

  def children(self) -> Tuple[Node, ...]:
    return (self.if_true, self.if_false)


class AbsoluteValueNode(Node):
  """|f|, differentiated as the conditional (f >= 0 ? f' : (-f)')"""

  __slots__ = ('argument',)

  def __init__(self, argument: Node):
    super().__init__()
    self.argument = _check_child(argument, 'AbsoluteValue')

  def evaluate(self, x) -> float:
    return evaluate_absolute(self.argument.evaluate(x))

  def as_conditional(self) -> ConditionalNode:
    return ConditionalNode(Comparison(self.argument, '>=', 0.0), self.argument, negate(self.argument))

  def partial(self, index: int) -> Node:
    return self.as_conditional().partial(index)

  def render(self) -> str:
    return f"|{self.argument.render()}|"

  def to_sympy(self) -> sp.Expr:
    return sp.Abs(self.argument.to_sympy())

  def children(self) -> Tuple[Node, ...]:
    return (self.argument,)


class TanhNode(Node):
  __slots__ = ('argument',)

  def __init__(self, argument: Node):
    super().__init__()
    self.argument = _check_child(argument, 'Tanh')

  def evaluate(self, x) -> float:
    return evaluate_tanh(self.argument.evaluate(x))

  def partial(self, index: int) -> Node:
    return ProductNode([
      self.argument.partial(index),
      SumNode([ConstantNode(1.0), negate(PowerNode(TanhNode(self.argument), ConstantNode(2.0)))]),
    ])

  def render(self) -> str:
    return f"tanh({self.argument.render()})"

  def to_sympy(self) -> sp.Expr:
    return sp.tanh(self.argument.to_sympy())

  def children(self) -> Tuple[Node, ...]:
    return (self.argument,)


class IdentityNode(Node):
  """Transparent pass-through, used as a linear output activation"""

  __slots__ = ('argument',)

  def __init__(self, argument: Node):
    super().__init__()
    self.argument = _check_child(argument, 'Identity')

  def evaluate(self, x) -> float:
    return self.argument.evaluate(x)

  def partial(self, index: int) -> Node:
    return self.argument.partial(index)

  def render(self) -> str:
    return self.argument.render()

  def to_sympy(self) -> sp.Expr:
    return self.argument.to_sympy()

  def children(self) -> Tuple[Node, ...]:
    return (self.argument,)


def negate(node: Node) -> ProductNode:
  return ProductNode([ConstantNode(-1.0), node])


def inverse(node: Node) -> PowerNode:
  return PowerNode(node, ConstantNode(-1.0))


def piecewise(*cases: Tuple[Callable, Node], otherwise: Optional[Node] = None) -> Node:
  """Chain of conditionals: the first case whose predicate holds wins.

  Falls through to ``otherwise`` (0 when omitted).
  """
  result = otherwise if otherwise is not None else ConstantNode(0.0)
  for predicate, branch in reversed(cases):
    result = ConditionalNode(predicate, branch, result)
  return result
