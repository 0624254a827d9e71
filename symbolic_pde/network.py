import numpy as np
import sympy as sp
from tqdm import tqdm
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union
from .expression_tree.core.node import (
  Node, VariableNode, SumNode, ProductNode, TanhNode, IdentityNode, variable_index
)
from .expression_tree.core.operators import DomainError
from .expression_tree.utils.simplifier import ExpressionSimplifier
from .expression_tree.utils.validator import ExpressionValidator
from .logging_system import LogLevel, TrainingLogger, get_logger

ACTIVATIONS = {
  'tanh': TanhNode,
  'identity': IdentityNode,
}


class ComputationNode(Node):
  """Weighted sum of inputs fed through an activation.

  The node is itself an expression: its concrete tree
  ``activation(sum(w_i * input_i))`` is rebuilt on every evaluation,
  differentiation or rendering, so inputs pulled in later are always seen.
  """

  def __init__(self, network: 'Network', activation: str = 'tanh'):
    super().__init__()
    if activation not in ACTIVATIONS:
      raise ValueError(f"unknown activation '{activation}', expected one of {sorted(ACTIVATIONS)}")
    self.network = network
    self.inputs: List[Node] = []
    self.weights: List[VariableNode] = []
    self.activation = activation

  def add_input(self, source: Node, weight: VariableNode) -> 'ComputationNode':
    if not isinstance(source, Node):
      raise TypeError(f"node input must be an expression node, got {type(source).__name__}")
    self.inputs.append(source)
    self.weights.append(weight)
    return self

  def pull_from(self, *sources: Node) -> 'ComputationNode':
    """Connect each source through a freshly declared weight"""
    for source in sources:
      if not isinstance(source, Node):
        raise TypeError(f"node input must be an expression node, got {type(source).__name__}")
      self.add_input(source, self.network.declare_weight())
    return self

  def build_expression(self) -> Node:
    weighted = SumNode([ProductNode([w, source]) for w, source in zip(self.weights, self.inputs)])
    return ACTIVATIONS[self.activation](weighted)

  def materialize(self) -> Node:
    return self.build_expression()

  def evaluate(self, x) -> float:
    return self.build_expression().evaluate(x)

  def partial(self, index: int) -> Node:
    return self.build_expression().partial(index)

  def render(self) -> str:
    return self.build_expression().render()

  def to_sympy(self) -> sp.Expr:
    return self.build_expression().to_sympy()

  def children(self) -> Tuple[Node, ...]:
    return self.build_expression().children()

  def is_growable(self) -> bool:
    return True

  def size(self) -> int:
    # not cached: the node grows as inputs are pulled in
    return self.build_expression().size()


class Network:
  """Owns the variable index space, the cost expression and the state vector.

  Inputs and weights share one index space; indices are handed out in
  increasing order and never reused. ``state`` holds the current value of
  every variable, indexed the same way the expressions read it.
  """

  def __init__(self, logger: Optional[TrainingLogger] = None):
    self._next_index = 0
    self.inputs: List[VariableNode] = []
    self.weights: List[VariableNode] = []
    self.outputs: List[ComputationNode] = []
    self.cost: Optional[Node] = None
    self.state: Optional[np.ndarray] = None
    self.logger = logger

  @property
  def n_vars(self) -> int:
    return self._next_index

  def _next_variable(self) -> VariableNode:
    if self.state is not None:
      raise RuntimeError("cannot declare variables once the state vector has been allocated")
    variable = VariableNode(self._next_index)
    self._next_index += 1
    return variable

  def declare_input(self) -> VariableNode:
    variable = self._next_variable()
    self.inputs.append(variable)
    return variable

  def declare_weight(self) -> VariableNode:
    variable = self._next_variable()
    self.weights.append(variable)
    return variable

  def new_node(self, activation: str = 'tanh') -> ComputationNode:
    return ComputationNode(self, activation)

  def new_input(self) -> Tuple[ComputationNode, VariableNode]:
    """A node reading one fresh input variable through one fresh weight"""
    variable = self.declare_input()
    node = self.new_node()
    node.add_input(variable, self.declare_weight())
    return node, variable

  def new_output(self, activation: str = 'identity') -> ComputationNode:
    node = ComputationNode(self, activation)
    self.outputs.append(node)
    return node

  def allocate_state(self) -> np.ndarray:
    """Create the state vector on first use: weights start at 1, everything else at 0"""
    if self.state is None:
      self.state = np.zeros(self.n_vars, dtype=np.float64)
      self.state[[w.index for w in self.weights]] = 1.0
    return self.state

  def weight_values(self) -> Dict[int, float]:
    state = self.allocate_state()
    return {w.index: float(state[w.index]) for w in self.weights}

  def _check_point(self, point: Sequence[float]) -> np.ndarray:
    values = np.asarray(point, dtype=np.float64).ravel()
    if values.shape[0] != len(self.inputs):
      raise ValueError(f"training point has {values.shape[0]} values but the network declares "
                       f"{len(self.inputs)} inputs")
    return values

  def set_point(self, point: Sequence[float]):
    """Write input values, in declaration order, into the state vector"""
    values = self._check_point(point)
    state = self.allocate_state()
    state[[v.index for v in self.inputs]] = values

  def evaluate(self, expression: Node, point: Optional[Sequence[float]] = None) -> float:
    if point is not None:
      self.set_point(point)
    return expression.evaluate(self.allocate_state())

  def train(self, learning_rate: float, points: Iterable[Sequence[float]],
            show_progress: bool = False) -> List[float]:
    """Gradient descent on the cost, one synchronous update per training point.

    Returns the cost at each point, measured before that point's update.
    """
    points = [self._check_point(point) for point in points]
    if not points:
      return []
    if self.cost is None:
      raise ValueError("network cost expression has not been assigned")
    ExpressionValidator.check_variable_bounds(self.cost, self.n_vars)

    logger = self.logger if self.logger is not None else get_logger()
    state = self.allocate_state()
    input_indices = [v.index for v in self.inputs]
    weight_indices = [w.index for w in self.weights]

    # one simplified gradient per weight, built on first use and kept for this call
    gradients: Dict[int, Node] = {}
    costs: List[float] = []
    cost_expression = ExpressionSimplifier.simplify_expression(self.cost)
    trace_weights = logger.is_enabled_for(LogLevel.VERBOSE)

    logger.milestone(f"Training {len(weight_indices)} weights on {len(points)} points "
                     f"(learning rate {learning_rate})")
    for point_index, point in enumerate(tqdm(points, desc='training', disable=not show_progress)):
      state[input_indices] = point
      try:
        cost = cost_expression.evaluate(state)
      except DomainError as exc:
        # only the gradients drive the update; the cost is reported as undefined
        logger.warning(f"Cost undefined at point {point_index}: {exc}")
        cost = float('nan')
      costs.append(cost)
      if trace_weights:
        logger.training_step(point_index, cost, self.weight_values())

      deltas = np.empty(len(weight_indices), dtype=np.float64)
      for i, index in enumerate(weight_indices):
        gradient = gradients.get(index)
        if gradient is None:
          gradient = ExpressionSimplifier.simplify_expression(self.cost.partial(index))
          gradients[index] = gradient
          logger.detail(f"Gradient for X{index}: {gradient.size()} nodes")
        deltas[i] = -learning_rate * gradient.evaluate(state)
      state[weight_indices] += deltas

    logger.milestone(f"Training finished, last cost {costs[-1]:.6f}")
    return costs


def laplace(expression: Node, *variables: Union[VariableNode, int]) -> SumNode:
  """Sum of unmixed second partials over ``variables``"""
  indices = [variable_index(v) for v in variables]
  return SumNode([expression.partial(i).partial(i) for i in indices])
