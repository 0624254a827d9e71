import sys
import os
# Add the project root to Python path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import argparse
import numpy as np
from symbolic_pde import (
  Network, ConstantNode, SumNode, ProductNode, PowerNode, Comparison,
  negate, piecewise, laplace, LogLevel, configure_logging, get_logger
)


def fit_constant():
  """Fit u(x) = 3 with a linear output node; cost is (u - 3)^2"""
  net = Network()
  in1, x = net.new_input()
  # dummy input held at 1 so the output can be nonzero when x is 0
  bias_in, bias_var = net.new_input()
  u = net.new_output().pull_from(in1, bias_in)

  net.cost = PowerNode(SumNode([u, ConstantNode(-3)]), ConstantNode(2))

  training_points = [[xv, 1.0] for xv in np.arange(0.0, 5.0, 0.1)]
  costs = net.train(0.98, training_points, show_progress=True)
  get_logger().result_summary({"final_cost": costs[-1], "points": len(training_points)})

  print("Approximation Eqn:", u)
  print("Solution (x u):")
  for xv in np.arange(0.0, 5.0, 0.5):
    print(f"{xv:.1f}\t{net.evaluate(u, [xv, 1.0]):.6f}")


def heat_1d():
  """-k u'' = S on (0, 1) with u(0) = 1 and u(1) = 7 as penalty terms"""
  net = Network()
  in1, x = net.new_input()
  bias_in, bias_var = net.new_input()
  u = net.new_output().pull_from(in1, bias_in)
  print("networkFunc:", u)

  penalty = ConstantNode(1.0)
  bcs = piecewise(
    (Comparison(x, '==', 0.0), SumNode([ConstantNode(1), negate(u)])),
    (Comparison(x, '==', 1.0), SumNode([ConstantNode(7), negate(u)])),
  )

  k = ConstantNode(1)
  heat_source = ConstantNode(0)
  residual = SumNode([ProductNode([k, laplace(u, x)]), heat_source])

  net.cost = SumNode([
    PowerNode(residual, ConstantNode(2)),
    PowerNode(ProductNode([penalty, bcs]), ConstantNode(2)),
  ])
  print("costfunc:", net.cost)

  training_points = [[xv, 1.0] for xv in np.arange(0.01, 1.0, 0.01)]
  training_points += [[0.0, 1.0], [1.0, 1.0]]
  costs = net.train(0.9, training_points, show_progress=True)
  get_logger().result_summary({"final_cost": costs[-1], "points": len(training_points)})

  print("Approximation Eqn:", u)
  print("Solution (x u):")
  for xv in np.arange(0.0, 1.1, 0.1):
    print(f"{xv:.1f}\t{net.evaluate(u, [xv, 1.0]):.6f}")


def poisson_2d():
  """2 * laplace(u) = 10 on [0, 5)^2"""
  net = Network()
  in1, x = net.new_input()
  in2, y = net.new_input()
  u = net.new_output().pull_from(in1, in2)

  forcing = ConstantNode(10)
  diffusion = ConstantNode(2)
  net.cost = SumNode([ProductNode([laplace(u, x, y), diffusion]), negate(forcing)])

  grid = np.arange(0.0, 5.0, 0.1)
  training_points = [[xv, yv] for xv in grid for yv in grid]
  costs = net.train(0.98, training_points, show_progress=True)
  get_logger().result_summary({"final_cost": costs[-1], "points": len(training_points)})

  print("Approximation Eqn:", u)
  print("Solution (x y u):")
  for xv in grid[::10]:
    for yv in grid[::10]:
      print(f"{xv:.1f} {yv:.1f} {net.evaluate(u, [xv, yv]):.6f}")


PROBLEMS = {
  'constant': fit_constant,
  'heat1d': heat_1d,
  'poisson2d': poisson_2d,
}

if __name__ == "__main__":
  parser = argparse.ArgumentParser(description="Train symbolic networks on small PDE problems")
  parser.add_argument('problem', nargs='?', default='heat1d', choices=sorted(PROBLEMS))
  parser.add_argument('--verbose', action='store_true', help="log weights at every training point")
  args = parser.parse_args()

  configure_logging(LogLevel.VERBOSE if args.verbose else LogLevel.MODERATE)
  PROBLEMS[args.problem]()
