"""Tests for symbolic partial derivatives."""

import math

import numpy as np
import pytest

from symbolic_pde import (
    VariableNode, ConstantNode, SumNode, ProductNode, PowerNode, LogNode,
    AbsoluteValueNode, ConditionalNode, TanhNode, IdentityNode, Comparison,
    ExpressionSimplifier,
)

X0 = VariableNode(0)
X1 = VariableNode(1)
simplify = ExpressionSimplifier.simplify_expression


def c(value):
    return ConstantNode(value)


POLYNOMIAL = SumNode([
    ProductNode([PowerNode(X0, c(2)), X1]),
    PowerNode(X1, c(2)),
    c(7),
])

# evaluated at points with x0, x1 > 0 and away from every branch boundary
SMOOTH_CASES = {
    'product': ProductNode([X0, X1, X0]),
    'variable_exponent': PowerNode(X0, X1),
    'log_of_sum': LogNode(SumNode([X0, PowerNode(X1, c(2))])),
    'tanh': TanhNode(ProductNode([c(2), X0, X1])),
    'absolute_negative_side': AbsoluteValueNode(SumNode([X0, c(-1)])),
    'conditional': ConditionalNode(
        Comparison(X0, '>=', 1), PowerNode(X0, c(3)), ProductNode([X0, X1])),
    'inverse_sqrt': PowerNode(SumNode([X0, X1]), c(-0.5)),
    'identity': IdentityNode(ProductNode([X0, LogNode(X1)])),
    'nested_power': PowerNode(TanhNode(X0), SumNode([X1, c(1)])),
    'polynomial': POLYNOMIAL,
}
POINTS = [[0.7, 1.3], [1.6, 0.4]]


class TestRules:

    def test_variable(self):
        assert X0.partial(0).evaluate([3.0]) == 1.0
        assert X0.partial(1).evaluate([3.0]) == 0.0

    def test_constant(self):
        assert c(4).partial(0).evaluate([3.0]) == 0.0

    def test_empty_product(self):
        assert ProductNode([]).partial(0).evaluate([3.0]) == 0.0

    def test_square(self):
        e = PowerNode(X0, c(2))
        assert e.evaluate([3.0]) == pytest.approx(9.0)
        assert e.partial(0).evaluate([3.0]) == pytest.approx(6.0)

    def test_polynomial_partials(self):
        assert POLYNOMIAL.evaluate([2.0, 3.0]) == pytest.approx(28.0)
        assert POLYNOMIAL.partial(0).evaluate([2.0, 3.0]) == pytest.approx(12.0)
        assert POLYNOMIAL.partial(1).evaluate([2.0, 3.0]) == pytest.approx(10.0)

    def test_absolute_value_both_sides(self):
        e = AbsoluteValueNode(X0)
        derivative = e.partial(0)
        assert e.evaluate([5.0]) == 5.0
        assert derivative.evaluate([5.0]) == pytest.approx(1.0)
        assert e.evaluate([-5.0]) == 5.0
        assert derivative.evaluate([-5.0]) == pytest.approx(-1.0)

    def test_absolute_value_derivative_is_conditional(self):
        derivative = AbsoluteValueNode(X0).partial(0)
        assert isinstance(derivative, ConditionalNode)

    def test_conditional_derivative_reuses_predicate(self):
        predicate = Comparison(X0, '>=', 0)
        e = ConditionalNode(predicate, PowerNode(X0, c(2)), negate_x(X0))
        derivative = e.partial(0)
        assert derivative.predicate is predicate
        assert derivative.evaluate([2.0]) == pytest.approx(4.0)
        assert derivative.evaluate([-2.0]) == pytest.approx(-1.0)

    def test_condition_is_checked_where_derivative_is_evaluated(self):
        e = ConditionalNode(lambda x: x[0] < 1, PowerNode(X0, c(2)), ProductNode([c(5), X0]))
        derivative = e.partial(0)
        assert derivative.evaluate([0.5]) == pytest.approx(1.0)
        assert derivative.evaluate([3.0]) == pytest.approx(5.0)

    def test_tanh(self):
        derivative = TanhNode(X0).partial(0)
        assert derivative.evaluate([0.3]) == pytest.approx(1 - math.tanh(0.3) ** 2)

    def test_log(self):
        assert LogNode(X0).partial(0).evaluate([4.0]) == pytest.approx(0.25)

    def test_derivative_does_not_modify_input(self):
        e = ProductNode([X0, X1])
        before = e.render()
        e.partial(0)
        e.partial(1)
        assert e.render() == before


def negate_x(node):
    return ProductNode([c(-1), node])


@pytest.mark.parametrize("name", sorted(SMOOTH_CASES))
@pytest.mark.parametrize("point", POINTS)
@pytest.mark.parametrize("index", [0, 1])
def test_partial_matches_finite_difference(name, point, index, finite_difference):
    e = SMOOTH_CASES[name]
    expected = finite_difference(e, point, index)
    derivative = e.partial(index)
    assert derivative.evaluate(point) == pytest.approx(expected, rel=1e-5, abs=1e-6)
    assert simplify(derivative).evaluate(point) == pytest.approx(expected, rel=1e-5, abs=1e-6)


class TestRepeatedDifferentiation:

    @pytest.mark.parametrize("first,second,want", [
        (0, 0, lambda x: 2 * x[1]),
        (0, 1, lambda x: 2 * x[0]),
        (1, 0, lambda x: 2 * x[0]),
        (1, 1, lambda x: 2.0),
    ])
    def test_second_partials_of_polynomial_on_grid(self, first, second, want):
        # simplifying between steps keeps the grid's zero coordinates well defined
        derivative = simplify(simplify(POLYNOMIAL.partial(first)).partial(second))
        for xv in np.linspace(0.0, 0.9, 10):
            for yv in np.linspace(0.0, 0.9, 10):
                point = [xv, yv]
                assert derivative.evaluate(point) == pytest.approx(want(point), abs=1e-10)

    def test_unsimplified_second_partial_away_from_zero(self):
        derivative = POLYNOMIAL.partial(0).partial(0)
        assert derivative.evaluate([0.5, 0.8]) == pytest.approx(1.6)

    def test_third_partial_of_tanh(self, finite_difference):
        e = TanhNode(ProductNode([c(2), X0]))
        second = simplify(e.partial(0).partial(0))
        third = simplify(second.partial(0))
        assert third.evaluate([0.3]) == pytest.approx(finite_difference(second, [0.3], 0), rel=1e-5)
