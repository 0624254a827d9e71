"""Tests for tree traversal helpers and the expression validator."""

import math

import pytest

from symbolic_pde import (
    Network, VariableNode, ConstantNode, SumNode, ProductNode, PowerNode,
    TanhNode, ConditionalNode, Comparison, ExpressionValidator,
)
from symbolic_pde.expression_tree.utils import (
    get_all_nodes, calculate_tree_depth, count_node_types, get_variables, get_constants,
)

X0 = VariableNode(0)
X3 = VariableNode(3)
TREE = SumNode([ProductNode([ConstantNode(2), X0]), PowerNode(X3, ConstantNode(0.5))])


def test_traversal_orders():
    breadth = [type(n).__name__ for n in get_all_nodes(TREE)]
    depth = [type(n).__name__ for n in get_all_nodes(TREE, 'depth_first')]
    assert breadth[:3] == ['SumNode', 'ProductNode', 'PowerNode']
    assert depth[:4] == ['SumNode', 'ProductNode', 'ConstantNode', 'VariableNode']
    assert sorted(breadth) == sorted(depth)


def test_unknown_traversal_order():
    with pytest.raises(ValueError):
        get_all_nodes(TREE, 'sideways')


def test_depth_counts_and_leaves():
    assert calculate_tree_depth(TREE) == 3
    assert calculate_tree_depth(X0) == 1
    assert count_node_types(TREE) == {
        'SumNode': 1, 'ProductNode': 1, 'PowerNode': 1, 'ConstantNode': 2, 'VariableNode': 2,
    }
    assert get_variables(TREE) == {0, 3}
    assert get_constants(TREE) == [2.0, 0.5]


def test_computation_nodes_are_traversed_through_their_expression():
    network = Network()
    in1, x = network.new_input()
    out = network.new_output().pull_from(in1)
    assert get_variables(out) == {0, 1, 2}
    assert count_node_types(out)['TanhNode'] == 1


def test_validator():
    assert ExpressionValidator.is_valid_expression(TREE)
    assert ExpressionValidator.is_valid_expression(TREE, n_vars=4)
    assert not ExpressionValidator.is_valid_expression(TREE, n_vars=3)
    assert not ExpressionValidator.is_valid_expression(TanhNode(ConstantNode(math.nan)))


def test_variable_bounds():
    ExpressionValidator.check_variable_bounds(TREE, 4)
    with pytest.raises(IndexError, match="X3"):
        ExpressionValidator.check_variable_bounds(TREE, 2)


def test_validator_reads_comparison_predicates():
    node = ConditionalNode(Comparison(VariableNode(5), '<', 1), X0, ConstantNode(0))
    assert ExpressionValidator.read_variables(node) == {0, 5}
    assert not ExpressionValidator.is_valid_expression(node, n_vars=4)
    with pytest.raises(IndexError, match="X5"):
        ExpressionValidator.check_variable_bounds(node, 4)


def test_nodes_compare_and_hash_by_identity():
    first, second = VariableNode(2), VariableNode(2)
    assert first != second
    assert len({first, second}) == 2
    assert {first: 'a'}[first] == 'a'


def test_size_is_cached_for_fixed_trees():
    assert not TREE.is_growable()
    assert TREE.size() == 7
    assert TREE._size_cache == 7
