"""
Tree Utility Functions

Traversal and analysis helpers shared by the validator, the network's
diagnostics and the tests.
"""

from typing import Dict, List, Set
from collections import Counter

from ..core.node import Node, VariableNode, ConstantNode


def get_all_nodes(node: Node, traversal_order: str = 'breadth_first') -> List[Node]:
    """
    Get all nodes in the tree using specified traversal order.

    Shared sub-expressions are visited once per reference, so the result
    reflects the tree as evaluated rather than the set of distinct objects.

    Args:
        node: Root node of the tree
        traversal_order: 'breadth_first' (default) or 'depth_first'

    Returns:
        List of all nodes in the tree
    """
    if traversal_order == 'breadth_first':
        return _breadth_first_traversal(node)
    elif traversal_order == 'depth_first':
        return _depth_first_traversal(node)
    else:
        raise ValueError(f"Invalid traversal_order: {traversal_order}")


def _breadth_first_traversal(node: Node) -> List[Node]:
    """Breadth-first traversal (iterative, non-recursive)"""
    nodes_to_visit = [node.materialize()]
    all_nodes = []

    while nodes_to_visit:
        current_node = nodes_to_visit.pop(0)  # FIFO for breadth-first
        all_nodes.append(current_node)
        nodes_to_visit.extend(child.materialize() for child in current_node.children())

    return all_nodes


def _depth_first_traversal(node: Node) -> List[Node]:
    """Depth-first traversal (recursive)"""
    node = node.materialize()
    nodes = [node]
    for child in node.children():
        nodes.extend(_depth_first_traversal(child))
    return nodes


def calculate_tree_depth(node: Node) -> int:
    """
    Calculate the maximum depth of the tree.

    Args:
        node: Root node of the tree

    Returns:
        Maximum depth (leaf nodes have depth 1)
    """
    children = node.materialize().children()
    if not children:
        return 1
    return 1 + max(calculate_tree_depth(child) for child in children)


def count_node_types(node: Node) -> Dict[str, int]:
    """Number of occurrences of each node class, keyed by class name"""
    return dict(Counter(type(n).__name__ for n in get_all_nodes(node)))


def get_variables(node: Node) -> Set[int]:
    """Indices of every variable the tree reads"""
    return {n.index for n in get_all_nodes(node) if isinstance(n, VariableNode)}


def get_constants(node: Node) -> List[float]:
    return [n.value for n in get_all_nodes(node, 'depth_first') if isinstance(n, ConstantNode)]
