"""
Utilities Module.

This module provides helper functions for graph analysis and preparation:
degree statistics, component restriction and undirected conversion.
"""

from .graph_utils import (
    compute_degree_distribution,
    compute_graph_statistics,
    largest_component_nodes,
    to_undirected
)

__all__ = [
    'compute_degree_distribution',
    'compute_graph_statistics',
    'largest_component_nodes',
    'to_undirected',
]
