"""
Graph Utilities Module.

This module provides helper functions for graph analysis and preparation
before and after sampling.
"""

import torch
import networkx as nx
import numpy as np
from typing import Dict, List
from collections import Counter

from ..graph import SamplingGraph


def compute_degree_distribution(graph: SamplingGraph) -> Dict:
    """
    Compute degree distribution statistics.

    Args:
        graph: Graph to analyze

    Returns:
        Dictionary with degree statistics (total = out + in degree)
    """
    if graph.num_nodes == 0:
        return {
            'degrees': np.zeros(0, dtype=np.int64),
            'mean': 0.0,
            'std': 0.0,
            'min': 0,
            'max': 0,
            'histogram': {},
            'isolated_nodes': 0
        }

    total_degrees = graph.degrees('total')

    degree_counts = Counter(total_degrees.tolist())
    histogram = {int(k): v for k, v in sorted(degree_counts.items())}

    return {
        'degrees': total_degrees,
        'mean': float(total_degrees.mean()),
        'std': float(total_degrees.std()),
        'min': int(total_degrees.min()),
        'max': int(total_degrees.max()),
        'histogram': histogram,
        'isolated_nodes': int((total_degrees == 0).sum())
    }


def compute_graph_statistics(graph: SamplingGraph) -> Dict:
    """
    Compute comprehensive graph statistics.

    Args:
        graph: Graph to analyze

    Returns:
        Dictionary with graph statistics
    """
    degree_stats = compute_degree_distribution(graph)

    # Density
    max_edges = graph.num_nodes * (graph.num_nodes - 1)  # Directed graph
    density = graph.num_edges / max_edges if max_edges > 0 else 0

    nx_graph = graph.to_networkx()
    weak_components = nx.number_weakly_connected_components(nx_graph) if graph.num_nodes else 0

    return {
        'num_nodes': graph.num_nodes,
        'num_edges': graph.num_edges,
        'density': density,
        'avg_degree': degree_stats['mean'],
        'max_degree': degree_stats['max'],
        'min_degree': degree_stats['min'],
        'isolated_nodes': degree_stats['isolated_nodes'],
        'weak_components': weak_components,
        'degree_histogram': degree_stats['histogram']
    }


def largest_component_nodes(graph: SamplingGraph, strong: bool = False) -> List[int]:
    """
    Nodes of the largest connected component.

    Walkers cannot cross between components without reseeding, so graphs are
    often restricted to their largest component before sampling.

    Args:
        graph: Graph to analyze
        strong: Use strongly instead of weakly connected components

    Returns:
        Sorted node indices of the largest component (ties: lowest first node)
    """
    if graph.num_nodes == 0:
        return []

    nx_graph = graph.to_networkx()
    if strong:
        components = nx.strongly_connected_components(nx_graph)
    else:
        components = nx.weakly_connected_components(nx_graph)

    largest = max(components, key=lambda c: (len(c), -min(c)))
    return sorted(largest)


def to_undirected(edge_index: torch.Tensor) -> torch.Tensor:
    """
    Convert directed edge_index to undirected.

    Args:
        edge_index: Directed edge indices [2, num_edges]

    Returns:
        Undirected edge indices [2, 2*num_edges] (with duplicates removed)
    """
    if edge_index.numel() == 0:
        return edge_index

    # Add reverse edges
    reverse_edges = edge_index.flip(0)
    all_edges = torch.cat([edge_index, reverse_edges], dim=1)

    # Remove duplicates
    all_edges = torch.unique(all_edges, dim=1)

    return all_edges
