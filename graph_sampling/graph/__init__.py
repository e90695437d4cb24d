"""
Graph Module for Graph Sampling.

This module handles:
1. The read-only graph view queried during sampling
2. Extraction of the induced subgraph once a sample is complete

Classes:
    SamplingGraph: Immutable CSR adjacency over dense node indices
    SubgraphExtractor: Build the induced, re-indexed subgraph of a sample
    SampledSubgraph: Container for the extracted subgraph

Example:
    >>> from graph_sampling.graph import SamplingGraph, SubgraphExtractor
    >>>
    >>> graph = SamplingGraph.from_edge_list([(0, 1), (1, 2), (2, 3)])
    >>> sub = SubgraphExtractor(graph).extract({0, 1, 2})
    >>> print(sub.num_nodes, sub.num_edges)  # 3 2
"""

from .adjacency import SamplingGraph
from .subgraph import SampledSubgraph, SubgraphExtractor, extract_subgraph

__all__ = [
    'SamplingGraph',
    'SampledSubgraph',
    'SubgraphExtractor',
    'extract_subgraph',
]
