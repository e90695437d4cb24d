"""
Round-Based Graph Sampling.

This package samples large graphs with stochastic walkers. Walkers move over
a fixed graph round by round, visited nodes are committed to a sample under a
selection policy, and the induced subgraph of the sample is extracted once the
target coverage is reached.

Submodules:
    - graph: Read-only graph view and induced-subgraph extraction
    - walks: Candidate resolvers, step policies and selection policies
    - engine: Round coordinator, run configuration and strategy factory
    - utils: Graph statistics and preparation helpers

Example:
    >>> from graph_sampling.graph import SamplingGraph, SubgraphExtractor
    >>> from graph_sampling.engine import SamplingConfig, sample_graph
    >>>
    >>> graph = SamplingGraph.from_networkx(nx_graph)
    >>> config = SamplingConfig(target_fraction=0.2, walker_count=4, seed=42)
    >>> result = sample_graph(graph, config)
    >>> subgraph = SubgraphExtractor(graph).extract(result.sample)
"""

__version__ = "1.0.0"
__author__ = "Graph Sampling Team"

# Version info
VERSION_INFO = {
    'major': 1,
    'minor': 0,
    'patch': 0,
    'release': 'stable'
}
