"""
End-to-End Integration Tests.

Tests the complete sampling pipeline from configuration to the extracted
subgraph.
"""

import pytest
import torch
import networkx as nx
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from config import load_config, load_sampling_config
from graph_sampling.graph import SamplingGraph, SubgraphExtractor, SampledSubgraph
from graph_sampling.engine import (
    RoundCoordinator,
    SamplingConfig,
    SamplingStatus,
    build_from_config,
    sample_graph,
)
from graph_sampling.utils import (
    compute_degree_distribution,
    compute_graph_statistics,
    largest_component_nodes,
    to_undirected,
)


class TestConfig:
    """Tests for configuration loading."""

    def test_default_config(self):
        config = load_config()
        assert 'sampling' in config
        assert config['sampling']['algorithm_id'] == 'random_walk'

    def test_default_sampling_config(self):
        config = load_sampling_config()
        assert isinstance(config, SamplingConfig)
        assert config.seed == 42
        assert config.params == {'direction': 'out'}

    def test_custom_config_file(self, tmp_path):
        path = tmp_path / 'run.yaml'
        path.write_text(
            "sampling:\n"
            "  algorithm_id: round_based_random_walk\n"
            "  target_fraction: 0.2\n"
            "  walker_count: 2\n"
            "  rounds: 4\n"
        )
        config = load_sampling_config(str(path))

        assert config.algorithm_id == 'round_based_random_walk'
        assert config.params == {'rounds': 4}

        _, _, sampler, _ = build_from_config(config)
        assert sampler.period == 4


class TestEndToEndPipeline:
    """Tests for the complete pipeline."""

    @pytest.fixture
    def graph(self):
        """Random undirected graph restricted to its largest component."""
        nx_graph = nx.gnm_random_graph(200, 500, seed=42)
        full = SamplingGraph.from_networkx(nx_graph)
        component = largest_component_nodes(full)
        return SubgraphExtractor(full).extract(component).to_graph()

    @pytest.mark.parametrize('algorithm_id', [
        'random_walk', 'random_stroll', 'degree_biased_walk',
        'snowball_walk', 'round_based_random_walk',
    ])
    def test_sample_and_extract(self, graph, algorithm_id):
        """Test sampling then extraction yields a valid induced subgraph."""
        config = SamplingConfig(
            algorithm_id=algorithm_id,
            target_fraction=0.25,
            walker_count=4,
            seed=42,
            round_cap=5000,
            stall_retries=10
        )
        result = sample_graph(graph, config)

        assert result.status == SamplingStatus.TARGET_MET
        assert result.coverage >= 0.25

        sub = SubgraphExtractor(graph).extract(result.sample)
        assert sub.num_nodes == len(result.sample)

        sample = set(result.sample)
        expected = {
            (sub.node_mapping[s], sub.node_mapping[d])
            for s, d in graph.edges()
            if s in sample and d in sample
        }
        assert set(map(tuple, sub.edge_index.t().tolist())) == expected

    def test_pipeline_with_default_config(self, graph, tmp_path):
        """Test the default configuration end to end, including the saved artifact."""
        config = load_sampling_config()
        resolver, walker, sampler, config = build_from_config(config)
        result = RoundCoordinator(resolver, walker, sampler).run(graph, config)

        assert result.status == SamplingStatus.TARGET_MET

        sub = SubgraphExtractor(graph).extract(result.sample)
        sub.save(str(tmp_path / 'subgraph.pt'))
        loaded = SampledSubgraph.load(str(tmp_path / 'subgraph.pt'))

        assert loaded.num_nodes == sub.num_nodes
        assert loaded.num_edges == sub.num_edges

    def test_fast_and_slow_runs_agree(self, graph):
        slow = sample_graph(graph, SamplingConfig(target_fraction=0.3, walker_count=3, seed=1))
        fast = sample_graph(graph, SamplingConfig(target_fraction=0.3, walker_count=3, seed=1,
                                                  fast=True))
        assert slow.sample == fast.sample


class TestGraphUtils:
    """Tests for graph utilities."""

    def test_degree_distribution(self):
        graph = SamplingGraph.from_edge_list([(0, 1), (1, 2)], num_nodes=4)
        stats = compute_degree_distribution(graph)

        assert stats['max'] == 2
        assert stats['min'] == 0
        assert stats['isolated_nodes'] == 1
        assert stats['histogram'] == {0: 1, 1: 2, 2: 1}

    def test_graph_statistics(self):
        graph = SamplingGraph.from_edge_list([(0, 1), (2, 3)])
        stats = compute_graph_statistics(graph)

        assert stats['num_nodes'] == 4
        assert stats['num_edges'] == 2
        assert stats['weak_components'] == 2

    def test_largest_component(self):
        graph = SamplingGraph.from_edge_list([(0, 1), (2, 3), (3, 4), (5, 5)])
        assert largest_component_nodes(graph) == [2, 3, 4]

    def test_largest_strong_component(self):
        graph = SamplingGraph.from_edge_list([(0, 1), (1, 0), (2, 3), (3, 4)])
        assert largest_component_nodes(graph, strong=True) == [0, 1]

    def test_to_undirected(self):
        edge_index = torch.tensor([[0, 1], [1, 2]])
        undirected = to_undirected(edge_index)

        edges = set(map(tuple, undirected.t().tolist()))
        assert edges == {(0, 1), (1, 0), (1, 2), (2, 1)}


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
