"""
Tests for Graph Module.

Tests the adjacency view and induced-subgraph extraction.
"""

import pytest
import torch
import networkx as nx
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from graph_sampling.graph import SamplingGraph, SubgraphExtractor, SampledSubgraph, extract_subgraph


class TestSamplingGraph:
    """Tests for the adjacency view."""

    @pytest.fixture
    def chain(self):
        """Create a simple test graph (chain: 0->1->2->3)."""
        edge_index = torch.tensor([
            [0, 1, 2],  # sources
            [1, 2, 3]   # targets
        ])
        return SamplingGraph(edge_index, num_nodes=4)

    def test_counts(self, chain):
        """Test node and edge counts."""
        assert chain.num_nodes == 4
        assert chain.num_edges == 3
        assert len(chain) == 4

    def test_out_and_in_neighbors(self, chain):
        """Test both adjacency directions."""
        assert chain.out_neighbors(1).tolist() == [2]
        assert chain.in_neighbors(1).tolist() == [0]
        assert chain.out_neighbors(3).tolist() == []
        assert chain.in_neighbors(0).tolist() == []

    def test_degrees(self, chain):
        """Test degree arrays."""
        assert chain.out_degrees.tolist() == [1, 1, 1, 0]
        assert chain.in_degrees.tolist() == [0, 1, 1, 1]
        assert chain.degrees('total').tolist() == [1, 2, 2, 1]
        assert chain.out_degree(0) == 1
        assert chain.in_degree(0) == 0

    def test_unknown_degree_kind(self, chain):
        """Test that an unknown degree kind is rejected."""
        with pytest.raises(ValueError):
            chain.degrees('sideways')

    def test_neighbor_order_preserved(self):
        """Test that neighbors keep original edge order."""
        graph = SamplingGraph.from_edge_list([(0, 3), (0, 1), (0, 2)])
        assert graph.out_neighbors(0).tolist() == [3, 1, 2]

    def test_adjacency_is_read_only(self, chain):
        """Test that adjacency views cannot be mutated."""
        neighbors = chain.out_neighbors(0)
        with pytest.raises(ValueError):
            neighbors[0] = 3

    def test_edge_index_roundtrip(self, chain):
        """Test that edge_index returns the construction edges."""
        assert chain.edge_index.tolist() == [[0, 1, 2], [1, 2, 3]]
        assert chain.edges() == [(0, 1), (1, 2), (2, 3)]

    def test_invalid_endpoint(self):
        """Test that out-of-range endpoints are rejected."""
        edge_index = torch.tensor([[0], [5]])
        with pytest.raises(ValueError):
            SamplingGraph(edge_index, num_nodes=3)

    def test_empty_graph(self):
        """Test graph with no nodes."""
        graph = SamplingGraph(torch.zeros((2, 0), dtype=torch.long), num_nodes=0)
        assert graph.num_nodes == 0
        assert graph.num_edges == 0

    def test_isolated_nodes(self):
        """Test graph with nodes but no edges."""
        graph = SamplingGraph.from_edge_list([], num_nodes=3)
        assert graph.num_nodes == 3
        assert graph.out_neighbors(2).tolist() == []

    def test_from_networkx_undirected(self):
        """Test that undirected graphs contribute both directions."""
        graph = SamplingGraph.from_networkx(nx.path_graph(3))

        assert graph.num_nodes == 3
        assert graph.num_edges == 4
        assert sorted(graph.out_neighbors(1).tolist()) == [0, 2]

    def test_from_networkx_directed(self):
        """Test that directed graphs keep direction."""
        nx_graph = nx.DiGraph([('a', 'b'), ('b', 'c')])
        graph = SamplingGraph.from_networkx(nx_graph)

        assert graph.num_edges == 2
        assert graph.out_neighbors(0).tolist() == [1]
        assert graph.in_neighbors(0).tolist() == []

    def test_to_networkx(self, chain):
        """Test conversion to NetworkX."""
        nx_graph = chain.to_networkx()
        assert nx_graph.number_of_nodes() == 4
        assert set(nx_graph.edges()) == {(0, 1), (1, 2), (2, 3)}


class TestSubgraphExtractor:
    """Tests for induced-subgraph extraction."""

    @pytest.fixture
    def chain(self):
        """Nodes {0,1,2,3}, edges {(0,1),(1,2),(2,3)}."""
        return SamplingGraph.from_edge_list([(0, 1), (1, 2), (2, 3)])

    def test_chain_example(self, chain):
        """Test that sampling {0,1,2} keeps exactly (0,1) and (1,2)."""
        sub = SubgraphExtractor(chain).extract({0, 1, 2})

        assert sub.num_nodes == 3
        assert sub.node_ids == [0, 1, 2]
        assert 3 not in sub.node_mapping
        assert sorted(map(tuple, sub.edge_index.t().tolist())) == [(0, 1), (1, 2)]

    def test_dense_stable_reindexing(self):
        """Test that new indices follow original relative order."""
        graph = SamplingGraph.from_edge_list([(7, 2), (2, 9), (9, 7), (4, 2)], num_nodes=10)
        sub = extract_subgraph(graph, [9, 2, 7])

        assert sub.node_ids == [2, 7, 9]
        assert sub.node_mapping == {2: 0, 7: 1, 9: 2}
        assert sub.reverse_mapping == {0: 2, 1: 7, 2: 9}
        # (7,2) -> (1,0), (2,9) -> (0,2), (9,7) -> (2,1); (4,2) dropped
        assert set(map(tuple, sub.edge_index.t().tolist())) == {(1, 0), (0, 2), (2, 1)}
        assert sub.num_edges == 3

    def test_identity(self):
        """Test that extracting every node reproduces the graph."""
        nx_graph = nx.gnm_random_graph(30, 60, seed=7, directed=True)
        graph = SamplingGraph.from_networkx(nx_graph)

        sub = SubgraphExtractor(graph).extract(range(graph.num_nodes))

        assert sub.num_nodes == graph.num_nodes
        assert sub.num_edges == graph.num_edges
        assert set(map(tuple, sub.edge_index.t().tolist())) == set(graph.edges())
        assert nx.is_isomorphic(sub.to_networkx(), graph.to_networkx())

    def test_induced_edges_match_definition(self):
        """Test retained edges against a brute-force induced subgraph."""
        nx_graph = nx.gnm_random_graph(40, 120, seed=3, directed=True)
        graph = SamplingGraph.from_networkx(nx_graph)
        sample = set(range(0, 40, 3))

        sub = SubgraphExtractor(graph).extract(sample)
        expected = {
            (sub.node_mapping[s], sub.node_mapping[d])
            for s, d in graph.edges()
            if s in sample and d in sample
        }

        assert set(map(tuple, sub.edge_index.t().tolist())) == expected

    def test_edges_keep_original_order(self):
        """Test that retained edges follow edge_index order, not source order."""
        graph = SamplingGraph.from_edge_list([(2, 0), (0, 1)])
        sub = SubgraphExtractor(graph).extract({0, 1, 2})

        assert sub.edge_index.tolist() == [[2, 0], [0, 1]]

    def test_edges_keep_original_order_with_dropped_edges(self):
        """Test order when some edges leave the sample."""
        graph = SamplingGraph.from_edge_list([(5, 1), (3, 4), (1, 3), (3, 5), (0, 1)])
        sub = extract_subgraph(graph, {1, 3, 5})

        # (5,1) -> (2,0), (1,3) -> (0,1), (3,5) -> (1,2)
        assert sub.edge_index.t().tolist() == [[2, 0], [0, 1], [1, 2]]

    def test_out_edge_ids(self):
        """Test that edge ids line up with out_neighbors."""
        graph = SamplingGraph.from_edge_list([(1, 2), (0, 3), (1, 0)])

        assert graph.out_neighbors(1).tolist() == [2, 0]
        assert graph.out_edge_ids(1).tolist() == [0, 2]
        assert graph.out_edge_ids(0).tolist() == [1]

    def test_self_loops_kept(self):
        """Test that self-loops on sampled nodes are retained."""
        graph = SamplingGraph.from_edge_list([(0, 0), (0, 1)])
        sub = extract_subgraph(graph, {0})

        assert sub.edge_index.t().tolist() == [[0, 0]]

    def test_empty_sample(self, chain):
        """Test extraction of an empty sample."""
        sub = SubgraphExtractor(chain).extract(set())

        assert sub.num_nodes == 0
        assert sub.num_edges == 0
        assert sub.edge_index.shape == (2, 0)

    def test_out_of_range_sample(self, chain):
        """Test that unknown nodes are rejected."""
        with pytest.raises(ValueError):
            SubgraphExtractor(chain).extract({0, 10})

    def test_to_graph(self, chain):
        """Test that a subgraph can be wrapped for resampling."""
        sub_graph = SubgraphExtractor(chain).extract({1, 2, 3}).to_graph()

        assert sub_graph.num_nodes == 3
        assert sub_graph.out_neighbors(0).tolist() == [1]

    def test_to_networkx_keeps_original_ids(self, chain):
        """Test original ids on NetworkX nodes."""
        nx_sub = SubgraphExtractor(chain).extract({2, 3}).to_networkx()
        assert nx_sub.nodes[0]['original_id'] == 2
        assert nx_sub.nodes[1]['original_id'] == 3

    def test_save_and_load(self, chain, tmp_path):
        """Test saving the artifact handed to writers."""
        sub = SubgraphExtractor(chain).extract({0, 1, 2})
        path = tmp_path / 'sample' / 'subgraph.pt'
        sub.save(str(path))

        loaded = SampledSubgraph.load(str(path))

        assert loaded.node_ids == sub.node_ids
        assert torch.equal(loaded.edge_index, sub.edge_index)
        assert loaded.node_mapping == sub.node_mapping

    def test_statistics(self, chain):
        """Test subgraph statistics."""
        stats = SubgraphExtractor(chain).get_statistics({0, 1})

        assert stats['num_nodes'] == 2
        assert stats['num_edges'] == 1
        assert stats['node_fraction'] == pytest.approx(0.5)


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
