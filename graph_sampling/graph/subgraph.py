"""
Sampled Subgraph Extractor Module.

This module turns a finished sample (a set of node indices) into the induced
subgraph of the original graph. The result is the artifact handed to writers.

Key Concept:
    The induced subgraph contains:
    - Exactly the sampled nodes, re-indexed 0..k-1 in ascending original order
    - Exactly the original edges whose endpoints are both sampled

    Only the out-adjacency of sampled nodes is scanned. Membership of the other
    endpoint is decided by binary search into the sorted sample, so the cost
    depends on the sample and its edges, never on the full graph.
"""

import torch
import networkx as nx
import numpy as np
from pathlib import Path
from typing import Dict, Iterable, List
from dataclasses import dataclass

from .adjacency import SamplingGraph


@dataclass
class SampledSubgraph:
    """
    Container for an induced subgraph.

    Attributes:
        node_ids: Original node index of every new node (ascending order)
        edge_index: PyTorch tensor of shape [2, num_edges] with new indices
        node_mapping: Dict mapping original index to new index
        reverse_mapping: Dict mapping new index back to original index
        num_nodes: Number of sampled nodes
        num_edges: Number of retained edges
    """
    node_ids: List[int]
    edge_index: torch.Tensor
    node_mapping: Dict[int, int]
    reverse_mapping: Dict[int, int]
    num_nodes: int
    num_edges: int

    def to_graph(self) -> SamplingGraph:
        """Wrap the subgraph in a SamplingGraph (e.g. to sample it again)."""
        return SamplingGraph(self.edge_index, self.num_nodes)

    def to_networkx(self) -> nx.DiGraph:
        """
        Convert to a NetworkX DiGraph.

        Each node carries its original index as the 'original_id' attribute.
        """
        graph = nx.DiGraph()
        for new_idx, old_idx in enumerate(self.node_ids):
            graph.add_node(new_idx, original_id=old_idx)
        graph.add_edges_from(self.edge_index.t().tolist())
        return graph

    def save(self, path: str) -> None:
        """
        Save subgraph to disk with torch.save.

        Args:
            path: Output file path
        """
        Path(path).parent.mkdir(parents=True, exist_ok=True)
        torch.save({
            'node_ids': torch.tensor(self.node_ids, dtype=torch.long),
            'edge_index': self.edge_index,
            'num_nodes': self.num_nodes,
            'num_edges': self.num_edges,
        }, path)

    @classmethod
    def load(cls, path: str) -> 'SampledSubgraph':
        """Load a subgraph written by save()."""
        data = torch.load(path)
        node_ids = data['node_ids'].tolist()
        node_mapping = {old: new for new, old in enumerate(node_ids)}
        return cls(
            node_ids=node_ids,
            edge_index=data['edge_index'],
            node_mapping=node_mapping,
            reverse_mapping={new: old for old, new in node_mapping.items()},
            num_nodes=data['num_nodes'],
            num_edges=data['num_edges']
        )


class SubgraphExtractor:
    """
    Extract the induced subgraph of a node sample.

    The original graph is left unchanged - this is a READ-ONLY operation.

    Example:
        >>> from graph_sampling.graph import SamplingGraph, SubgraphExtractor
        >>>
        >>> graph = SamplingGraph.from_edge_list([(0, 1), (1, 2), (2, 3)])
        >>> extractor = SubgraphExtractor(graph)
        >>> sub = extractor.extract({0, 1, 2})
        >>> sub.edge_index.t().tolist()
        [[0, 1], [1, 2]]
    """

    def __init__(self, graph: SamplingGraph):
        """
        Initialize extractor.

        Args:
            graph: Graph the sample was drawn from
        """
        self.graph = graph

    def extract(self, sample: Iterable[int]) -> SampledSubgraph:
        """
        Extract the subgraph induced by sample.

        Args:
            sample: Node indices to keep (any iterable; duplicates ignored)

        Returns:
            SampledSubgraph with dense, order-preserving indices

        Raises:
            ValueError: If a sampled index is outside the graph
        """
        # Sorting gives both the stable new numbering and the search array
        nodes = np.unique(np.fromiter((int(n) for n in sample), dtype=np.int64))

        if len(nodes) > 0 and (nodes[0] < 0 or nodes[-1] >= self.graph.num_nodes):
            raise ValueError(
                f"Sample contains nodes outside [0, {self.graph.num_nodes})"
            )

        node_ids = nodes.tolist()
        node_mapping = {old: new for new, old in enumerate(node_ids)}
        reverse_mapping = {new: old for old, new in node_mapping.items()}

        neighbor_lists = [self.graph.out_neighbors(n) for n in node_ids]

        if neighbor_lists:
            dst = np.concatenate(neighbor_lists)
            edge_ids = np.concatenate([self.graph.out_edge_ids(n) for n in node_ids])
            src_new = np.repeat(
                np.arange(len(node_ids), dtype=np.int64),
                [len(nbrs) for nbrs in neighbor_lists]
            )
        else:
            dst = np.zeros(0, dtype=np.int64)
            edge_ids = np.zeros(0, dtype=np.int64)
            src_new = np.zeros(0, dtype=np.int64)

        # Position in the sorted sample doubles as the new index
        pos = np.searchsorted(nodes, dst)
        keep = pos < len(nodes)
        keep[keep] = nodes[pos[keep]] == dst[keep]

        if keep.any():
            # Restore original edge order among the retained edges
            order = np.argsort(edge_ids[keep], kind='stable')
            edge_index = torch.from_numpy(
                np.stack([src_new[keep][order], pos[keep][order]]).astype(np.int64)
            )
        else:
            edge_index = torch.zeros((2, 0), dtype=torch.long)

        return SampledSubgraph(
            node_ids=node_ids,
            edge_index=edge_index,
            node_mapping=node_mapping,
            reverse_mapping=reverse_mapping,
            num_nodes=len(node_ids),
            num_edges=edge_index.shape[1]
        )

    def get_statistics(self, sample: Iterable[int]) -> Dict:
        """
        Get statistics about the extracted subgraph relative to the original.

        Args:
            sample: Node indices to keep

        Returns:
            Dictionary with subgraph statistics
        """
        sub = self.extract(sample)
        original_nodes = self.graph.num_nodes
        original_edges = self.graph.num_edges

        return {
            'num_nodes': sub.num_nodes,
            'num_edges': sub.num_edges,
            'node_fraction': sub.num_nodes / original_nodes if original_nodes > 0 else 0,
            'edge_fraction': sub.num_edges / original_edges if original_edges > 0 else 0,
            'density': sub.num_edges / (sub.num_nodes * (sub.num_nodes - 1))
                       if sub.num_nodes > 1 else 0
        }


def extract_subgraph(graph: SamplingGraph, sample: Iterable[int]) -> SampledSubgraph:
    """
    Convenience function to extract an induced subgraph.

    Args:
        graph: Original graph
        sample: Sampled node indices

    Returns:
        SampledSubgraph
    """
    return SubgraphExtractor(graph).extract(sample)
