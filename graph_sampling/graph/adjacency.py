"""
Sampling Graph Module.

This module provides the read-only graph view that every sampling component
queries. Nodes are dense integer indices in [0, N) and adjacency is stored in
CSR form for both edge directions.

Key Concept:
    The graph is built once from an edge_index tensor (the same [2, num_edges]
    layout used throughout the pipeline) and never mutated afterwards, so
    resolvers, walkers and the coordinator can share it freely.
"""

import torch
import networkx as nx
import numpy as np
from typing import Iterable, List, Tuple, Optional


def _build_csr(
    src: np.ndarray,
    dst: np.ndarray,
    num_nodes: int
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Build CSR arrays grouping dst by src.

    A stable sort keeps each node's neighbors in original edge order, and the
    sort permutation is kept as the edge id of every CSR slot.

    Args:
        src: Row node of every edge
        dst: Column node of every edge
        num_nodes: Total number of nodes

    Returns:
        Tuple of (indptr [num_nodes + 1], indices [num_edges], edge_ids [num_edges])
    """
    order = np.argsort(src, kind='stable')
    indices = dst[order].astype(np.int64)

    counts = np.bincount(src, minlength=num_nodes)
    indptr = np.zeros(num_nodes + 1, dtype=np.int64)
    np.cumsum(counts, out=indptr[1:])

    return indptr, indices, order.astype(np.int64)


class SamplingGraph:
    """
    Immutable adjacency view over a fixed node/edge set.

    Out-edges and in-edges are both indexed so that candidate resolvers can
    expose either direction in O(degree).

    Example:
        >>> import torch
        >>> from graph_sampling.graph import SamplingGraph
        >>>
        >>> # Chain 0 -> 1 -> 2
        >>> edge_index = torch.tensor([[0, 1], [1, 2]])
        >>> graph = SamplingGraph(edge_index, num_nodes=3)
        >>> graph.out_neighbors(1)
        array([2])
        >>> graph.in_neighbors(1)
        array([0])
    """

    def __init__(self, edge_index: torch.Tensor, num_nodes: int):
        """
        Initialize graph view.

        Args:
            edge_index: Edge tensor of shape [2, num_edges]
            num_nodes: Total number of nodes
        """
        if num_nodes < 0:
            raise ValueError(f"num_nodes must be non-negative, got {num_nodes}")

        if edge_index.numel() == 0:
            src = np.zeros(0, dtype=np.int64)
            dst = np.zeros(0, dtype=np.int64)
        else:
            src = edge_index[0].cpu().numpy().astype(np.int64)
            dst = edge_index[1].cpu().numpy().astype(np.int64)

        if len(src) > 0:
            low = min(src.min(), dst.min())
            high = max(src.max(), dst.max())
            if low < 0 or high >= num_nodes:
                raise ValueError(
                    f"Edge endpoints must lie in [0, {num_nodes}), "
                    f"found range [{low}, {high}]"
                )

        self._num_nodes = num_nodes
        self._src = src
        self._dst = dst

        self._out_indptr, self._out_indices, self._out_edge_ids = _build_csr(src, dst, num_nodes)
        self._in_indptr, self._in_indices, _ = _build_csr(dst, src, num_nodes)
        self._out_degrees = np.diff(self._out_indptr)
        self._in_degrees = np.diff(self._in_indptr)
        self._total_degrees = self._out_degrees + self._in_degrees

        for array in (self._src, self._dst, self._out_indptr,
                      self._out_indices, self._out_edge_ids, self._in_indptr, self._in_indices,
                      self._out_degrees, self._in_degrees, self._total_degrees):
            array.setflags(write=False)

    @classmethod
    def from_edge_list(
        cls,
        edges: Iterable[Tuple[int, int]],
        num_nodes: Optional[int] = None
    ) -> 'SamplingGraph':
        """
        Build a graph from (source, target) pairs.

        Args:
            edges: Iterable of directed edges
            num_nodes: Node count. If None, uses max endpoint + 1

        Returns:
            SamplingGraph
        """
        edges = [(int(s), int(d)) for s, d in edges]

        if num_nodes is None:
            num_nodes = max((max(s, d) for s, d in edges), default=-1) + 1

        if edges:
            edge_index = torch.tensor(edges, dtype=torch.long).t().contiguous()
        else:
            edge_index = torch.zeros((2, 0), dtype=torch.long)

        return cls(edge_index, num_nodes)

    @classmethod
    def from_networkx(cls, nx_graph: nx.Graph) -> 'SamplingGraph':
        """
        Build a graph from a NetworkX graph.

        Nodes are indexed in the iteration order of nx_graph.nodes().
        Undirected graphs contribute both directions of every edge.

        Args:
            nx_graph: NetworkX Graph or DiGraph

        Returns:
            SamplingGraph
        """
        mapping = {node: idx for idx, node in enumerate(nx_graph.nodes())}

        edges = []
        for u, v in nx_graph.edges():
            edges.append((mapping[u], mapping[v]))
            if not nx_graph.is_directed() and u != v:
                edges.append((mapping[v], mapping[u]))

        return cls.from_edge_list(edges, num_nodes=len(mapping))

    @property
    def num_nodes(self) -> int:
        return self._num_nodes

    @property
    def num_edges(self) -> int:
        return len(self._src)

    @property
    def edge_index(self) -> torch.Tensor:
        """Edges as a [2, num_edges] long tensor, in construction order."""
        if self.num_edges == 0:
            return torch.zeros((2, 0), dtype=torch.long)
        return torch.from_numpy(np.stack([self._src, self._dst]).copy())

    def out_neighbors(self, node: int) -> np.ndarray:
        """Out-neighbors of node in original edge order (read-only view)."""
        return self._out_indices[self._out_indptr[node]:self._out_indptr[node + 1]]

    def in_neighbors(self, node: int) -> np.ndarray:
        """In-neighbors of node in original edge order (read-only view)."""
        return self._in_indices[self._in_indptr[node]:self._in_indptr[node + 1]]

    def out_edge_ids(self, node: int) -> np.ndarray:
        """Positions in edge_index of node's out-edges, aligned with out_neighbors."""
        return self._out_edge_ids[self._out_indptr[node]:self._out_indptr[node + 1]]

    def out_degree(self, node: int) -> int:
        return int(self._out_indptr[node + 1] - self._out_indptr[node])

    def in_degree(self, node: int) -> int:
        return int(self._in_indptr[node + 1] - self._in_indptr[node])

    @property
    def out_degrees(self) -> np.ndarray:
        return self._out_degrees

    @property
    def in_degrees(self) -> np.ndarray:
        return self._in_degrees

    def degrees(self, kind: str = 'out') -> np.ndarray:
        """
        Degree array of the requested kind.

        Args:
            kind: 'out', 'in' or 'total'

        Returns:
            Array of shape [num_nodes]
        """
        if kind == 'out':
            return self.out_degrees
        elif kind == 'in':
            return self.in_degrees
        elif kind == 'total':
            return self._total_degrees
        else:
            raise ValueError(f"Unknown degree kind: {kind}")

    def edges(self) -> List[Tuple[int, int]]:
        """All edges as (source, target) tuples."""
        return list(zip(self._src.tolist(), self._dst.tolist()))

    def to_networkx(self) -> nx.DiGraph:
        """Convert to a NetworkX DiGraph over nodes 0..N-1."""
        graph = nx.DiGraph()
        graph.add_nodes_from(range(self._num_nodes))
        graph.add_edges_from(self.edges())
        return graph

    def __len__(self) -> int:
        return self._num_nodes

    def __repr__(self) -> str:
        return f"SamplingGraph(num_nodes={self.num_nodes}, num_edges={self.num_edges})"
