#!/usr/bin/env python3
"""
Graph Sampling Script.

This script runs one sampling job:
1. Loads a graph (edge list) or creates a random one
2. Optionally restricts it to its largest component
3. Samples it with the configured algorithm
4. Extracts the induced subgraph
5. Saves subgraph, sample and run logs to disk

Usage:
    python scripts/sample_graph.py --config config/default.yaml
    python scripts/sample_graph.py --edge-list graph.txt --algorithm random_stroll --target 0.2
"""

import argparse
import json
import sys
import time
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import networkx as nx
from config import load_config
from graph_sampling.graph import SamplingGraph, SubgraphExtractor
from graph_sampling.engine import (
    RoundCoordinator,
    SamplingConfig,
    SamplingLogger,
    available_algorithms,
    build_from_config,
)
from graph_sampling.utils import compute_graph_statistics, largest_component_nodes


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description='Sample a graph with round-based walkers')

    parser.add_argument(
        '--config', type=str, default=None,
        help='Path to configuration file (default: config/default.yaml)'
    )
    parser.add_argument(
        '--edge-list', type=str, default=None,
        help='Path to a whitespace-separated edge list'
    )
    parser.add_argument(
        '--algorithm', type=str, default=None, choices=available_algorithms(),
        help='Sampling algorithm (overrides config)'
    )
    parser.add_argument(
        '--target', type=float, default=None,
        help='Target fraction of nodes to sample (overrides config)'
    )
    parser.add_argument(
        '--walkers', type=int, default=None,
        help='Number of walkers (overrides config)'
    )
    parser.add_argument(
        '--seed', type=int, default=None,
        help='Random seed (overrides config)'
    )
    parser.add_argument(
        '--fast', action='store_true',
        help='Memoize candidate neighborhoods during the run'
    )
    parser.add_argument(
        '--output-dir', type=str, default=None,
        help='Output directory for the sample'
    )
    parser.add_argument(
        '--verbose', action='store_true',
        help='Print per-round progress'
    )

    return parser.parse_args()


def load_graph(args, graph_config) -> SamplingGraph:
    """Load the edge list or generate a random graph."""
    if args.edge_list:
        print(f"  Loading from: {args.edge_list}")
        nx_graph = nx.read_edgelist(
            args.edge_list, nodetype=int,
            create_using=nx.DiGraph if graph_config.get('directed', False) else nx.Graph
        )
    else:
        num_nodes = graph_config.get('num_nodes', 500)
        avg_degree = graph_config.get('avg_degree', 5)
        print(f"  Creating random graph: {num_nodes} nodes, average degree {avg_degree}")
        nx_graph = nx.gnm_random_graph(
            num_nodes, num_nodes * avg_degree // 2,
            seed=graph_config.get('seed', 42),
            directed=graph_config.get('directed', False)
        )

    return SamplingGraph.from_networkx(nx_graph)


def main():
    """Main sampling function."""
    args = parse_args()

    print("=" * 60)
    print("Graph Sampling")
    print("=" * 60)

    # Load config
    config = load_config(args.config)
    sampling_values = dict(config.get('sampling', {}))
    graph_config = config.get('graph', {})
    output_config = config.get('output', {})

    overrides = {
        'algorithm_id': args.algorithm,
        'target_fraction': args.target,
        'walker_count': args.walkers,
        'seed': args.seed,
    }
    sampling_values.update({k: v for k, v in overrides.items() if v is not None})
    if args.fast:
        sampling_values['fast'] = True
    sampling_config = SamplingConfig.from_dict(sampling_values)

    output_dir = Path(args.output_dir or output_config.get('dir', 'data/samples'))
    output_dir.mkdir(parents=True, exist_ok=True)

    # Step 1: Load or create graph
    print("\n[1/4] Loading/creating graph...")
    start_time = time.time()

    graph = load_graph(args, graph_config)
    print(f"  Nodes: {graph.num_nodes}, Edges: {graph.num_edges}")

    if graph_config.get('largest_component', False):
        component = largest_component_nodes(graph)
        graph = SubgraphExtractor(graph).extract(component).to_graph()
        print(f"  Largest component: {graph.num_nodes} nodes, {graph.num_edges} edges")

    print(f"  Done in {time.time() - start_time:.2f}s")

    # Step 2: Sample
    print(f"\n[2/4] Sampling with {sampling_config.algorithm_id}...")
    start_time = time.time()

    resolver, walker, sampler, sampling_config = build_from_config(sampling_config)
    coordinator = RoundCoordinator(resolver, walker, sampler, verbose=args.verbose)
    logger = SamplingLogger(
        log_dir=str(output_dir / 'logs'),
        log_every=output_config.get('log_every', 10),
        verbose=args.verbose
    )
    result = coordinator.run(graph, sampling_config, logger=logger)

    print(f"  Status: {result.status.value}")
    print(f"  Sampled {len(result)} nodes ({result.coverage:.1%}) in {result.rounds} rounds")
    if result.retired:
        print(f"  Retired walkers: {len(result.retired)}")
    print(f"  Done in {time.time() - start_time:.2f}s")

    # Step 3: Extract subgraph
    print("\n[3/4] Extracting induced subgraph...")
    start_time = time.time()

    subgraph = SubgraphExtractor(graph).extract(result.sample)

    print(f"  Subgraph: {subgraph.num_nodes} nodes, {subgraph.num_edges} edges")
    print(f"  Done in {time.time() - start_time:.2f}s")

    # Step 4: Save
    print("\n[4/4] Saving sample...")

    subgraph.save(str(output_dir / 'subgraph.pt'))

    stats = compute_graph_statistics(subgraph.to_graph())
    stats.pop('degree_histogram')
    metadata = {
        'config': sampling_config.to_dict(),
        'status': result.status.value,
        'rounds': result.rounds,
        'coverage': result.coverage,
        'original_nodes': graph.num_nodes,
        'original_edges': graph.num_edges,
        'subgraph': stats,
    }
    with open(output_dir / 'metadata.json', 'w') as f:
        json.dump(metadata, f, indent=2)

    logger.save_final({'status': result.status.value, 'sample_size': len(result)})

    print(f"\nAll data saved to: {output_dir}")

    print("\n" + "=" * 60)
    print("Sampling complete!")
    print("=" * 60)


if __name__ == '__main__':
    main()
