"""
Test Suite for Graph Sampling.

This package contains tests for all modules:
- test_graph.py: Adjacency view and induced-subgraph extraction
- test_walks.py: Candidate resolvers, step policies and selection policies
- test_engine.py: Run configuration, round coordination and the factory
- test_integration.py: End-to-end sampling pipeline and utilities
"""
