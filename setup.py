"""
Setup script for graph sampling package.
"""

from setuptools import setup, find_packages

setup(
    name="graph_sampling",
    version="1.0.0",
    description="Round-based random-walk graph sampling with induced subgraph extraction",
    author="Graph Sampling Team",
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={"config": ["*.yaml"]},
    python_requires=">=3.9",
    install_requires=[
        "torch>=2.0.0",
        "networkx>=3.0",
        "numpy>=1.25.0",
        "pyyaml>=6.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.3.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "graph-sample=scripts.sample_graph:main",
        ],
    },
)
