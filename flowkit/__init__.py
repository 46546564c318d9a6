"""Hierarchical flow-control runtime and API boundary modules."""
