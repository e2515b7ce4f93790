"""Handoff — agent role selection, delegation chains and dependency resolution."""

__version__ = "0.1.0"
