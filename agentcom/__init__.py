"""Instruction files, team templates, scaffold rendering and parsing helpers for AI coding agents."""

__version__ = "0.1.0"