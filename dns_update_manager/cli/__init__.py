"""
Command line interface for DNS Update Manager.
"""

from .main import main

__all__ = ["main"]
