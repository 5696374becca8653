"""
Command-line interface for procbench.
"""

from .main import main_cli

__all__ = ["main_cli"]
