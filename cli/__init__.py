"""CLI package for Library Ledger"""
from .main import cli

__all__ = ['cli']
