"""Threadline: post graph and reaction ledger service."""

__version__ = "0.1.0"
