# src/threadline/services/__init__.py
"""Business logic services for the Threadline application."""
