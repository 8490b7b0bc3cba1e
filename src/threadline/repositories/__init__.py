"""Repositories wrapping SQL access for the service layer."""
