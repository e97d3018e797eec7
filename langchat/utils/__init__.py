"""Shared utilities: events and logging."""
