"""Shared types, configuration, and logging helpers."""
