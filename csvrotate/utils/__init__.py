"""Shared types, errors and filesystem helpers."""
