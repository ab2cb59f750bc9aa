"""Shared utilities for qb-lint."""
