"""Shared utilities for entity-metadata."""
