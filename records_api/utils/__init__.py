"""Shared helpers that carry no database or HTTP dependencies."""
