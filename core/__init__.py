"""Shared application infrastructure: errors, API helpers, startup."""
