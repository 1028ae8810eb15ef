"""Boundary layer: adapters to external systems (relational storage)."""
