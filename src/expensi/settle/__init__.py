"""Debt simplification and balance aggregation."""
