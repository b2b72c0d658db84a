"""Diagnostics over question banks."""

from .supply import supply_table, unique_supply

__all__ = ["supply_table", "unique_supply"]
