"""
Vehicle Ledger - Identity and Validation Layer

Shared utilities for a vehicle expense, fuel and income tracker.

DESIGN PRINCIPLES:
1. Records may come from the database (`_id`) or the client (`id`);
   both are read through one canonical string form
2. Malformed vehicles are repaired, never rejected, and every repair is audited
3. Entry payloads fail early on schema errors and warn on odd values
4. Audit storage is swappable
"""

__version__ = "1.0.0"
__author__ = "Vehicle Ledger Team"
