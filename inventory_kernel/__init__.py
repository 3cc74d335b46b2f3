"""
Inventory Kernel - in-memory inventory state machine.

Tracks items, categories and an append-only transaction log with:
- Stable item identity (UUID per item)
- Atomic mutations (all-or-nothing per operation)
- Low-stock alerts evaluated on every state change
- Read-side projections for dashboards, search, CSV export and item ages
"""

__version__ = "0.1.0"
