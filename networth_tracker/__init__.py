"""
Net Worth Tracker - Source Package

A personal net-worth tracker: record assets and liabilities, see the
computed net worth, capture snapshots and review the trend over time.

DESIGN PRINCIPLES:
1. In-memory state is authoritative
2. Totals are always derived, never stored (except inside snapshots)
3. Snapshots are frozen copies, never live references
4. Persistence failures never reach the user
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Net Worth Tracker Team"
