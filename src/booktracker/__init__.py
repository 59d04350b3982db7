"""Book tracker.

A reading list and a read list backed by a single SQL table, with live
queries that push fresh snapshots to observers after every committed write.
"""

__version__ = "0.1.0"
