"""
riveripam: per-node IP address management for container networking.

The node hands out workload addresses from its allocation prefix and keeps
addresses already routed by the host out of the pool.
"""

__version__ = "0.1.0"
