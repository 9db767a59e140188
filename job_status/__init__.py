"""
Job status tracking engine.

Records the lifecycle of queued background jobs (queued, executing,
finished, failed, retrying) with progress counters, input/output
snapshots and an append-only history of status changes.
"""

__version__ = "1.0.0"
