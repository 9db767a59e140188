"""
Application services.

Exports:
  - JobStatusService: Read-side status reporting
"""

from job_status.application.services.job_status_service import JobStatusService

__all__ = ["JobStatusService"]
