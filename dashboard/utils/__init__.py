"""Utility functions for the invoice dashboard."""

from .activity import flush_activity_logs, log_activity

__all__ = [
    "flush_activity_logs",
    "log_activity",
]
