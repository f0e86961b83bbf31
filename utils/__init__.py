"""Utility modules for cross-cutting concerns."""

from utils.timezone import now_utc, epoch_millis, parse_date
