"""Shared, deterministic timestamps for tests."""

from datetime import UTC, datetime


# Fixed timestamp so card ordering does not depend on the clock
FIXED_NOW = datetime(2017, 6, 13, 0, 0, 0, tzinfo=UTC)
