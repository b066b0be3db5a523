import datetime as dt

import pytest


@pytest.fixture
def now() -> dt.datetime:
    return dt.datetime(2024, 6, 1, 12, 0, tzinfo=dt.timezone.utc)


@pytest.fixture
def days_ago(now):
    def _days_ago(days: float) -> dt.datetime:
        return now - dt.timedelta(days=days)

    return _days_ago
