from __future__ import annotations

from datetime import datetime

import pytest


@pytest.fixture
def fixed_now():
    """Mid check-in window on a fixed day (default settings: check-in 10-11)."""
    return datetime(2026, 3, 2, 10, 15, 0)
