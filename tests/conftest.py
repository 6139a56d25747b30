from __future__ import annotations

from datetime import datetime

import pytest


@pytest.fixture
def fixed_now() -> datetime:
    # 2024-05-01 09:10 UTC, ten minutes into a 09:00 shift
    return datetime(2024, 5, 1, 9, 10, 0)
