from __future__ import annotations

import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from sunevents import GlobalPosition


@pytest.fixture
def greenwich() -> GlobalPosition:
    # Nauticalia, Greenwich
    return GlobalPosition.at(51.4810066, 0.0081805)


@pytest.fixture
def salt_lake_city() -> GlobalPosition:
    return GlobalPosition.at(40.60710285372043, -111.85515699873065)


@pytest.fixture
def tokyo() -> GlobalPosition:
    return GlobalPosition.at(35.6762, 139.6503)


@pytest.fixture
def arctic() -> GlobalPosition:
    return GlobalPosition.at(70.0, 34.0)
