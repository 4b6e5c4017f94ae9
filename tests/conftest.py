# tests/conftest.py
from __future__ import annotations

import pytest

from wireless_coord.config_models import (
    Range,
    Frequency,
    CoordinationSettings,
    CoordinationRequest,
)


@pytest.fixture
def default_settings() -> CoordinationSettings:
    return CoordinationSettings()


@pytest.fixture
def clean_pair() -> list[Frequency]:
    """
    Two mics 10 MHz apart: IM products land at 480/490/520/530 MHz,
    far from both carriers.
    """
    return [
        Frequency(value=500.0, kind="mic", label="Vox 1"),
        Frequency(value=510.0, kind="mic", label="Vox 2"),
    ]


@pytest.fixture
def simple_request() -> CoordinationRequest:
    """
    Small request: 4 mics + 4 IEMs, Nashville-style channel set that blocks
    the bottom of the IEM band (Ch 28-32 = 554-584 MHz).
    """
    return CoordinationRequest(
        mic_count=4,
        iem_count=4,
        active_channels=[28, 29, 30, 31, 32],
        mic_band=Range(470.0, 550.0),
        iem_band=Range(560.0, 608.0),
        settings=CoordinationSettings(),
        description="simple test request",
    )
