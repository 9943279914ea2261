"""Pytest configuration and fixtures for all tests."""

from pathlib import Path
from unittest.mock import patch

import pytest

from airspace.core.logging_system import shutdown_logging

ABERDEEN_CTA = """
airspace:
- name: ABERDEEN CTA
  id: aberdeen-cta
  type: CTA
  class: D
  geometry:
  - seqno: 1
    upper: FL115
    lower: 1500 ft
    boundary:
    - line:
      - 572153N 0015835W
      - 572100N 0015802W
      - 572100N 0023356W
    - arc:
        dir: cw
        radius: 10 nm
        centre: 571834N 0021602W
        to: 572153N 0015835W
  - seqno: 2
    upper: FL115
    lower: 1500 ft
    boundary:
    - line:
      - 571522N 0015428W
      - 570845N 0015019W
    - arc:
        dir: cw
        radius: 10 nm
        centre: 570531N 0020740W
        to: 570214N 0022458W
    - line:
      - 570850N 0022913W
    - arc:
        dir: ccw
        radius: 10 nm
        centre: 571207N 0021152W
        to: 571522N 0015428W
  - seqno: 3
    upper: FL115
    lower: 3000 ft
    boundary:
    - line:
      - 572100N 0023356W
      - 570015N 0025056W
      - 565433N 0023557W
      - 565533N 0020635W
    - arc:
        dir: cw
        radius: 10 nm
        centre: 570531N 0020740W
        to: 570214N 0022458W
    - line:
      - 571520N 0023326W
    - arc:
        dir: cw
        radius: 10 nm
        centre: 571834N 0021602W
        to: 572100N 0023356W
"""

DROP_ZONES = """
airspace:
- name: Drop Zone Alpha
  type: OTHER
  localtype: DZ
  geometry:
  - seqno: 1
    upper: FL150
    lower: SFC
    boundary:
    - circle:
        radius: 1.5 nm
        centre: 520000N 0010000W
- name: HINTON GLIDING
  type: OTHER
  localtype: GLIDER
  geometry:
  - upper: 2000 ft
    boundary:
    - circle:
        radius: 2 nm
        centre: 520500N 0011000W
"""


@pytest.fixture(autouse=True)
def isolated_log_dir(tmp_path: Path):
    """Keep log files written by the logging system inside the test's tmp dir."""
    with patch(
        "airspace.core.logging_system.get_platform_log_dir", return_value=tmp_path / "logs"
    ):
        yield tmp_path / "logs"
    shutdown_logging()


@pytest.fixture
def aberdeen_yaml() -> str:
    """Reference ABERDEEN CTA record with three line/arc volumes."""
    return ABERDEEN_CTA


@pytest.fixture
def drop_zone_yaml() -> str:
    """Two circular records without explicit IDs."""
    return DROP_ZONES
