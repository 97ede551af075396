# tests/test_probe.py

from datetime import timedelta

import pytest

from tithicalc.core.types import SearchConfig
from tithicalc.engines._probe import direction, fold, index_and_angle, near_boundary, normalized

from conftest import LinearElongation, utc


def test_direction_waxing_and_waning(linear):
    # elongation 30 -> 40: separation grows
    assert direction(linear, linear.at(30), linear.at(40)) == 1
    # elongation 200 -> 210: separation shrinks from 160 to 150
    assert direction(linear, linear.at(200), linear.at(210)) == -1


def test_direction_across_folds(linear):
    # 178 -> 186 reads 178 -> 174: past the full moon, shrinking
    assert direction(linear, linear.at(178), linear.at(186)) == -1
    # 355 -> 363 reads 5 -> 3: end is closer to 0
    assert direction(linear, linear.at(355), linear.at(363)) == -1
    # 358 -> 366 reads 2 -> 6: growing again after new moon
    assert direction(linear, linear.at(358), linear.at(366)) == 1


@pytest.mark.parametrize("angle, step, expected", [
    (0.0, 12, 0.0),
    (11.5, 12, 11.5),
    (12.0, 12, 0.0),
    (179.9, 12, 11.9),
    (180.0, 12, 0.0),
    (25.0, 6, 1.0),
])
def test_fold(angle, step, expected):
    assert fold(angle, step) == pytest.approx(expected, abs=1e-9)


def test_normalized_reverse(linear):
    t = linear.at(50)  # angle 50
    assert normalized(linear, t, False, 12) == pytest.approx(2.0, abs=1e-9)
    assert normalized(linear, t, True, 12) == pytest.approx(10.0, abs=1e-9)


def test_normalized_rises_toward_boundary_when_waning(linear):
    # waning: raw angle 158 -> 157 -> 156.5; reversed coordinate 10 -> 11 -> 11.5
    values = [normalized(linear, linear.at(e), True, 12) for e in (202.0, 203.0, 203.5)]
    assert values == sorted(values)
    assert values[-1] == pytest.approx(11.5, abs=1e-9)


def test_near_boundary():
    assert near_boundary(0.0005, 0.001, 12)
    assert near_boundary(11.9995, 0.001, 12)
    assert not near_boundary(0.002, 0.001, 12)
    assert not near_boundary(6.0, 0.001, 12)


@pytest.mark.parametrize("elong, index, angle", [
    (0.0, 1, 0),
    (24.0, 3, 24),
    (168.0, 15, 168),
    (180.0, 16, 180),
    (192.0, 17, 192),
    (348.0, 30, 348),
])
def test_index_and_angle(linear, elong, index, angle):
    assert index_and_angle(linear, linear.at(elong), SearchConfig()) == (index, angle)


def test_index_and_angle_just_before_new_moon():
    # a few seconds before the new moon the direction over the next hour is
    # already growing, so it maps to tithi 1 rather than 360
    oracle = LinearElongation(epoch=utc(2024, 3, 1))
    t = oracle.epoch - timedelta(seconds=5)
    assert index_and_angle(oracle, t, SearchConfig()) == (1, 0)


def test_index_and_angle_alternate_step(linear):
    cfg = SearchConfig(angular_step=6)
    assert index_and_angle(linear, linear.at(354.0), cfg) == (60, 354)
    assert index_and_angle(linear, linear.at(30.0), cfg) == (6, 30)


class _Constant:
    def angle(self, t):
        return 42.0


def test_direction_tie_counts_as_growing():
    t = utc(2024, 1, 1)
    assert direction(_Constant(), t, t + timedelta(hours=1)) == 1
