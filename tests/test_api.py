# tests/test_api.py

import sys
from datetime import date, datetime, timedelta, timezone

import pytest

import tithicalc
from tithicalc import api
from tithicalc.bootstrap import build_registry
from tithicalc.core.errors import EphemerisUnavailableError, OutOfRangeError
from tithicalc.engines.interfaces import FunctionOracle, OracleRegistry

from conftest import LinearElongation, utc


@pytest.fixture
def fresh_registry():
    api.set_registry(build_registry())
    yield
    api.set_registry(build_registry())


def test_continuous_sequence_2020_2025():
    result = tithicalc.find_tithi_in_range(utc(2020, 1, 1), utc(2025, 1, 31), precision=0.001)

    # ~1858 days of roughly 0.984 days per tithi
    assert 1850 < len(result) < 1930
    for prev, cur in zip(result, result[1:]):
        assert (cur.angle - prev.angle) % 360 == 12
        assert cur.index == prev.index % 30 + 1
        # tithi last between about 20 and 27 hours
        assert timedelta(hours=18) < cur.timestamp - prev.timestamp < timedelta(hours=28)
    for t in result:
        assert 1 <= t.index <= 30
        assert t.index == t.angle // 12 + 1


def test_filtered_sequence_2000_2025():
    wanted = {11, 26}
    result = tithicalc.find_tithi_in_range(utc(2000, 1, 1), utc(2025, 1, 31), wanted, 0.001)

    assert result
    assert {t.index for t in result} == wanted
    # one of each per lunation, ~310 lunations
    assert 600 < len(result) < 640
    stamps = [t.timestamp for t in result]
    assert stamps == sorted(stamps)


def test_new_and_full_moon_september_2023():
    result = tithicalc.find_tithi_in_range(date(2023, 9, 14), date(2023, 9, 30), [1, 16])
    assert [t.index for t in result] == [1, 16]

    new, full = result
    assert abs(new.timestamp - utc(2023, 9, 15, 1, 40)) < timedelta(minutes=10)
    assert abs(full.timestamp - utc(2023, 9, 29, 9, 57)) < timedelta(minutes=10)
    assert new.angle == 0 and full.angle == 180


def test_short_range_not_empty():
    result = tithicalc.find_tithi_in_range(utc(2023, 9, 6), utc(2023, 9, 7), precision=0.001)
    assert result
    for t in result:
        assert t.timestamp.tzinfo is not None


def test_find_by_day():
    found = tithicalc.find_tithi_by_day(utc(2023, 9, 7), 0.001)
    assert found
    assert all(f.date() in (date(2023, 9, 6), date(2023, 9, 7), date(2023, 9, 8)) for f in found)
    for t in found:
        angle = tithicalc.angle_between(t)
        assert min(angle % 12, 12 - angle % 12) < 0.01


def test_boundary_index_matches_tithi_at():
    for t in tithicalc.find_tithi_in_range(date(2023, 9, 1), date(2023, 9, 10)):
        assert tithicalc.tithi_at(t.timestamp) == (t.index, t.angle)


def test_angle_between_in_range():
    start = utc(2023, 1, 1)
    for h in range(0, 24 * 40, 7):
        a = tithicalc.angle_between(start + timedelta(hours=h))
        assert 0.0 <= a <= 180.0


def test_naive_and_aware_inputs_agree():
    naive = datetime(2023, 9, 6, 12)
    aware = datetime(2023, 9, 6, 17, 30, tzinfo=timezone(timedelta(hours=5, minutes=30)))
    assert tithicalc.angle_between(naive) == tithicalc.angle_between(aware)


@pytest.mark.parametrize("args", [
    (utc(2023, 9, 6), utc(2023, 9, 6), None, 0.001),
    (utc(2023, 9, 7), utc(2023, 9, 6), None, 0.001),
    (utc(2023, 9, 6), utc(2023, 9, 7), None, -0.001),
    (utc(2023, 9, 6), utc(2023, 9, 7), [0], 0.001),
])
def test_invalid_range_arguments(args):
    with pytest.raises(OutOfRangeError):
        tithicalc.find_tithi_in_range(*args)


def test_errors_are_value_errors():
    with pytest.raises(ValueError):
        tithicalc.find_tithi_in_range(utc(2023, 9, 7), utc(2023, 9, 6))
    with pytest.raises(tithicalc.TithiCalcError):
        tithicalc.find_tithi_by_day(utc(2023, 9, 7), precision=0)


def test_registry_defaults(fresh_registry):
    assert tithicalc.list_ephemerides() == ["de422", "reference"]


def test_register_custom_oracle(fresh_registry):
    oracle = LinearElongation(epoch=utc(2024, 3, 1, 5))
    tithicalc.register_ephemeris("linear", oracle)
    assert tithicalc.get_oracle("linear") is oracle

    result = tithicalc.find_tithi_in_range(date(2024, 3, 1), date(2024, 3, 2), ephemeris="linear")
    assert result[0].index == 1

    with pytest.raises(KeyError):
        tithicalc.register_ephemeris("linear", oracle)
    tithicalc.register_ephemeris("linear", lambda: oracle, overwrite=True)
    assert tithicalc.get_oracle("linear") is oracle


def test_unknown_ephemeris(fresh_registry):
    with pytest.raises(KeyError):
        tithicalc.find_tithi_by_day(date(2024, 3, 1), ephemeris="nope")


def test_de422_without_extras(fresh_registry, monkeypatch):
    monkeypatch.setitem(sys.modules, "jplephem", None)
    with pytest.raises(EphemerisUnavailableError):
        tithicalc.get_oracle("de422")


def test_make_scanner_with_config(fresh_registry):
    cfg = tithicalc.SearchConfig(angular_step=24)
    scanner = tithicalc.make_scanner(config=cfg)
    assert scanner.config.tithi_count == 15
    with pytest.raises(OutOfRangeError):
        tithicalc.make_scanner(config=tithicalc.SearchConfig(angular_step=25))


def test_very_fine_precision_converges():
    result = tithicalc.find_tithi_in_range(utc(2023, 1, 1), utc(2023, 1, 4), precision=1e-9)
    assert len(result) >= 3
    for prev, cur in zip(result, result[1:]):
        assert (cur.angle - prev.angle) % 360 == 12


def test_registry_wraps_plain_angle_function():
    reg = OracleRegistry()
    reg.register("flat", lambda instant: 42)
    oracle = reg.get("flat")
    assert isinstance(oracle, FunctionOracle)
    assert oracle.angle(utc(2024, 1, 1)) == 42.0


def test_registry_rejects_non_oracles():
    reg = OracleRegistry()
    with pytest.raises(TypeError):
        reg.register("number", 5)

    reg.register("broken", lambda: "not an oracle")
    with pytest.raises(TypeError):
        reg.get("broken")
