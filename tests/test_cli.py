# tests/test_cli.py

from tithicalc.cli import main


def test_range_lists_tithi(capsys):
    assert main(["range", "2023-09-14", "2023-09-16", "--index", "1"]) == 0
    lines = capsys.readouterr().out.strip().splitlines()
    assert len(lines) == 1
    index, stamp, angle = lines[0].split()
    assert (index, angle) == ("1", "0")
    assert stamp.startswith("2023-09-15T01:")


def test_day_prints_instants(capsys):
    assert main(["day", "2023-09-07"]) == 0
    out = capsys.readouterr().out.strip().splitlines()
    assert out
    assert all(line.startswith("2023-09-0") for line in out)


def test_angle(capsys):
    assert main(["angle", "2023-09-29T09:57:00+00:00"]) == 0
    out = capsys.readouterr().out
    assert "Tithi index              = 16" in out


def test_bad_range_exits_with_error(capsys):
    assert main(["range", "2023-09-16", "2023-09-14"]) == 2
    assert "error" in capsys.readouterr().err


def test_unknown_ephemeris(capsys):
    assert main(["day", "2023-09-07", "--ephemeris", "nope"]) == 2
    assert "Unknown ephemeris" in capsys.readouterr().err
