import pytest

from workbench.sysmon.util import CPUState, convert_to_time, open_stream, progress_bar


def _bar(text):
    return text[3:53]


@pytest.mark.parametrize("seconds", [0, 59, 60, 3599, 3661, 86400, 123456])
def test_convert_to_time_round_trip(seconds):
    hours, minutes, secs = (int(part) for part in convert_to_time(seconds).split(":"))
    assert hours * 3600 + minutes * 60 + secs == seconds
    assert 0 <= minutes < 60
    assert 0 <= secs < 60


def test_convert_to_time_no_padding():
    assert convert_to_time(3661) == "1:1:1"


@pytest.mark.parametrize("percent", ["0", "12.345678", "50", "100", "abc"])
def test_progress_bar_layout(percent):
    result = progress_bar(percent)
    assert result.startswith("0% ")
    assert len(_bar(result)) == 50
    assert set(_bar(result)) <= {"|", " "}
    assert result.endswith(" " + percent[:5] + " /100%")


def test_progress_bar_half():
    assert _bar(progress_bar("50")).count("|") == 26


def test_progress_bar_full():
    assert " " not in _bar(progress_bar("100"))


def test_progress_bar_invalid_matches_zero():
    assert _bar(progress_bar("abc")) == _bar(progress_bar("0"))


def test_progress_bar_monotonic():
    counts = [_bar(progress_bar(str(p))).count("|") for p in range(0, 101, 5)]
    assert counts == sorted(counts)


def test_progress_bar_accepts_float():
    assert _bar(progress_bar(50.0)) == _bar(progress_bar("50"))


def test_progress_bar_overflow_is_zero():
    assert _bar(progress_bar("1e999")) == _bar(progress_bar("0"))


def test_open_stream_reads_file(tmp_path):
    path = tmp_path / "stat"
    path.write_text("cpu 1 2 3 4 5 6 7 8 9 10\n")
    with open_stream(str(path)) as stream:
        values = stream.readline().split()
    assert values[CPUState.USER] == "1"
    assert values[CPUState.GUEST_NICE] == "10"


def test_open_stream_missing_raises(tmp_path):
    with pytest.raises(ProcessLookupError):
        open_stream(str(tmp_path / "no-such-file"))