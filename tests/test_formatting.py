import pytest

from tubenotes.utils.formatting import format_count, format_duration


@pytest.mark.parametrize(
    ("count", "expected"),
    [("999", "999"), ("1500", "1.5K"), (1_000_000, "1.0M"), ("2345678", "2.3M")],
)
def test_format_count(count, expected) -> None:
    assert format_count(count) == expected


@pytest.mark.parametrize(
    ("duration", "expected"),
    [
        ("PT1H2M3S", "1:02:03"),
        ("PT4M5S", "4:05"),
        ("PT45S", "0:45"),
        ("PT2H", "2:00:00"),
        ("P1D", "P1D"),
    ],
)
def test_format_duration(duration, expected) -> None:
    assert format_duration(duration) == expected
