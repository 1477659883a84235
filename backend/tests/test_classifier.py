import pytest

from envhealth.services.classifier import (
    aqi_gauge_percent,
    classify,
    describe_general_population,
    display_value,
)


@pytest.mark.parametrize(
    ("aqi", "tier", "label"),
    [
        (0, 0, "Good"),
        (50, 0, "Good"),
        (51, 1, "Moderate"),
        (100, 1, "Moderate"),
        (101, 2, "Unhealthy for Sensitive Groups"),
        (150, 2, "Unhealthy for Sensitive Groups"),
        (151, 3, "Unhealthy"),
        (200, 3, "Unhealthy"),
        (201, 4, "Very Unhealthy"),
        (300, 4, "Very Unhealthy"),
        (301, 5, "Hazardous"),
        (999, 5, "Hazardous"),
    ],
)
def test_classify_breakpoints_have_no_gaps(aqi: int, tier: int, label: str) -> None:
    category = classify(aqi)
    assert category.tier == tier
    assert category.label == label


def test_classify_treats_missing_and_negative_as_good() -> None:
    assert classify(None).tier == 0
    assert classify(-12).label == "Good"


def test_classify_fractional_values_between_breakpoints() -> None:
    assert classify(50.5).tier == 1
    assert classify(300.1).tier == 5


def test_classify_is_deterministic_and_carries_styling_tokens() -> None:
    first = classify(275)
    second = classify(275)
    assert first == second
    assert first.label == "Very Unhealthy"
    assert first.tier == 4
    assert first.color == "bg-purple-100 text-purple-800"
    assert first.progress_color == "bg-purple-500"


def test_general_population_narrative_bands() -> None:
    assert "little or no risk" in describe_general_population(20)
    assert "moderate health concern" in describe_general_population(100)
    assert "sensitive groups may experience health effects" in describe_general_population(140)
    assert describe_general_population(151).startswith("Everyone may begin")
    assert describe_general_population(None) == describe_general_population(0)


def test_aqi_gauge_percent_saturates() -> None:
    assert aqi_gauge_percent(None) == 0.0
    assert aqi_gauge_percent(150) == 50.0
    assert aqi_gauge_percent(450) == 100.0
    assert aqi_gauge_percent(-5) == 0.0


def test_display_value_placeholder_and_formatting() -> None:
    assert display_value(None) == "N/A"
    assert display_value(0) == "0"
    assert display_value(42.0) == "42"
    assert display_value(7.5) == "7.5"
    assert display_value(12.345, digits=1) == "12.3"
