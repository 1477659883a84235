from envhealth.schemas import HealthProfile, TemperatureReading, UVReading
from envhealth.services.classifier import classify
from envhealth.services.recommender import RESPIRATORY_PRECAUTIONS, recommend


def _recommend(aqi: float | None = 80, **profile_flags) -> object:
    return recommend(
        classify(aqi),
        aqi,
        UVReading(index=6, category="High"),
        TemperatureReading(current=31.0, is_hot=True, recommendations=["Stay hydrated", "Avoid midday sun"]),
        HealthProfile(**profile_flags),
    )


def test_respiratory_conditions_always_get_precautions() -> None:
    for aqi in (10, 120, 320):
        result = _recommend(aqi, has_respiratory_conditions=True)
        assert result.respiratory.bullets == list(RESPIRATORY_PRECAUTIONS)
        assert f"current AQI of {aqi}" in result.respiratory.headline


def test_no_respiratory_bullets_without_condition() -> None:
    result = _recommend(200)

    assert result.respiratory.bullets == []
    assert "minimal respiratory risks" in result.respiratory.headline
    assert result.alerts == []


def test_allergy_alert_requires_aqi_above_fifty() -> None:
    assert [alert.kind for alert in _recommend(51, has_allergies=True).alerts] == ["allergy"]
    assert _recommend(50, has_allergies=True).alerts == []
    assert _recommend(None, has_allergies=True).alerts == []


def test_alerts_combine_additively() -> None:
    result = _recommend(180, has_allergies=True, has_respiratory_conditions=True)
    assert [alert.kind for alert in result.alerts] == ["respiratory", "allergy"]
    assert result.alerts[0].severity == "warning"


def test_uv_sensitivity_boundary_switches_spf() -> None:
    high = _recommend(uv_sensitivity=4).uv
    standard = _recommend(uv_sensitivity=3).uv

    assert high.bullets[0] == "Use SPF 50+ sunscreen"
    assert high.notice == "With your high UV sensitivity, extra protection is needed."
    assert standard.bullets[0] == "Use SPF 30+ sunscreen"
    assert standard.notice == "Recommended sun protection measures:"
    assert high.bullets[1:] == standard.bullets[1:]
    assert len(high.bullets) == 4


def test_uv_headline_and_gauge() -> None:
    block = _recommend().uv
    assert block.headline == "6 - High"
    assert round(block.gauge, 2) == 54.55


def test_temperature_headline_priority() -> None:
    both = recommend(classify(10), 10, None, TemperatureReading(is_hot=True, is_cold=True), None).temperature
    cold = recommend(classify(10), 10, None, TemperatureReading(current=2, is_cold=True), None).temperature
    mild = recommend(classify(10), 10, None, TemperatureReading(current=21.5), None).temperature

    assert both.headline.startswith("High temperature alert")
    assert cold.headline == "Cooler temperature - stay warm:"
    assert cold.badge == "2°C"
    assert mild.headline == "Comfortable temperature range today:"
    assert mild.badge == "21.5°C"


def test_temperature_recommendations_pass_through_in_order() -> None:
    block = _recommend().temperature
    assert block.bullets == ["Stay hydrated", "Avoid midday sun"]


def test_missing_inputs_degrade_to_placeholders() -> None:
    result = recommend(classify(None), None, None, None, None)

    assert result.uv.headline == "N/A - N/A"
    assert result.uv.gauge == 0.0
    assert result.uv.bullets[0] == "Use SPF 30+ sunscreen"
    assert result.temperature.badge == "N/A°C"
    assert result.temperature.bullets == []
    assert result.respiratory.bullets == []
    assert result.alerts == []


def test_recommend_is_idempotent_and_does_not_mutate_profile() -> None:
    profile = HealthProfile(has_allergies=True, uv_sensitivity=5)
    uv = UVReading(index=9, category="Very High")
    first = recommend(classify(275), 275, uv, None, profile)
    second = recommend(classify(275), 275, uv, None, profile)

    assert first == second
    assert profile == HealthProfile(has_allergies=True, uv_sensitivity=5)
