from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


# --- Engine value types ---


class AirQualityReading(BaseModel):
    model_config = ConfigDict(frozen=True)

    aqi: float | None = None
    pm2_5: float | None = None
    pm10: float | None = None
    no2: float | None = None
    o3: float | None = None


class AQICategory(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str
    tier: int = Field(ge=0, le=5)
    color: str = Field(description="Opaque styling token for the category badge.")
    progress_color: str = Field(description="Opaque styling token for the gauge fill.")


class ForecastPoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    time_label: int | str
    aqi: float | None = None
    pm2_5: float | None = None
    pm10: float | None = None


class PollenPoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    day_label: str
    grass: float | None = None
    tree: float | None = None
    weed: float | None = None


class HealthProfile(BaseModel):
    model_config = ConfigDict(frozen=True)

    has_respiratory_conditions: bool = False
    has_allergies: bool = False
    uv_sensitivity: float = Field(default=0, ge=0, le=5)


class UVReading(BaseModel):
    model_config = ConfigDict(frozen=True)

    index: float | None = None
    category: str | None = None


class TemperatureReading(BaseModel):
    model_config = ConfigDict(frozen=True)

    current: float | None = None
    is_hot: bool = False
    is_cold: bool = False
    recommendations: list[str] = Field(default_factory=list)


class PollutantGauge(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: str
    label: str
    unit: str = "μg/m³"
    value: float | None = None
    display: str
    percent: float = Field(ge=0, le=100)


class AdvisoryBlock(BaseModel):
    headline: str
    bullets: list[str] = Field(default_factory=list)
    notice: str | None = None
    badge: str | None = None
    gauge: float | None = None


class Alert(BaseModel):
    kind: str
    title: str
    message: str
    severity: str = "info"


class AdvisoryResult(BaseModel):
    respiratory: AdvisoryBlock
    uv: AdvisoryBlock
    temperature: AdvisoryBlock
    alerts: list[Alert] = Field(default_factory=list)


# --- Raw payload boundary ---
# Each payload model accepts the upstream JSON shape, tolerates missing sections
# and converts to an engine value type in a single step.


class CurrentConditions(BaseModel):
    model_config = ConfigDict(extra="ignore")

    aqi: float | None = None
    pm2_5: float | None = None
    pm10: float | None = None
    no2: float | None = None
    o3: float | None = None


class CurrentConditionsPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    current: CurrentConditions | None = None

    def to_reading(self) -> AirQualityReading:
        if self.current is None:
            return AirQualityReading()
        return AirQualityReading(**self.current.model_dump())


class HourlySeries(BaseModel):
    model_config = ConfigDict(extra="ignore")

    time: list[str] = Field(default_factory=list)
    european_aqi: list[float | None] = Field(default_factory=list)
    pm2_5: list[float | None] = Field(default_factory=list)
    pm10: list[float | None] = Field(default_factory=list)


class HourlyForecastPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    hourly: HourlySeries | None = None


class DailyPollenSeries(BaseModel):
    model_config = ConfigDict(extra="ignore")

    time: list[str] = Field(default_factory=list)
    grass_pollen: list[float | None] = Field(default_factory=list)
    tree_pollen: list[float | None] = Field(default_factory=list)
    weed_pollen: list[float | None] = Field(default_factory=list)


class DailyPollenPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    daily: DailyPollenSeries | None = None


class UVSection(BaseModel):
    model_config = ConfigDict(extra="ignore")

    index: float | None = None
    category: str | None = None


class TemperatureSection(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    current: float | None = None
    is_hot: bool = Field(default=False, alias="isHot")
    is_cold: bool = Field(default=False, alias="isCold")
    recommendations: list[str] | None = None


class RecommendationsPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    uv: UVSection | None = None
    temperature: TemperatureSection | None = None

    def to_uv(self) -> UVReading:
        if self.uv is None:
            return UVReading()
        return UVReading(index=self.uv.index, category=self.uv.category)

    def to_temperature(self) -> TemperatureReading:
        section = self.temperature
        if section is None:
            return TemperatureReading()
        return TemperatureReading(
            current=section.current,
            is_hot=section.is_hot,
            is_cold=section.is_cold,
            recommendations=list(section.recommendations or []),
        )


class HealthFlags(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    has_respiratory_conditions: bool | None = Field(default=None, alias="hasRespiratoryConditions")
    has_allergies: bool | None = Field(default=None, alias="hasAllergies")


class EnvironmentalSensitivities(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    uv_sensitivity: float | None = Field(default=None, alias="uvSensitivity")


class UserProfilePayload(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    health_profile: HealthFlags | None = Field(default=None, alias="healthProfile")
    environmental_sensitivities: EnvironmentalSensitivities | None = Field(
        default=None,
        alias="environmentalSensitivities",
    )

    def to_profile(self) -> HealthProfile:
        flags = self.health_profile or HealthFlags()
        sensitivities = self.environmental_sensitivities or EnvironmentalSensitivities()
        uv_sensitivity = sensitivities.uv_sensitivity or 0
        return HealthProfile(
            has_respiratory_conditions=bool(flags.has_respiratory_conditions),
            has_allergies=bool(flags.has_allergies),
            uv_sensitivity=max(0.0, min(5.0, uv_sensitivity)),
        )


class AdvisoryRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    current: CurrentConditionsPayload | None = None
    forecast: HourlyForecastPayload | None = None
    recommendations: RecommendationsPayload | None = None
    pollen: DailyPollenPayload | None = None
    profile: UserProfilePayload | None = None
