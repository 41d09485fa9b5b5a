from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from weatherlux.parsing.classifier import IconCategory


class Record(BaseModel):
    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True
    )


class WeatherRecord(Record):
    city: str | None = None
    coordinates: str | None = None
    temperature_celsius: str | None = None
    feels_like_celsius: str | None = None
    humidity_percent: str | None = None
    pressure_hpa: str | None = None
    description: str | None = None
    wind: str | None = None
    visibility: str | None = None
    sunrise: str | None = None
    sunset: str | None = None


class ForecastItem(Record):
    time: str
    temperature_celsius: str
    feels_like_celsius: str | None = None
    humidity_percent: str | None = None
    description: str


class DayRecord(Record):
    title: str
    items: tuple[ForecastItem, ...] = ()


class ForecastRecord(Record):
    city: str | None = None
    days: tuple[DayRecord, ...] = ()


class CurrentWeatherReport(Record):
    weather: WeatherRecord
    icon: IconCategory


class ForecastReport(Record):
    forecast: ForecastRecord
    day_icons: tuple[IconCategory, ...]
