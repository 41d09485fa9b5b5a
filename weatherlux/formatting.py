"""Render OpenWeatherMap payloads as rich text reports.

The output is the same text the report backend emits, so it can be handed to
``CurrentWeatherParser`` and ``ForecastParser`` unchanged.
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from weatherlux.parsing import markers

FORECAST_ENTRIES = 40
ENTRIES_PER_DAY = 8

ICON_EMOJI = {
    '01': markers.SUN,
    '02': markers.SUN_BEHIND_CLOUD,
    '03': markers.CLOUD,
    '04': markers.CLOUD,
    '09': markers.RAIN_CLOUD,
    '10': markers.SUN_BEHIND_RAIN_CLOUD,
    '11': markers.THUNDER_CLOUD,
    '13': markers.SNOW_CLOUD,
    '50': markers.FOG,
}


def weather_emoji(icon_code: str) -> str:
    return ICON_EMOJI.get(icon_code[:2], markers.SUN_BEHIND_SMALL_CLOUD)


def format_timestamp(timestamp: int) -> str:
    moment = datetime.fromtimestamp(timestamp, tz=timezone.utc)
    return moment.strftime('%Y-%m-%d %H:%M:%S UTC')


def _celsius(value: float) -> str:
    return f'{value:.1f}{markers.DEGREE_CELSIUS}'


def _wind_line(wind: dict[str, Any] | None) -> str:
    if not wind:
        return f'{markers.DASH} Wind: No data'
    if wind.get('deg') is None:
        return f'{markers.DASH} Wind: {wind["speed"]:.1f} m/s'
    return (
        f'{markers.DASH} Wind: {wind["speed"]:.1f} m/s '
        f'at {wind["deg"]}{markers.DEGREE}'
    )


def _visibility_line(visibility: int | None) -> str:
    if visibility is None:
        return f'{markers.EYE} Visibility: No data'
    return f'{markers.EYE} Visibility: {visibility / 1000:.1f} km'


def _clouds_line(clouds: dict[str, Any] | None) -> str:
    if not clouds:
        return f'{markers.CLOUD} Cloudiness: No data'
    return f'{markers.CLOUD} Cloudiness: {clouds["all"]}%'


def format_current_weather(payload: dict[str, Any]) -> str:
    """Render a ``/data/2.5/weather`` payload as a current weather report.

    Raises KeyError or IndexError when a mandatory section is missing.
    """
    main = payload['main']
    condition = payload['weather'][0]
    coord = payload['coord']
    system = payload['sys']
    emoji = weather_emoji(condition['icon'])
    name = payload['name']

    lines = [
        f'{emoji} {name} Weather Report {emoji}',
        '',
        f'{markers.PIN} Location: {name}, {system["country"]}',
        f'{markers.GLOBE} Coordinates: {coord["lat"]:.2f}{markers.DEGREE}N, '
        f'{coord["lon"]:.2f}{markers.DEGREE}E',
        '',
        f'{markers.THERMOMETER} Temperature: {_celsius(main["temp"])} '
        f'(feels like {_celsius(main["feels_like"])})',
        f'{markers.BAR_CHART} Min/Max: {_celsius(main["temp_min"])} / '
        f'{_celsius(main["temp_max"])}',
        f'{markers.DROPLET} Humidity: {main["humidity"]}%',
        f'{markers.DOWN_BUTTON} Pressure: {main["pressure"]} hPa',
        f'{markers.CLOUD} Conditions: {condition["description"]}',
        _wind_line(payload.get('wind')),
        _visibility_line(payload.get('visibility')),
        _clouds_line(payload.get('clouds')),
        '',
        f'{markers.SUNRISE} Sunrise: {format_timestamp(system["sunrise"])}',
        f'{markers.SUNSET} Sunset: {format_timestamp(system["sunset"])}',
        f'{markers.CLOCK} Last Updated: {format_timestamp(payload["dt"])}',
    ]
    return '\n'.join(lines)


def format_forecast_item(entry: dict[str, Any]) -> str:
    main = entry['main']
    wind = entry.get('wind')
    humidity = f'{markers.DROPLET}{main["humidity"]}%'
    if wind:
        humidity += f' {markers.DASH}{wind["speed"]:.1f} m/s'
    return markers.ITEM_SEPARATOR.join(
        [
            entry['dt_txt'][11:16],
            f'{_celsius(main["temp"])} feels {_celsius(main["feels_like"])}',
            humidity,
            entry['weather'][0]['description'],
        ]
    )


def format_forecast(payload: dict[str, Any]) -> str:
    """Render a ``/data/2.5/forecast`` payload as a 5-day forecast report.

    Entries are grouped into days of eight three-hour slots.
    """
    city = payload['city']
    lines = [
        f'{markers.CRYSTAL_BALL} {markers.FORECAST_TITLE} '
        f'{city["name"]}, {city["country"]}',
        '=' * 50,
        '',
    ]
    for index, entry in enumerate(payload['list'][:FORECAST_ENTRIES]):
        if index % ENTRIES_PER_DAY == 0:
            day = index // ENTRIES_PER_DAY + 1
            lines.extend(
                ['', f'{markers.CALENDAR} Day {day} Forecast:', '-' * 30]
            )
        lines.append(format_forecast_item(entry))
    return '\n'.join(lines)
