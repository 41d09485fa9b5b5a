from __future__ import annotations

import logging
from abc import ABC, abstractmethod

import httpx
from fastapi import APIRouter, HTTPException

from config.settings import app_settings
from weatherlux import contracts, formatting
from weatherlux.parsing.base import ReportKind, TextParser
from weatherlux.parsing.classifier import IconCategory, classify
from weatherlux.parsing.forecast import ForecastParser
from weatherlux.parsing.weather import CurrentWeatherParser


logger = logging.getLogger(__name__)

router = APIRouter()

EMPTY_DAY_DESCRIPTION = 'clear'


class ReportHandler(ABC):
    _next_handler: ReportHandler | None = None

    def set_next(self, report_handler: ReportHandler) -> ReportHandler:
        self._next_handler = report_handler
        return report_handler

    @abstractmethod
    async def get_report(self, kind: ReportKind, city: str) -> str | None:
        if self._next_handler:
            return await self._next_handler.get_report(kind, city)
        return None


class BackendReportHandler(ReportHandler):
    """Fetches the rich text report straight from the report backend."""

    async def get_report(self, kind: ReportKind, city: str) -> str | None:
        url = f'{app_settings.report_backend_url}/{kind.value}'
        try:
            async with httpx.AsyncClient(
                timeout=app_settings.request_timeout
            ) as client:
                response = await client.get(url, params={'city': city})

                if response.status_code != httpx.codes.OK:
                    logger.warning(
                        'Report backend returned %s for %s of %r',
                        response.status_code,
                        kind.value,
                        city,
                    )
                    return await super().get_report(kind, city)

                return response.text

        except httpx.RequestError as exc:
            logger.warning('Report backend unreachable: %s', exc)
            return await super().get_report(kind, city)


class OpenWeatherReportHandler(ReportHandler):
    """Builds the report from OpenWeatherMap JSON when an API key is set."""

    renderers = {
        ReportKind.WEATHER: formatting.format_current_weather,
        ReportKind.FORECAST: formatting.format_forecast,
    }

    async def get_report(self, kind: ReportKind, city: str) -> str | None:
        if not app_settings.openweather_api_key:
            return await super().get_report(kind, city)

        url = f'{app_settings.openweather_url}/{kind.value}'
        params = {
            'q': city,
            'appid': app_settings.openweather_api_key,
            'units': 'metric',
        }
        try:
            async with httpx.AsyncClient(
                timeout=app_settings.request_timeout
            ) as client:
                response = await client.get(url, params=params)

                if response.status_code != httpx.codes.OK:
                    logger.warning(
                        'OpenWeatherMap returned %s for %s of %r',
                        response.status_code,
                        kind.value,
                        city,
                    )
                    return await super().get_report(kind, city)

                return self.renderers[kind](response.json())

        except httpx.RequestError as exc:
            logger.warning('OpenWeatherMap unreachable: %s', exc)
            return await super().get_report(kind, city)
        except (KeyError, IndexError, TypeError, ValueError) as exc:
            logger.warning('Unexpected OpenWeatherMap payload: %r', exc)
            return await super().get_report(kind, city)


class ReportContext:
    def __init__(
        self, parser: TextParser, report_handler: ReportHandler
    ) -> None:
        self._parser = parser
        self.report_handler = report_handler

    async def report(self, city: str):
        text = await self.report_handler.get_report(self._parser.kind, city)
        if text is None:
            return None
        return self._parser.parse_text(text)


backend_handler = BackendReportHandler()
openweather_handler = OpenWeatherReportHandler()
backend_handler.set_next(openweather_handler)

weather_parser = CurrentWeatherParser()
forecast_parser = ForecastParser()


def validate_city(city: str) -> str:
    city = city.strip()
    if not city:
        raise HTTPException(
            status_code=400,
            detail="Missing or empty city query parameter",
        )
    return city


def validate_report(report) -> None:
    if report is None:
        raise HTTPException(
            status_code=404,
            detail="Weather report not found",
        )


def weather_report(
    record: contracts.WeatherRecord,
) -> contracts.CurrentWeatherReport:
    return contracts.CurrentWeatherReport(
        weather=record, icon=classify(record.description)
    )


def day_icon(day: contracts.DayRecord) -> IconCategory:
    if not day.items:
        return classify(EMPTY_DAY_DESCRIPTION)
    return classify(day.items[0].description)


def forecast_report(
    record: contracts.ForecastRecord,
) -> contracts.ForecastReport:
    return contracts.ForecastReport(
        forecast=record,
        day_icons=tuple(day_icon(day) for day in record.days),
    )


@router.get("/weather", response_model=contracts.CurrentWeatherReport)
async def current_weather(city: str = '') -> contracts.CurrentWeatherReport:
    context = ReportContext(weather_parser, backend_handler)
    record = await context.report(validate_city(city))
    validate_report(record)
    return weather_report(record)


@router.get("/forecast", response_model=contracts.ForecastReport)
async def forecast(city: str = '') -> contracts.ForecastReport:
    context = ReportContext(forecast_parser, backend_handler)
    record = await context.report(validate_city(city))
    validate_report(record)
    return forecast_report(record)
