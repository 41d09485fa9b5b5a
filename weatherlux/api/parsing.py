from __future__ import annotations

from fastapi import APIRouter, Request

from weatherlux import contracts
from weatherlux.api.weather import (
    forecast_parser,
    forecast_report,
    weather_parser,
    weather_report,
)


router = APIRouter()


async def read_text(request: Request) -> str:
    body = await request.body()
    return body.decode('utf-8', errors='replace')


@router.post("/parse/weather", response_model=contracts.CurrentWeatherReport)
async def parse_weather(request: Request) -> contracts.CurrentWeatherReport:
    record = weather_parser.parse_text(await read_text(request))
    return weather_report(record)


@router.post("/parse/forecast", response_model=contracts.ForecastReport)
async def parse_forecast(request: Request) -> contracts.ForecastReport:
    record = forecast_parser.parse_text(await read_text(request))
    return forecast_report(record)
