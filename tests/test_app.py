import copy
import logging.config

from unittest.mock import MagicMock, patch, AsyncMock
import httpx
import pytest
from fastapi.testclient import TestClient
from fastapi import HTTPException

from config.settings import app_settings
from weatherlux.api.weather import (
    BackendReportHandler,
    OpenWeatherReportHandler,
    ReportContext,
    day_icon,
    validate_city,
    validate_report,
)
from weatherlux import app as app_module
from weatherlux.app import AppBuilder
from weatherlux.asgi import app
from weatherlux.contracts import DayRecord, ForecastItem, WeatherRecord
from weatherlux.parsing.base import ReportKind
from weatherlux.parsing.classifier import IconCategory
from weatherlux.parsing.forecast import ForecastParser
from weatherlux.parsing.weather import CurrentWeatherParser


client = TestClient(app)


@pytest.fixture
def weather_text():
    return (
        "🌦️ Paris Weather Report 🌦️\n\n"
        "📍 Location: Paris, FR\n"
        "🌡️ Temperature: 18.5°C (feels like 16.0°C)\n"
        "💧 Humidity: 72%\n"
        "🔽 Pressure: 1013 hPa\n"
        "☁️ Conditions: light rain\n"
    )


@pytest.fixture
def forecast_text():
    return (
        "🔮 5-Day Forecast for Paris, FR\n"
        "📅 Day 1 Forecast:\n"
        "09:00 | 12.0°C feels 10.0°C | 💧80% 💨3.5 m/s | scattered clouds\n"
        "📅 Day 2 Forecast:\n"
    )


@pytest.fixture
def openweather_payload():
    return {
        "name": "Oslo",
        "coord": {"lat": 59.91, "lon": 10.75},
        "main": {
            "temp": -3.0,
            "feels_like": -7.5,
            "temp_min": -4.0,
            "temp_max": -2.0,
            "pressure": 1020,
            "humidity": 90,
        },
        "weather": [{"description": "light snow", "icon": "13d"}],
        "dt": 0,
        "sys": {"country": "NO", "sunrise": 0, "sunset": 0},
    }


def text_response(text, status_code=200):
    response = MagicMock()
    response.status_code = status_code
    response.text = text
    return response


def json_response(data, status_code=200):
    response = MagicMock()
    response.status_code = status_code
    response.json = MagicMock(return_value=data)
    return response


@pytest.mark.asyncio
async def test_backend_handler_success(weather_text):
    with patch(
        'httpx.AsyncClient.get', return_value=text_response(weather_text)
    ) as mock_get:
        result = await BackendReportHandler().get_report(
            ReportKind.WEATHER, 'Paris'
        )

    assert result == weather_text
    mock_get.assert_called_once_with(
        f'{app_settings.report_backend_url}/weather',
        params={'city': 'Paris'},
    )


@pytest.mark.asyncio
@pytest.mark.parametrize(
    'handler',
    [
        BackendReportHandler(),
        OpenWeatherReportHandler(),
    ],
)
async def test_report_handler_failure(handler):
    with patch.object(app_settings, 'openweather_api_key', 'secret'), patch(
        'httpx.AsyncClient.get',
        side_effect=httpx.RequestError(
            message="Test Request Error", request=None
        ),
    ):
        result = await handler.get_report(ReportKind.FORECAST, 'Paris')
        assert result is None


@pytest.mark.asyncio
async def test_openweather_handler_renders_report(openweather_payload):
    with patch.object(app_settings, 'openweather_api_key', 'secret'), patch(
        'httpx.AsyncClient.get',
        return_value=json_response(openweather_payload),
    ) as mock_get:
        result = await OpenWeatherReportHandler().get_report(
            ReportKind.WEATHER, 'Oslo'
        )

    assert "📍 Location: Oslo, NO" in result
    assert mock_get.call_args.kwargs['params'] == {
        'q': 'Oslo',
        'appid': 'secret',
        'units': 'metric',
    }


@pytest.mark.asyncio
async def test_openweather_handler_without_api_key():
    with patch.object(app_settings, 'openweather_api_key', ''), patch(
        'httpx.AsyncClient.get'
    ) as mock_get:
        result = await OpenWeatherReportHandler().get_report(
            ReportKind.WEATHER, 'Oslo'
        )

    assert result is None
    mock_get.assert_not_called()


@pytest.mark.asyncio
async def test_openweather_handler_unexpected_payload():
    with patch.object(app_settings, 'openweather_api_key', 'secret'), patch(
        'httpx.AsyncClient.get',
        return_value=json_response({'cod': '200'}),
    ):
        result = await OpenWeatherReportHandler().get_report(
            ReportKind.FORECAST, 'Oslo'
        )

    assert result is None


@pytest.mark.asyncio
async def test_report_context(weather_text):
    handler = MagicMock()
    handler.get_report = AsyncMock(return_value=weather_text)

    context = ReportContext(CurrentWeatherParser(), handler)
    result = await context.report('Paris')

    handler.get_report.assert_awaited_once_with(ReportKind.WEATHER, 'Paris')
    assert result.city == 'Paris, FR'
    assert result.pressure_hpa == '1013'

    handler.get_report = AsyncMock(return_value=None)
    assert await context.report('Paris') is None


@pytest.mark.asyncio
async def test_report_context_forecast(forecast_text):
    handler = MagicMock()
    handler.get_report = AsyncMock(return_value=forecast_text)

    context = ReportContext(ForecastParser(), handler)
    result = await context.report('Paris')

    handler.get_report.assert_awaited_once_with(ReportKind.FORECAST, 'Paris')
    assert result.city == 'Paris'
    assert [day.title for day in result.days] == ['Day 1', 'Day 2']


def test_validate_report():
    with pytest.raises(HTTPException) as exc_info:
        validate_report(None)
    assert exc_info.value.status_code == 404
    assert exc_info.value.detail == "Weather report not found"

    validate_report(WeatherRecord())


def test_validate_city():
    assert validate_city('  Paris ') == 'Paris'
    with pytest.raises(HTTPException) as exc_info:
        validate_city('   ')
    assert exc_info.value.status_code == 400


def test_day_icon():
    assert day_icon(DayRecord(title='Day 1')) is IconCategory.CLEAR
    item = ForecastItem(
        time='09:00', temperature_celsius='1.0', description='heavy snow'
    )
    assert day_icon(DayRecord(title='Day 1', items=[item])) is (
        IconCategory.SNOW
    )


def test_current_weather(weather_text):
    with patch(
        'httpx.AsyncClient.get', return_value=text_response(weather_text)
    ):
        response = client.get("/api/v1/weather", params={'city': 'Paris'})

    assert response.status_code == 200
    data = response.json()
    assert data['icon'] == 'rain'
    assert data['weather']['city'] == 'Paris, FR'
    assert data['weather']['temperatureCelsius'] == '18.5'
    assert data['weather']['feelsLikeCelsius'] == '16.0'
    assert data['weather']['humidityPercent'] == '72'
    assert data['weather']['pressureHpa'] == '1013'
    assert data['weather']['sunrise'] is None


def test_forecast(forecast_text):
    with patch(
        'httpx.AsyncClient.get', return_value=text_response(forecast_text)
    ):
        response = client.get("/api/v1/forecast", params={'city': 'Paris'})

    assert response.status_code == 200
    assert response.json() == {
        'forecast': {
            'city': 'Paris',
            'days': [
                {
                    'title': 'Day 1',
                    'items': [
                        {
                            'time': '09:00',
                            'temperatureCelsius': '12.0',
                            'feelsLikeCelsius': '10.0',
                            'humidityPercent': '80%',
                            'description': 'scattered clouds',
                        }
                    ],
                },
                {'title': 'Day 2', 'items': []},
            ],
        },
        'dayIcons': ['cloudy', 'clear'],
    }


def test_current_weather_backend_down_uses_openweather(openweather_payload):
    with patch.object(app_settings, 'openweather_api_key', 'secret'), patch(
        'httpx.AsyncClient.get',
        side_effect=[
            httpx.Response(status_code=503),
            json_response(openweather_payload),
        ],
    ):
        response = client.get("/api/v1/weather", params={'city': 'Oslo'})

    assert response.status_code == 200
    data = response.json()
    assert data['icon'] == 'snow'
    assert data['weather']['temperatureCelsius'] == '-3.0'
    assert data['weather']['feelsLikeCelsius'] == '-7.5'


def test_current_weather_all_sources_down():
    with patch.object(app_settings, 'openweather_api_key', ''), patch(
        'httpx.AsyncClient.get', return_value=httpx.Response(status_code=404)
    ):
        response = client.get("/api/v1/weather", params={'city': 'Atlantis'})

    assert response.status_code == 404
    assert response.json() == {"detail": "Weather report not found"}


@pytest.mark.parametrize('path', ["/api/v1/weather", "/api/v1/forecast"])
def test_missing_city(path):
    response = client.get(path, params={'city': '  '})
    assert response.status_code == 400

    response = client.get(path)
    assert response.status_code == 400


def test_parse_weather(weather_text):
    response = client.post(
        "/api/v1/parse/weather",
        content=weather_text.encode('utf-8'),
        headers={'Content-Type': 'text/plain; charset=utf-8'},
    )

    assert response.status_code == 200
    data = response.json()
    assert data['weather']['description'] == 'light rain'
    assert data['icon'] == 'rain'


@pytest.mark.parametrize(
    'path, expected',
    [
        (
            "/api/v1/parse/weather",
            {'weather': WeatherRecord().model_dump(by_alias=True),
             'icon': 'partly-cloudy'},
        ),
        (
            "/api/v1/parse/forecast",
            {'forecast': {'city': None, 'days': []}, 'dayIcons': []},
        ),
    ],
)
def test_parse_malformed_text(path, expected):
    response = client.post(path, content=b'\xff\xfe not a report \x00\n')
    assert response.status_code == 200
    assert response.json() == expected


def test_parse_forecast(forecast_text):
    response = client.post("/api/v1/parse/forecast", content=forecast_text)
    assert response.status_code == 200
    assert response.json()['forecast']['days'][0]['items'][0]['time'] == (
        '09:00'
    )


def test_set_api_prefix():
    builder = AppBuilder()
    builder.set_api_prefix('/api/test')
    assert builder._api_prefix == '/api/test'


def test_enable_file_logging():
    builder = AppBuilder()
    builder.enable_file_logging('test.log', 'INFO')
    assert builder._log_to_file is True
    assert builder._log_file_path == 'test.log'
    assert builder._file_log_level == 'INFO'


def test_build_registers_routes():
    built = AppBuilder().set_api_prefix('/api/test').build()
    paths = set(built.openapi()['paths'])
    assert {
        '/api/test/weather',
        '/api/test/forecast',
        '/api/test/parse/weather',
        '/api/test/parse/forecast',
    } <= paths


def test_build_with_file_logging(tmp_path, monkeypatch):
    original_config = copy.deepcopy(app_module.logging_config)
    config = copy.deepcopy(app_module.logging_config)
    monkeypatch.setattr(app_module, 'logging_config', config)
    log_file = tmp_path / 'weatherlux.log'

    try:
        AppBuilder().enable_file_logging(str(log_file), 'INFO').build()
        logging.getLogger('weatherlux.tests').warning('file handler ready')

        assert config['handlers']['file']['filename'] == str(log_file)
        assert config['handlers']['file']['level'] == 'INFO'
        assert 'file' in config['root']['handlers']
        assert 'file handler ready' in log_file.read_text()
    finally:
        logging.config.dictConfig(original_config)
