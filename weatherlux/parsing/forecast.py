from __future__ import annotations

import re
from enum import Enum
from typing import Iterable

from weatherlux.contracts import DayRecord, ForecastItem, ForecastRecord
from weatherlux.parsing import markers
from weatherlux.parsing.base import ReportKind, TextParser

TITLE_PATTERN = re.compile(
    re.escape(markers.FORECAST_TITLE) + r' (.+)', re.ASCII
)
DAY_NUMBER_PATTERN = re.compile(r'Day (\d+) Forecast:', re.ASCII)
ITEM_PATTERN = re.compile(r'\d{2}:\d{2}', re.ASCII)
TEMPERATURE_PATTERN = re.compile(
    r'([\d.-]+)' + markers.DEGREE_CELSIUS, re.ASCII
)
FEELS_PATTERN = re.compile(
    r'feels ([\d.-]+)' + markers.DEGREE_CELSIUS, re.ASCII
)
HUMIDITY_PATTERN = re.compile(
    re.escape(markers.DROPLET) + r'(\d+)%', re.ASCII
)
HUMIDITY_ANNOTATION = re.compile(
    re.escape(markers.DROPLET) + r'\d+%', re.ASCII
)
WIND_ANNOTATION = re.compile(
    re.escape(markers.DASH) + r'[\d.]+ ?m/s', re.ASCII
)

MIN_ITEM_SEGMENTS = 3


class ParserState(Enum):
    NO_OPEN_DAY = 'no-open-day'
    DAY_OPEN = 'day-open'


def is_forecast_title(line: str) -> bool:
    return markers.FORECAST_TITLE in line


def is_day_boundary(line: str) -> bool:
    return 'Day ' in line and 'Forecast:' in line


def is_item_line(line: str) -> bool:
    return ITEM_PATTERN.match(line) is not None


def parse_item(line: str) -> ForecastItem | None:
    """Build a ``ForecastItem`` from an ``HH:MM | ...`` line.

    Returns None when the line has fewer than three segments.
    """
    parts = line.split(markers.ITEM_SEPARATOR)
    if len(parts) < MIN_ITEM_SEGMENTS:
        return None

    temperature = TEMPERATURE_PATTERN.search(parts[1])
    feels = FEELS_PATTERN.search(parts[1])
    humidity = HUMIDITY_PATTERN.search(parts[2])
    description = parts[3] if len(parts) > MIN_ITEM_SEGMENTS else parts[2]
    description = HUMIDITY_ANNOTATION.sub('', description, count=1)
    description = WIND_ANNOTATION.sub('', description, count=1)

    return ForecastItem(
        time=parts[0],
        temperature_celsius=(
            temperature.group(1) if temperature else markers.NOT_AVAILABLE
        ),
        feels_like_celsius=feels.group(1) if feels else None,
        humidity_percent=f'{humidity.group(1)}%' if humidity else None,
        description=description.strip(),
    )


class ForecastParser(TextParser):
    """Groups forecast item lines under the day boundaries preceding them.

    Parsing runs a two-state machine. Item lines seen while no day is open
    are dropped; a day boundary closes the open day and opens the next one.
    """

    kind = ReportKind.FORECAST

    def parse(self, lines: Iterable[str]) -> ForecastRecord:
        city: str | None = None
        days: list[DayRecord] = []
        state = ParserState.NO_OPEN_DAY
        title = ''
        items: list[ForecastItem] = []

        for line in lines:
            if is_forecast_title(line):
                match = TITLE_PATTERN.search(line)
                if match:
                    city = match.group(1).split(',')[0]
            elif is_day_boundary(line):
                if state is ParserState.DAY_OPEN:
                    days.append(
                        DayRecord(title=title, items=tuple(items))
                    )
                number = DAY_NUMBER_PATTERN.search(line)
                title = f'Day {number.group(1) if number else len(days) + 1}'
                items = []
                state = ParserState.DAY_OPEN
            elif is_item_line(line) and state is ParserState.DAY_OPEN:
                item = parse_item(line)
                if item is not None:
                    items.append(item)

        if state is ParserState.DAY_OPEN:
            days.append(DayRecord(title=title, items=tuple(items)))

        return ForecastRecord(city=city, days=tuple(days))
