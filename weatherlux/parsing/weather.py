from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterable

from weatherlux.contracts import WeatherRecord
from weatherlux.parsing import markers
from weatherlux.parsing.base import ReportKind, TextParser

ANY_TEXT = r'(.+)'
CELSIUS = r'([\d.-]+)' + markers.DEGREE_CELSIUS
PERCENT = r'(\d+)%'
HECTOPASCAL = r'(\d+) hPa'


@dataclass(frozen=True)
class FieldRule:
    """Sets ``target`` from the first group of ``value`` when ``label`` occurs.

    ``extras`` are further (pattern, target) probes run against the same line
    once the label has matched.
    """

    label: re.Pattern
    value: re.Pattern
    target: str
    extras: tuple[tuple[re.Pattern, str], ...] = field(default=())

    def apply(self, line: str, fields: dict[str, str]) -> None:
        match = self.value.search(line)
        if match:
            fields[self.target] = match.group(1)
        for pattern, target in self.extras:
            extra = pattern.search(line)
            if extra:
                fields[target] = extra.group(1)


def _label_prefix(emoji: str | None, label: str) -> str:
    prefix = re.escape(label) + ':'
    if emoji is None:
        return prefix
    glyph = emoji.removesuffix(markers.VARIATION_SELECTOR)
    return (
        re.escape(glyph)
        + re.escape(markers.VARIATION_SELECTOR)
        + '? '
        + prefix
    )


def _rule(
    emoji: str | None,
    label: str,
    value_pattern: str,
    target: str,
    extras: tuple[tuple[str, str], ...] = (),
) -> FieldRule:
    prefix = _label_prefix(emoji, label)
    return FieldRule(
        label=re.compile(prefix, re.ASCII),
        value=re.compile(prefix + ' ' + value_pattern, re.ASCII),
        target=target,
        extras=tuple((re.compile(p, re.ASCII), t) for p, t in extras),
    )


FEELS_LIKE = ('feels like ' + CELSIUS, 'feels_like_celsius')

RICH_RULES = (
    _rule(markers.PIN, 'Location', ANY_TEXT, 'city'),
    _rule(markers.GLOBE, 'Coordinates', ANY_TEXT, 'coordinates'),
    _rule(
        markers.THERMOMETER,
        'Temperature',
        CELSIUS,
        'temperature_celsius',
        extras=(FEELS_LIKE,),
    ),
    _rule(markers.DROPLET, 'Humidity', PERCENT, 'humidity_percent'),
    _rule(markers.DOWN_BUTTON, 'Pressure', HECTOPASCAL, 'pressure_hpa'),
    _rule(markers.CLOUD, 'Conditions', ANY_TEXT, 'description'),
    _rule(markers.DASH, 'Wind', ANY_TEXT, 'wind'),
    _rule(markers.EYE, 'Visibility', ANY_TEXT, 'visibility'),
    _rule(markers.SUNRISE, 'Sunrise', ANY_TEXT, 'sunrise'),
    _rule(markers.SUNSET, 'Sunset', ANY_TEXT, 'sunset'),
)

FALLBACK_RULES = (
    _rule(None, 'City', ANY_TEXT, 'city'),
    _rule(None, 'Temp', CELSIUS, 'temperature_celsius'),
    _rule(None, 'Weather', ANY_TEXT, 'description'),
)


class CurrentWeatherParser(TextParser):
    """Extracts a ``WeatherRecord`` from a current weather report.

    Every line goes through the rich rules and then the fallback rules. Only
    the first rule of a table whose label occurs in the line is applied, and
    a fallback match overwrites what the rich rules set for the same field.
    """

    kind = ReportKind.WEATHER

    def __init__(
        self,
        rule_tables: tuple[tuple[FieldRule, ...], ...] = (
            RICH_RULES,
            FALLBACK_RULES,
        ),
    ) -> None:
        self.rule_tables = rule_tables

    def parse(self, lines: Iterable[str]) -> WeatherRecord:
        fields: dict[str, str] = {}
        for line in lines:
            for rules in self.rule_tables:
                self._apply_first_match(rules, line, fields)
        return WeatherRecord(**fields)

    @staticmethod
    def _apply_first_match(
        rules: tuple[FieldRule, ...], line: str, fields: dict[str, str]
    ) -> None:
        for rule in rules:
            if rule.label.search(line):
                rule.apply(line, fields)
                return
