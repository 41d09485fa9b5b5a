from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import Iterable

from pydantic import BaseModel


class ReportKind(str, Enum):
    WEATHER = 'weather'
    FORECAST = 'forecast'


def split_report_lines(text: str) -> list[str]:
    return [line for line in text.splitlines() if line.strip()]


class TextParser(ABC):
    kind: ReportKind

    @abstractmethod
    def parse(self, lines: Iterable[str]) -> BaseModel:
        pass  # pragma: no cover

    def parse_text(self, text: str) -> BaseModel:
        return self.parse(split_report_lines(text))
