from __future__ import annotations

from enum import Enum

from weatherlux.parsing import markers


class IconCategory(str, Enum):
    CLEAR = 'clear'
    CLOUDY = 'cloudy'
    RAIN = 'rain'
    STORM = 'storm'
    SNOW = 'snow'
    FOG = 'fog'
    WIND = 'wind'
    PARTLY_CLOUDY = 'partly-cloudy'

    @property
    def emoji(self) -> str:
        return _EMOJI[self]


_EMOJI = {
    IconCategory.CLEAR: markers.SUN,
    IconCategory.CLOUDY: markers.CLOUD,
    IconCategory.RAIN: markers.RAIN_CLOUD,
    IconCategory.STORM: markers.THUNDER_CLOUD,
    IconCategory.SNOW: markers.SNOWFLAKE,
    IconCategory.FOG: markers.FOG,
    IconCategory.WIND: markers.DASH,
    IconCategory.PARTLY_CLOUDY: markers.SUN_BEHIND_SMALL_CLOUD,
}

# Evaluated in order, first group with a matching keyword wins.
KEYWORD_GROUPS: tuple[tuple[tuple[str, ...], IconCategory], ...] = (
    (('clear', 'sunny'), IconCategory.CLEAR),
    (('cloud',), IconCategory.CLOUDY),
    (('rain', 'shower'), IconCategory.RAIN),
    (('storm', 'thunder'), IconCategory.STORM),
    (('snow',), IconCategory.SNOW),
    (('mist', 'fog'), IconCategory.FOG),
    (('wind',), IconCategory.WIND),
)

DEFAULT_CATEGORY = IconCategory.PARTLY_CLOUDY


def classify(description: str | None) -> IconCategory:
    """Map a free-text condition description to an icon category.

    Matching is a case-insensitive substring test, so "Light rain showers"
    and "RAIN" both land on ``IconCategory.RAIN``. Unknown or empty text
    yields ``DEFAULT_CATEGORY``.
    """
    text = (description or '').lower()
    for keywords, category in KEYWORD_GROUPS:
        if any(keyword in text for keyword in keywords):
            return category
    return DEFAULT_CATEGORY
