"""Glyphs and text markers shared by the report parsers and formatter."""

VARIATION_SELECTOR = "\ufe0f"

PIN = "\U0001f4cd"
GLOBE = "\U0001f310"
THERMOMETER = "\U0001f321" + VARIATION_SELECTOR
DROPLET = "\U0001f4a7"
DOWN_BUTTON = "\U0001f53d"
CLOUD = "\u2601" + VARIATION_SELECTOR
DASH = "\U0001f4a8"
EYE = "\U0001f441" + VARIATION_SELECTOR
SUNRISE = "\U0001f305"
SUNSET = "\U0001f307"
BAR_CHART = "\U0001f4ca"
CLOCK = "\u23f0"
CRYSTAL_BALL = "\U0001f52e"
CALENDAR = "\U0001f4c5"

SUN = "\u2600" + VARIATION_SELECTOR
SUN_BEHIND_CLOUD = "\u26c5"
RAIN_CLOUD = "\U0001f327" + VARIATION_SELECTOR
SUN_BEHIND_RAIN_CLOUD = "\U0001f326" + VARIATION_SELECTOR
THUNDER_CLOUD = "\u26c8" + VARIATION_SELECTOR
SNOW_CLOUD = "\U0001f328" + VARIATION_SELECTOR
SNOWFLAKE = "\u2744" + VARIATION_SELECTOR
FOG = "\U0001f32b" + VARIATION_SELECTOR
SUN_BEHIND_SMALL_CLOUD = "\U0001f324" + VARIATION_SELECTOR

DEGREE = "\u00b0"
DEGREE_CELSIUS = DEGREE + "C"

FORECAST_TITLE = "5-Day Forecast for"
ITEM_SEPARATOR = " | "
NOT_AVAILABLE = "N/A"
