"""Icon filename stems used by meteociel.fr mapped to weather categories."""

from types import MappingProxyType

from meteociel.models.forecast import WeatherCategory

WEATHER_CATEGORIES = MappingProxyType({
    "soleil": WeatherCategory("Sunny"),
    "voile": WeatherCategory("Little cloudy"),
    "peu_nuageux": WeatherCategory("Partly cloudy"),
    "mitige": WeatherCategory("Mixed"),
    "nuageux": WeatherCategory("Cloudy"),
    "brouillard": WeatherCategory("Foggy"),
    "pluie": WeatherCategory("Rainy"),
    "grele": WeatherCategory("Hail"),
    "neige": WeatherCategory("Snowy"),
    "averse_pluiefaible": WeatherCategory("Light rain shower"),
    "averse_pluie": WeatherCategory("Rain shower"),
    "averse_neige": WeatherCategory("Snow shower"),
    "averse_orage": WeatherCategory("Thunderstorm"),
    "averse_pluieneige": WeatherCategory("Rain and snow shower"),
    "pluie_neige": WeatherCategory("Rain and snow"),
    "oragefaible": WeatherCategory("Major thunderstorm"),
})

UNKNOWN_WEATHER = WeatherCategory()


def lookup_weather(stem: str) -> WeatherCategory:
    """Return the category for an icon stem; unknown stems map to the empty category."""
    return WEATHER_CATEGORIES.get(stem, UNKNOWN_WEATHER)


def icon_stem(src: str) -> str:
    """Extract the icon stem from an image src, e.g. '/images/soleil.gif' -> 'soleil'."""
    filename = src.rsplit("/", 1)[-1]
    return filename.removesuffix(".gif")
