"""Common constants shared across models and decoders."""

# Day-name abbreviations prefixing the date-marker cells of forecast tables.
DAY_NAMES: tuple[str, ...] = ("Lun", "Mar", "Mer", "Jeu", "Ven", "Sam", "Dim")

INT8_RANGE = (-(2**7), 2**7 - 1)
INT16_RANGE = (-(2**15), 2**15 - 1)
FLOAT32_MAX = 3.4028234663852886e38
