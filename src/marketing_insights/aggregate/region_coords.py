"""Utility: static region/country -> approximate map center.

Coordinates are rough centers, good enough for placing bubbles on a world
map; they are not geocoding results.
"""

from __future__ import annotations

REGION_COORDS: dict[str, tuple[float, float]] = {
    # continents / broad regions
    "North America": (45, -95),
    "South America": (-15, -60),
    "Europe": (54, 15),
    "Africa": (-8, 34),
    "Middle East": (20, 57),
    "Asia": (34, 100),
    "Southeast Asia": (15, 107),
    "Oceania": (-27, 133),
    # countries
    "UK": (54, -3),
    "Germany": (51, 10),
    "France": (46, 2),
    "USA": (39, -98),
    "Canada": (60, -95),
    "Japan": (36, 138),
    "India": (20, 78),
    "Australia": (-25, 133),
    "Brazil": (-14, -51),
    "Mexico": (23, -102),
    "Spain": (40, -4),
    "Italy": (41, 12),
    "Netherlands": (52, 5),
    "Sweden": (60, 18),
    "South Korea": (37, 127),
    "Singapore": (1, 104),
    "Thailand": (15, 101),
    "Vietnam": (16, 107),
    "Philippines": (12, 122),
    "Indonesia": (-2, 113),
    "Malaysia": (4, 102),
    "Hong Kong": (22, 114),
    "China": (35, 105),
    "Taiwan": (24, 121),
    "Pakistan": (30, 69),
    "Bangladesh": (24, 90),
    "Turkey": (39, 35),
    "UAE": (24, 54),
    "United Arab Emirates": (24, 54),
    "Saudi Arabia": (24, 45),
    "Egypt": (26, 29),
    "South Africa": (-30, 22),
    "Nigeria": (9, 8),
    "Kenya": (-1, 36),
    "Poland": (52, 19),
    "Belgium": (50, 4),
    "Switzerland": (47, 8),
    # cities
    "Abu Dhabi": (24.4539, 54.3773),
    "Dubai": (25.2048, 55.2708),
    "Sharjah": (25.3463, 55.4209),
    "Doha": (25.2854, 51.5310),
    "Riyadh": (24.7136, 46.6753),
}


def get_coords(*names: str | None) -> tuple[float, float] | None:
    """Return `(lat, lng)` for the first name found in the table.

    Args:
        names: Candidate names in priority order (e.g. region, then country).

    Returns:
        Coordinates or ``None`` when no candidate is known.
    """
    for name in names:
        if name is not None and name in REGION_COORDS:
            return REGION_COORDS[name]
    return None
