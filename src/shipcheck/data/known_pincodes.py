"""Known coordinates for central Delhi pincodes, used to seed the coordinate cache."""

from __future__ import annotations

from ..models.domain import Coordinate

_KNOWN = {
    "110001": ("28.6139", "77.2090"),  # Connaught Place
    "110002": ("28.6328", "77.2197"),  # Darya Ganj
    "110003": ("28.7041", "77.1025"),  # Civil Lines
    "110004": ("28.6517", "77.2219"),  # Rashtrapati Bhavan
    "110005": ("28.6436", "77.2186"),  # Karol Bagh
    "110006": ("28.6304", "77.2177"),  # Rajinder Nagar
    "110007": ("28.6455", "77.2167"),  # Motia Khan
    "110008": ("28.6341", "77.2419"),
    "110009": ("28.6219", "77.2324"),  # Paharganj
    "110010": ("28.6341", "77.2419"),  # Jhandewalan
    "110011": ("28.6219", "77.2324"),
    "110012": ("28.5729", "77.2545"),  # Lajpat Nagar
    "110013": ("28.6341", "77.2419"),
    "110014": ("28.5985", "77.2386"),  # Nizamuddin
    "110015": ("28.5355", "77.2499"),
    "110070": ("28.5355", "77.2499"),
    "110071": ("28.5355", "77.2499"),
    "110077": ("28.4595", "77.0266"),
    "110078": ("28.5355", "77.2499"),
}


def known_coordinates() -> dict[str, Coordinate]:
    return {code: Coordinate.from_values(lat, lng) for code, (lat, lng) in _KNOWN.items()}
