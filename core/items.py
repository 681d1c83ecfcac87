"""Static catalog of hunt items and their base points."""

from __future__ import annotations

from core.models import HuntItem

HUNT_ITEMS: list[HuntItem] = [
    HuntItem(
        id="condor",
        title="Andean Condor",
        category="animal",
        description=(
            "The largest flying bird in the world, with a wingspan up to 10 feet. "
            "Sacred to the Incas, these birds soar over the Sacred Valley."
        ),
        difficulty=30,
    ),
    HuntItem(
        id="llama",
        title="Llama",
        category="animal",
        description=(
            "Domesticated by the Incas over 4,000 years ago, llamas carried goods and "
            "gave wool. Local communities still keep them today."
        ),
        difficulty=10,
    ),
    HuntItem(
        id="orchid",
        title="Wild Orchid",
        category="plant",
        description=(
            "Peru is home to over 3,000 orchid species. The cloud forests around "
            "Machu Picchu host many rare varieties."
        ),
        difficulty=20,
    ),
    HuntItem(
        id="huayna",
        title="Huayna Picchu",
        category="place",
        description=(
            "The peak that towers over Machu Picchu. The steep climb offers a view "
            "of the entire citadel below."
        ),
        difficulty=25,
    ),
    HuntItem(
        id="sun-temple",
        title="Temple of the Sun",
        category="place",
        description=(
            "One of the most sacred structures in Machu Picchu, built with "
            "precision-cut stones and used for astronomical observations."
        ),
        difficulty=15,
    ),
    HuntItem(
        id="terraces",
        title="Inca Terraces",
        category="place",
        description=(
            "Agricultural terraces built to prevent erosion and create microclimates "
            "for different crops."
        ),
        difficulty=10,
    ),
]

_BY_ID: dict[str, HuntItem] = {item.id: item for item in HUNT_ITEMS}


def get_item(item_id: str) -> HuntItem | None:
    return _BY_ID.get(item_id)


def base_points_for_item(item_id: str) -> int:
    """Base points for `item_id`; 0 when the item is unknown."""
    item = _BY_ID.get(item_id)
    return int(item.difficulty) if item else 0


def max_total_points() -> int:
    """Sum of base points over the whole catalog."""
    return sum(item.difficulty for item in HUNT_ITEMS)
