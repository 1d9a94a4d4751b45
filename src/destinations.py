# ABOUTME: Loads the curated destinations dataset once at startup.
# ABOUTME: Falls back to a small built-in list when the JSON file is missing or malformed.

import logging
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from src.models import Destination

logger = logging.getLogger(__name__)

_DESTINATION_LIST = TypeAdapter(list[Destination])

FALLBACK_DESTINATIONS: tuple[Destination, ...] = (
    Destination(
        id="spiti-valley", name="Spiti Valley", state="Himachal Pradesh", description="Cold desert mountain valley"
    ),
    Destination(
        id="tirthan-valley", name="Tirthan Valley", state="Himachal Pradesh", description="Serene riverside valley"
    ),
    Destination(id="majuli", name="Majuli Island", state="Assam", description="Largest river island"),
    Destination(id="khonoma", name="Khonoma", state="Nagaland", description="India's first green village"),
    Destination(
        id="valley-of-flowers", name="Valley of Flowers", state="Uttarakhand", description="UNESCO alpine meadows"
    ),
    Destination(id="dholavira", name="Dholavira", state="Gujarat", description="Indus Valley site"),
)


def load_destinations(path: Path) -> tuple[Destination, ...]:
    """Read destinations from a JSON array file, or return FALLBACK_DESTINATIONS."""
    try:
        destinations = tuple(_DESTINATION_LIST.validate_json(path.read_bytes()))
    except (OSError, ValidationError):
        logger.warning("%s not found or invalid, using minimal fallback", path)
        return FALLBACK_DESTINATIONS

    logger.info("Loaded %d destinations from %s", len(destinations), path)
    return destinations


def destinations_for_state(destinations: tuple[Destination, ...], state: str) -> list[Destination]:
    """Return destinations whose state matches case-insensitively, ignoring surrounding spaces."""
    wanted = state.strip().lower()
    return [d for d in destinations if d.state.lower() == wanted]
