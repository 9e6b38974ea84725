"""Raw field-name tables for review providers.

Each canonical attribute maps to an ordered list of raw keys. The first key
present in a raw record wins, so supporting a new provider schema is a table
edit (or a YAML override) rather than new code.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence

import yaml

logger = logging.getLogger(__name__)


HOSTAWAY_FIELD_ALIASES: Dict[str, List[str]] = {
    "id": ["id", "reviewId"],
    "type": ["type", "review_type"],
    "status": ["status"],
    "listingId": ["listingId", "listing_id"],
    "listingName": ["listingName", "listing_title"],
    "reviewerName": ["guestName", "reviewer_name"],
    "submittedAt": ["submittedAt", "created_at", "updated_at"],
    "rating": ["rating"],
    "categories": ["reviewCategory"],
    "textPublic": ["publicReview", "public_review", "review_text"],
    "channel": ["channel", "platform"],
}

# Keys inside each per-category entry
CATEGORY_LABEL_KEY = "category"
CATEGORY_RATING_KEY = "rating"


def first_present(raw: Mapping[str, Any], names: Sequence[str]) -> Any:
    """Return the first value among ``names`` that is neither None nor ""."""
    for name in names:
        value = raw.get(name)
        if value is None or value == "":
            continue
        return value
    return None


def get_field_aliases(overrides: Optional[Mapping[str, Sequence[str]]] = None) -> Dict[str, List[str]]:
    """Default alias table with per-attribute overrides applied."""
    aliases = {field: list(names) for field, names in HOSTAWAY_FIELD_ALIASES.items()}
    for field, names in (overrides or {}).items():
        if isinstance(names, str):
            names = [names]
        aliases[field] = [str(n) for n in names]
    return aliases


def load_field_aliases(path: Optional[str]) -> Dict[str, List[str]]:
    """Load alias overrides from a YAML file, falling back to the defaults."""
    if not path:
        return get_field_aliases()

    try:
        with open(Path(path), "r", encoding="utf-8") as f:
            overrides = yaml.safe_load(f) or {}
        if not isinstance(overrides, dict):
            raise ValueError("top-level YAML value must be a mapping")
        logger.info(f"Loaded field alias overrides for {sorted(overrides)} from {path}")
        return get_field_aliases(overrides)
    except (OSError, ValueError, yaml.YAMLError) as e:
        logger.warning(f"Failed to load field aliases from {path}: {e}. Using defaults.")
        return get_field_aliases()
