"""Data preparation for export and display."""

import datetime
import json
from typing import Any, Dict, List


def sort_newest_first(reviews: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Order review dicts by ``submittedAt`` descending; undated reviews go last."""
    # ISO strings in the canonical "...Z" form sort chronologically
    return sorted(reviews, key=lambda r: r.get("submittedAt") or "", reverse=True)


def format_rating(review: Dict[str, Any]) -> str:
    rating = review.get("ratingOverall")
    if rating is None:
        return "-"
    return f"{rating:.1f}/{review.get('ratingScale', 5)}"


def prepare_export(response: Dict[str, Any]) -> Dict[str, Any]:
    """Wrap a reviews response with export metadata."""
    return {
        "totals": response.get("totals", {}),
        "count": response.get("count", 0),
        "reviews": sort_newest_first(list(response.get("result", []))),
        "metadata": {
            "export_timestamp": None,  # Will be set by export_to_json
            "version": "1.0.0",
        },
    }


def export_to_json(data: Dict[str, Any], filename: str) -> None:
    """Export data to JSON file."""
    data.setdefault("metadata", {})["export_timestamp"] = datetime.datetime.now(datetime.timezone.utc).isoformat()

    with open(filename, 'w', encoding='utf-8') as f:
        json.dump(data, f, indent=2, ensure_ascii=False)
