"""Bounded history of past questionnaire results"""

import json
import uuid
from datetime import datetime
from typing import Any, Dict, List

from broke_gateway.domain.models import HistoryEntry

MAX_HISTORY_ENTRIES = 20


def record_result(
    entries: List[HistoryEntry],
    entry: HistoryEntry,
    limit: int = MAX_HISTORY_ENTRIES,
) -> List[HistoryEntry]:
    """
    Add a result to a newest-first history and return the new list.

    - Skipped when the newest entry has the same item name and need%
      (re-submitting the same questionnaire)
    - Oldest entries beyond limit are evicted

    The input list is not modified.
    """
    if entries and entries[0].item_name == entry.item_name and entries[0].need_percent == entry.need_percent:
        return list(entries)

    return ([entry] + list(entries))[:limit]


def entry_to_dict(entry: HistoryEntry) -> Dict[str, Any]:
    return {
        "id": str(entry.id),
        "itemName": entry.item_name,
        "needPercent": entry.need_percent,
        "wantPercent": entry.want_percent,
        "date": entry.date.isoformat(),
    }


def entry_from_dict(data: Dict[str, Any]) -> HistoryEntry:
    return HistoryEntry(
        id=uuid.UUID(data["id"]),
        item_name=data["itemName"],
        need_percent=int(data["needPercent"]),
        want_percent=int(data["wantPercent"]),
        date=datetime.fromisoformat(data["date"]),
    )


def dump_history(entries: List[HistoryEntry]) -> str:
    """Serialize history as a flat JSON list"""
    return json.dumps([entry_to_dict(e) for e in entries])


def load_history(blob: str) -> List[HistoryEntry]:
    """Inverse of dump_history; an empty blob is an empty history"""
    if not blob.strip():
        return []
    return [entry_from_dict(item) for item in json.loads(blob)]
