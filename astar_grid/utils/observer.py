"""Runtime observability helpers."""

from __future__ import annotations

from collections import deque
from typing import Any, Deque, Dict, List

# Rolling history of the last 1000 search durations in milliseconds
_SEARCH_HISTORY_LEN = 1000
_search_durations: Deque[float] = deque(maxlen=_SEARCH_HISTORY_LEN)

# Global in-memory list for logged events when no destination is supplied
_events: List[Dict[str, Any]] = []

# Searches slower than this are flagged by ``print_stats``
SLOW_SEARCH_MS = 50.0


def record_search(elapsed_ms: float) -> None:
    """Append a search duration in milliseconds to the rolling history."""

    _search_durations.append(elapsed_ms)


def average_search_ms() -> float:
    """Return the mean recorded search duration, ``0.0`` when empty."""

    if not _search_durations:
        return 0.0
    return sum(_search_durations) / len(_search_durations)


def print_stats() -> None:
    """Print the average search time based on recorded durations."""

    if not _search_durations:
        print("Search: --")
        return

    msg = (
        f"Search: avg {average_search_ms():.2f} ms over "
        f"{len(_search_durations)} run(s), last {_search_durations[-1]:.2f} ms"
    )
    if _search_durations[-1] > SLOW_SEARCH_MS:
        msg += " - over budget"
    print(msg)


def log_event(
    event_type: str,
    data: Dict[str, Any],
    log: List[Dict[str, Any]] | None = None,
) -> None:
    """Append an event dict to ``log`` or the internal event buffer."""

    event = {"type": event_type}
    event.update(data)
    if log is None:
        _events.append(event)
    else:
        log.append(event)


def search_event(result: Any) -> Dict[str, Any]:
    """Return the event payload describing a finished search ``result``."""

    data: Dict[str, Any] = {
        "found": result.found,
        "open": result.open_count,
        "closed": result.closed_count,
        "elapsed_ms": round(result.elapsed_ms, 3),
    }
    if result.found:
        data["length"] = len(result.path)
    return data


__all__ = [
    "record_search",
    "average_search_ms",
    "print_stats",
    "log_event",
    "search_event",
    "_search_durations",
    "_events",
]
