"""Cron service — registry of scheduled host events.

Events are recorded in the ``cron`` option as ``{hook: [{"timestamp", "recurrence", "args"}]}``.
Running them is the host's job; this service only books and clears entries.
"""

from __future__ import annotations

import copy
import logging
import time
from typing import Any, Dict, List, Optional

from airplane_mode.core.host_protocols import OptionStore

logger = logging.getLogger(__name__)

CRON_OPTION = "cron"


class CronService:
    def __init__(self, options: OptionStore) -> None:
        self._options = options

    def _load(self) -> Dict[str, List[Dict[str, Any]]]:
        data = self._options.get(CRON_OPTION, None)
        # Deep copy: the ORM compares against the loaded value to detect changes
        return copy.deepcopy(data) if isinstance(data, dict) else {}

    def schedule_event(
        self,
        hook: str,
        timestamp: float | None = None,
        recurrence: str | None = None,
        args: list | None = None,
    ) -> None:
        events = self._load()
        events.setdefault(hook, []).append({
            "timestamp": timestamp if timestamp is not None else time.time(),
            "recurrence": recurrence,
            "args": args or [],
        })
        self._options.set(CRON_OPTION, events)

    def next_scheduled(self, hook: str) -> Optional[float]:
        entries = self._load().get(hook, [])
        if not entries:
            return None
        return min(e["timestamp"] for e in entries)

    def clear_scheduled_hook(self, hook: str) -> int:
        """Unschedule every event for ``hook``. Returns the number removed."""
        events = self._load()
        removed = events.pop(hook, [])
        if removed:
            self._options.set(CRON_OPTION, events)
            logger.info("Cleared %d scheduled event(s) for %s", len(removed), hook)
        return len(removed)
