"""HookRegistry — the event-subscription table the host dispatches through.

Actions are fire-and-forget notifications; filters thread a value through
each callback and return the final result. Both share one table keyed by
hook name, ordered by priority and then by registration order.
"""

from __future__ import annotations

import itertools
import logging
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

logger = logging.getLogger(__name__)

Callback = Callable[..., Any]
CallbackRef = Union[Callback, str]

DEFAULT_PRIORITY = 10


def _hook_name(hook: Union[str, Enum]) -> str:
    return hook.value if isinstance(hook, Enum) else hook


def _callback_name(callback: Callback) -> str:
    return getattr(callback, "__name__", repr(callback))


def _matches(callback: Callback, ref: CallbackRef) -> bool:
    if isinstance(ref, str):
        return _callback_name(callback) == ref
    return callback == ref


class HookRegistry:
    """Action/filter registration, removal and dispatch."""

    def __init__(self) -> None:
        # hook -> [(priority, seq, callback)]
        self._hooks: Dict[str, List[Tuple[int, int, Callback]]] = {}
        self._seq = itertools.count()

    def add_filter(
        self, hook: Union[str, Enum], callback: Callback, priority: int = DEFAULT_PRIORITY
    ) -> None:
        """Subscribe ``callback`` to ``hook``."""
        name = _hook_name(hook)
        entries = self._hooks.setdefault(name, [])
        entries.append((priority, next(self._seq), callback))
        entries.sort(key=lambda e: (e[0], e[1]))
        logger.debug("Registered hook: %s → %s (priority %d)",
                      name, _callback_name(callback), priority)

    add_action = add_filter

    def remove_filter(
        self, hook: Union[str, Enum], callback: CallbackRef,
        priority: Optional[int] = None,
    ) -> bool:
        """Unsubscribe by identity or by callback name.

        Returns True if anything was removed; removing an absent callback is a no-op.
        """
        name = _hook_name(hook)
        entries = self._hooks.get(name)
        if not entries:
            return False
        kept = [
            e for e in entries
            if not (_matches(e[2], callback) and (priority is None or e[0] == priority))
        ]
        removed = len(kept) != len(entries)
        if kept:
            self._hooks[name] = kept
        else:
            del self._hooks[name]
        if removed:
            logger.debug("Removed hook: %s → %s", name,
                         callback if isinstance(callback, str) else _callback_name(callback))
        return removed

    remove_action = remove_filter

    def has(self, hook: Union[str, Enum], callback: Optional[CallbackRef] = None) -> bool:
        """Check whether ``hook`` has subscribers (or the given one)."""
        entries = self._hooks.get(_hook_name(hook), [])
        if callback is None:
            return bool(entries)
        return any(_matches(e[2], callback) for e in entries)

    def do_action(self, hook: Union[str, Enum], *args: Any) -> None:
        for _, _, callback in list(self._hooks.get(_hook_name(hook), [])):
            callback(*args)

    def apply_filters(self, hook: Union[str, Enum], value: Any, *args: Any) -> Any:
        for _, _, callback in list(self._hooks.get(_hook_name(hook), [])):
            value = callback(value, *args)
        return value

    def list_registered(self) -> Dict[str, List[str]]:
        """Return a mapping of hook names to subscribed callback names, in run order."""
        return {
            name: [_callback_name(e[2]) for e in entries]
            for name, entries in self._hooks.items()
        }
