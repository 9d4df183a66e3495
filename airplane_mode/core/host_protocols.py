"""Host Protocol definitions — interfaces for the collaborators the host owns.

The policy gate reads one setting and returns decisions; everything else is
owned by the host. Small concrete implementations live in
``airplane_mode.services``.

These use Python's Protocol (structural subtyping) so any host object with
the right methods satisfies the interface without explicit inheritance.
"""

from __future__ import annotations

from typing import Any, List, Optional, Protocol, runtime_checkable

from airplane_mode.core.protocols import ToolbarNode


@runtime_checkable
class OptionStore(Protocol):
    """Site-wide key-value settings store."""

    def get(self, key: str, default: Any = None) -> Any: ...

    def set(self, key: str, value: Any) -> None: ...

    def add(self, key: str, value: Any) -> bool: ...

    def delete(self, key: str) -> bool: ...


@runtime_checkable
class EventSchedule(Protocol):
    """Registry of scheduled background events."""

    def clear_scheduled_hook(self, hook: str) -> int: ...

    def next_scheduled(self, hook: str) -> Optional[float]: ...


@runtime_checkable
class Toolbar(Protocol):
    def add_node(self, node: ToolbarNode) -> None: ...


@runtime_checkable
class AssetQueue(Protocol):
    def enqueue_style(
        self, handle: str, src: str, deps: List[str] | None = None, ver: str | None = None
    ) -> None: ...
