"""Asset service — queued stylesheets and scripts, filtered at output time."""

from __future__ import annotations

import html
import logging
from typing import Dict, List

import httpx

from airplane_mode.core.enums import Hook
from airplane_mode.core.protocols import Asset
from airplane_mode.kernel.registry import HookRegistry

logger = logging.getLogger(__name__)

_LOADER_HOOKS = {"style": Hook.STYLE_LOADER_SRC, "script": Hook.SCRIPT_LOADER_SRC}


class AssetService:
    def __init__(self, hooks: HookRegistry) -> None:
        self._hooks = hooks
        self._queue: Dict[str, Asset] = {}

    def _enqueue(self, kind: str, handle: str, src: str,
                 deps: List[str] | None, ver: str | None) -> None:
        key = f"{kind}:{handle}"
        if key in self._queue:
            return
        self._queue[key] = Asset(handle=handle, src=src, kind=kind, deps=deps or [], ver=ver)

    def enqueue_style(self, handle: str, src: str,
                      deps: List[str] | None = None, ver: str | None = None) -> None:
        self._enqueue("style", handle, src, deps, ver)

    def enqueue_script(self, handle: str, src: str,
                       deps: List[str] | None = None, ver: str | None = None) -> None:
        self._enqueue("script", handle, src, deps, ver)

    @property
    def queued(self) -> List[Asset]:
        return list(self._queue.values())

    def resolve(self) -> List[Asset]:
        """Run each asset's src through its loader filter; drop those filtered to False."""
        resolved = []
        for asset in self._queue.values():
            src = asset.src
            if asset.ver:
                src = str(httpx.URL(src).copy_set_param("ver", asset.ver))
            src = self._hooks.apply_filters(_LOADER_HOOKS[asset.kind], src, asset.handle)
            if src is False or not src:
                logger.debug("Skipped %s %s", asset.kind, asset.handle)
                continue
            resolved.append(asset.model_copy(update={"src": src}))
        return resolved

    def render(self) -> str:
        tags = []
        for asset in self.resolve():
            src = html.escape(asset.src, quote=True)
            if asset.kind == "style":
                tags.append(
                    f"<link rel='stylesheet' id='{html.escape(asset.handle)}-css' href='{src}' media='all' />"
                )
            else:
                tags.append(f"<script src='{src}' id='{html.escape(asset.handle)}-js'></script>")
        return "\n".join(tags)
