"""HTTP service — outbound requests that honour the ``pre_http_request`` filter."""

from __future__ import annotations

import logging
from typing import Any, Dict

import httpx

from airplane_mode.core.enums import Hook
from airplane_mode.core.protocols import HttpBlocked
from airplane_mode.kernel.registry import HookRegistry

logger = logging.getLogger(__name__)


class RequestBlocked(Exception):
    """Raised when a filter preempts a request with ``HttpBlocked``."""

    def __init__(self, failure: HttpBlocked) -> None:
        super().__init__(failure.message)
        self.failure = failure

    @property
    def code(self) -> str:
        return self.failure.code


class HttpService:
    """Thin wrapper over ``httpx.Client``.

    Before any request leaves the process, ``pre_http_request`` filters are
    given ``(False, args, url)``. A filter that returns anything other than
    False short-circuits the request: ``HttpBlocked`` is raised as
    ``RequestBlocked``, any other value is returned to the caller as-is.
    """

    def __init__(self, hooks: HookRegistry, client: httpx.Client | None = None) -> None:
        self._hooks = hooks
        self._client = client

    @property
    def client(self) -> httpx.Client:
        if self._client is None:
            self._client = httpx.Client(timeout=30.0, follow_redirects=True)
        return self._client

    def request(self, method: str, url: str, **kwargs: Any) -> Any:
        args: Dict[str, Any] = {"method": method.upper(), **kwargs}
        preempt = self._hooks.apply_filters(Hook.PRE_HTTP_REQUEST, False, args, url)
        if isinstance(preempt, HttpBlocked):
            logger.warning("Blocked %s %s: %s", args["method"], url, preempt.message)
            raise RequestBlocked(preempt)
        if preempt is not False:
            return preempt
        return self.client.request(args.pop("method"), url, **args)

    def get(self, url: str, **kwargs: Any) -> Any:
        return self.request("GET", url, **kwargs)

    def post(self, url: str, **kwargs: Any) -> Any:
        return self.request("POST", url, **kwargs)

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None
