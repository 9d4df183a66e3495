"""Replay-protection tokens for state-changing links.

A token is ``<salt><mac>``: 8 hex chars of random salt followed by 16 hex
chars of HMAC-SHA256 over (tick, action, user, salt). A token stays valid for
the current and previous tick (between ``lifetime / 2`` and ``lifetime``
seconds) and is accepted at most once.
"""

from __future__ import annotations

import hashlib
import hmac
import logging
import math
import re
import secrets
import time
from typing import Callable, Dict, Union

import httpx

logger = logging.getLogger(__name__)

_SALT_LEN = 8
_MAC_LEN = 16
_TOKEN_RE = re.compile(rf"^[0-9a-f]{{{_SALT_LEN + _MAC_LEN}}}$")


class NonceManager:
    def __init__(
        self,
        secret: str = "",
        lifetime: int = 86400,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._secret = (secret or secrets.token_hex(32)).encode()
        self._lifetime = lifetime
        self._clock = clock
        # token -> expiry timestamp
        self._used: Dict[str, float] = {}

    def tick(self) -> int:
        return math.ceil(self._clock() / (self._lifetime / 2))

    def _mac(self, tick: int, action: str, user_id: Union[int, str], salt: str) -> str:
        msg = f"{tick}|{action}|{user_id}|{salt}".encode()
        return hmac.new(self._secret, msg, hashlib.sha256).hexdigest()[:_MAC_LEN]

    def create(self, action: str, user_id: Union[int, str]) -> str:
        salt = secrets.token_hex(_SALT_LEN // 2)
        return salt + self._mac(self.tick(), action, user_id, salt)

    def verify(self, token: str, action: str, user_id: Union[int, str]) -> bool:
        """Check and consume ``token``. Never raises."""
        if not token or not _TOKEN_RE.match(token):
            return False
        self._purge()
        if token in self._used:
            logger.debug("Rejected reused token for action %s", action)
            return False

        salt, mac = token[:_SALT_LEN], token[_SALT_LEN:]
        tick = self.tick()
        for candidate in (tick, tick - 1):
            if hmac.compare_digest(mac, self._mac(candidate, action, user_id, salt)):
                self._used[token] = self._clock() + self._lifetime
                return True
        return False

    def url(self, url: str, action: str, user_id: Union[int, str], name: str = "_nonce") -> str:
        """Return ``url`` with a fresh token in query parameter ``name``."""
        token = self.create(action, user_id)
        return str(httpx.URL(url).copy_set_param(name, token))

    def _purge(self) -> None:
        now = self._clock()
        for token in [t for t, exp in self._used.items() if exp <= now]:
            del self._used[token]
