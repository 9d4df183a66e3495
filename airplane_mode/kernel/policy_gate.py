"""PolicyGate — every Airplane Mode decision is made here.

The gate holds no state of its own beyond a handle on the site options. Each
call reads the persisted setting, applies the locality predicate and returns
a decision for the host to act on; it never initiates anything itself.
"""

from __future__ import annotations

import html
import logging
from typing import Any, Literal, Optional, Union
from urllib.parse import urlsplit

import httpx

from airplane_mode.config import AppConfig, get_config
from airplane_mode.core.enums import Hook, SettingState
from airplane_mode.core.host_protocols import OptionStore
from airplane_mode.core.protocols import HttpBlocked, Principal, ToolbarNode
from airplane_mode.i18n import _
from airplane_mode.kernel.nonce import NonceManager
from airplane_mode.kernel.registry import HookRegistry
from airplane_mode.logging_config import log_decision

logger = logging.getLogger(__name__)

TOGGLE_PARAM = "airplane-mode"
TOGGLE_NODE_ID = "airplane-mode-toggle"

AVATAR_MARKUP = (
    '<img src="{src}" class="avatar avatar-{size} photo" '
    'height="{size}" width="{size}" alt="{alt}" />'
)


def _as_int(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


class PolicyGate:
    """On/off network policy backed by one site option.

    ``hooks`` is optional; when given, the placeholder avatar source is run
    through the ``airplane_mode_default_avatar`` filter.
    """

    def __init__(
        self,
        options: OptionStore,
        config: Optional[AppConfig] = None,
        nonces: Optional[NonceManager] = None,
        hooks: Optional[HookRegistry] = None,
    ) -> None:
        self._options = options
        self._config = config or get_config()
        self._policy = self._config.policy
        self._nonces = nonces or NonceManager(
            self._config.nonce.secret, self._config.nonce.lifetime
        )
        self._hooks = hooks

    @property
    def nonces(self) -> NonceManager:
        return self._nonces

    # ── Setting lifecycle ──

    def create_setting(self) -> None:
        """Install: store the default state unless a value already exists."""
        if self._options.add(self._policy.option_key, self._policy.default_state.value):
            logger.info("Created setting %s=%s",
                        self._policy.option_key, self._policy.default_state.value)

    def remove_setting(self) -> None:
        """Uninstall: drop the setting entirely."""
        if self._options.delete(self._policy.option_key):
            logger.info("Removed setting %s", self._policy.option_key)

    def state(self) -> SettingState:
        value = self._options.get(self._policy.option_key, self._policy.default_state.value)
        return SettingState.ON if value == SettingState.ON.value else SettingState.OFF

    def enabled(self) -> bool:
        return self.state() is SettingState.ON

    # ── Locality predicate ──

    def is_local(self, url: Any) -> bool:
        """True if ``url`` targets a local host.

        Relative, empty and unparseable URLs have no host and count as local.
        """
        if not url:
            return True
        try:
            host = urlsplit(str(url)).hostname
        except ValueError:
            return True
        if not host:
            return True
        return host in self._policy.local_hosts

    def _blocks(self, url: Any) -> bool:
        return self.enabled() and not self.is_local(url)

    # ── Decisions ──

    def decide_network(self, url: str, preempt: Any = False) -> Union[Any, HttpBlocked]:
        """Deny remote requests while enabled; otherwise pass ``preempt`` through."""
        if self._blocks(url):
            log_decision("http", str(url), "deny")
            return HttpBlocked(message=_("Airplane Mode is enabled"), url=str(url))
        return preempt

    def decide_asset(self, src: Any) -> Union[Any, Literal[False]]:
        """Return ``src`` unchanged, or False to tell the host to skip the asset."""
        if self._blocks(src):
            log_decision("asset", str(src), "deny")
            return False
        return src

    def decide_avatar(self, avatar: str, size: Any = 96, alt: str = "") -> str:
        """Swap avatar markup for a local placeholder while enabled."""
        if not self.enabled():
            return avatar

        src = self._policy.default_avatar
        if self._hooks is not None:
            src = self._hooks.apply_filters(Hook.DEFAULT_AVATAR, src)

        return AVATAR_MARKUP.format(
            src=html.escape(str(src), quote=True),
            size=_as_int(size),
            alt=html.escape(alt or "", quote=True),
        )

    def decide_update_jobs(self) -> bool:
        """True when background update checks must be unregistered."""
        return self.enabled()

    # ── Toggle ──

    def authorized(self, principal: Principal) -> bool:
        return principal.can(self._policy.capability)

    def toggle(self, requested_state: Any, principal: Principal, token: str) -> bool:
        """Persist ``requested_state`` if every precondition holds.

        Unauthorized callers, bad tokens and unknown states are ignored:
        nothing changes and False is returned.
        """
        if not self.authorized(principal):
            logger.debug("Toggle ignored: principal %s lacks %s",
                         principal.id, self._policy.capability)
            return False
        try:
            state = SettingState(requested_state)
        except ValueError:
            logger.debug("Toggle ignored: invalid state %r", requested_state)
            return False
        if not self._nonces.verify(token, self._config.nonce.action, principal.id):
            logger.debug("Toggle ignored: invalid token from principal %s", principal.id)
            return False

        self._options.set(self._policy.option_key, state.value)
        logger.info("Airplane Mode switched %s by principal %s", state.value, principal.id)
        return True

    def render_toggle_affordance(
        self, principal: Principal, current_url: str = "/"
    ) -> Optional[ToolbarNode]:
        """Toolbar node showing the current state and linking to the opposite one."""
        if not self.authorized(principal):
            return None

        state = self.state()
        link = str(httpx.URL(current_url).copy_set_param(TOGGLE_PARAM, state.opposite.value))
        href = self._nonces.url(
            link, self._config.nonce.action, principal.id, name=self._config.nonce.param
        )
        title = _("Airplane Mode: ON") if state is SettingState.ON else _("Airplane Mode: OFF")
        return ToolbarNode(
            id=TOGGLE_NODE_ID,
            title=title,
            href=href,
            meta={"class": f"airplane-mode-{state.value}"},
        )
