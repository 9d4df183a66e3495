"""AirplaneModePlugin — binds the PolicyGate to the host's extension points.

Handlers translate host call signatures into gate calls and carry out the
side effects the host expects from them.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Optional

import httpx

from airplane_mode import __version__
from airplane_mode.config import AppConfig, get_config
from airplane_mode.core.enums import Hook
from airplane_mode.core.host_protocols import AssetQueue, EventSchedule, OptionStore, Toolbar
from airplane_mode.core.protocols import RequestContext
from airplane_mode.i18n import load_textdomain
from airplane_mode.kernel.policy_gate import TOGGLE_PARAM, PolicyGate
from airplane_mode.kernel.registry import HookRegistry

logger = logging.getLogger(__name__)

STYLE_HANDLE = "airplane-mode"
STYLE_PATH = "static/airplane-mode.min.css"

# (hook, callback name) pairs the host registers for update checks
UPDATE_CALLBACKS = (
    ("load-update-core.php", "wp_update_themes"),
    ("load-themes.php", "wp_update_themes"),
    ("wp_update_themes", "wp_update_themes"),
    (Hook.ADMIN_INIT.value, "_maybe_update_themes"),
    ("load-update-core.php", "wp_update_plugins"),
    ("load-plugins.php", "wp_update_plugins"),
    ("wp_update_plugins", "wp_update_plugins"),
    (Hook.ADMIN_INIT.value, "_maybe_update_plugins"),
    ("wp_version_check", "wp_version_check"),
    (Hook.ADMIN_INIT.value, "_maybe_update_core"),
)

UPDATE_EVENTS = (
    "wp_update_themes",
    "wp_update_plugins",
    "wp_version_check",
    "wp_maybe_auto_update",
)

_KEY_RE = re.compile(r"[^a-z0-9_\-]")


def sanitize_key(value: Any) -> str:
    """Lowercase and strip everything outside ``[a-z0-9_-]``."""
    if not isinstance(value, str):
        return ""
    return _KEY_RE.sub("", value.lower())


class AirplaneModePlugin:
    """Host-facing handlers; one per extension point."""

    def __init__(
        self,
        gate: PolicyGate,
        hooks: HookRegistry,
        schedule: Optional[EventSchedule] = None,
        config: Optional[AppConfig] = None,
        assets_base_url: str = "/airplane-mode/",
    ) -> None:
        self.gate = gate
        self.hooks = hooks
        self.schedule = schedule
        self._config = config or get_config()
        self._assets_base_url = assets_base_url

    def register(self) -> None:
        """Subscribe every handler to its hook."""
        h = self.hooks
        h.add_action(Hook.PLUGINS_LOADED, self.load_textdomain)
        h.add_action(Hook.INIT, self.toggle_check)
        h.add_action(Hook.ADMIN_BAR_MENU, self.admin_bar_toggle, 9999)
        h.add_action(Hook.ENQUEUE_SCRIPTS, self.enqueue_toggle_css, 9999)
        h.add_action(Hook.ADMIN_ENQUEUE_SCRIPTS, self.enqueue_toggle_css, 9999)
        h.add_filter(Hook.PRE_HTTP_REQUEST, self.disable_http_reqs)
        h.add_filter(Hook.STYLE_LOADER_SRC, self.block_assets)
        h.add_filter(Hook.SCRIPT_LOADER_SRC, self.block_assets)
        h.add_filter(Hook.GET_AVATAR, self.replace_gravatar)
        h.add_action(Hook.ADMIN_INIT, self.remove_update_crons)
        h.add_action(Hook.ACTIVATE, self.gate.create_setting)
        h.add_action(Hook.DEACTIVATE, self.gate.remove_setting)
        logger.debug("Airplane Mode hooks registered")

    # ── Actions ──

    def load_textdomain(self) -> None:
        load_textdomain()

    def toggle_check(self, ctx: RequestContext) -> None:
        """Apply a toggle request carried in the query string, then ask for a clean redirect."""
        token = sanitize_key(ctx.query.get(self._config.nonce.param, ""))
        switch = sanitize_key(ctx.query.get(TOGGLE_PARAM, ""))
        if not token or not switch:
            return
        if not self.gate.toggle(switch, ctx.principal, token):
            return

        url = httpx.URL(ctx.url)
        url = url.copy_remove_param(TOGGLE_PARAM).copy_remove_param(self._config.nonce.param)
        ctx.redirect = str(url)

    def admin_bar_toggle(self, admin_bar: Toolbar, ctx: RequestContext) -> None:
        node = self.gate.render_toggle_affordance(ctx.principal, ctx.url)
        if node is not None:
            admin_bar.add_node(node)

    def enqueue_toggle_css(self, assets: AssetQueue, ctx: RequestContext) -> None:
        if not ctx.is_admin and not ctx.admin_bar_showing:
            return
        assets.enqueue_style(STYLE_HANDLE, self._assets_base_url + STYLE_PATH, [], __version__)

    def remove_update_crons(self, *_: Any) -> None:
        """Unregister the host's update checks while the policy is enabled."""
        if not self.gate.decide_update_jobs():
            return
        for hook, callback in UPDATE_CALLBACKS:
            self.hooks.remove_action(hook, callback)
        if self.schedule is not None:
            for event in UPDATE_EVENTS:
                self.schedule.clear_scheduled_hook(event)

    # ── Filters ──

    def disable_http_reqs(self, preempt: Any, args: Any, url: str) -> Any:
        return self.gate.decide_network(url, preempt)

    def block_assets(self, src: Any, *_: Any) -> Any:
        return self.gate.decide_asset(src)

    def replace_gravatar(
        self, avatar: str, id_or_email: Any = None, size: Any = 96,
        default: Any = None, alt: str = "",
    ) -> str:
        return self.gate.decide_avatar(avatar, size, alt)


def build_plugin(
    config: Optional[AppConfig] = None,
    options: Optional[OptionStore] = None,
    hooks: Optional[HookRegistry] = None,
) -> AirplaneModePlugin:
    """Composition root: build the gate and its host bindings and register them."""
    from airplane_mode.services.cron_service import CronService
    from airplane_mode.services.option_service import OptionService

    config = config or get_config()
    options = options if options is not None else OptionService()
    hooks = hooks if hooks is not None else HookRegistry()

    gate = PolicyGate(options, config=config, hooks=hooks)
    plugin = AirplaneModePlugin(gate, hooks, schedule=CronService(options), config=config)
    plugin.register()
    return plugin
