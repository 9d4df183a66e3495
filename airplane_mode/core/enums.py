"""Enumerations shared across the policy gate and its host bindings."""

from enum import Enum


class SettingState(str, Enum):
    ON = "on"
    OFF = "off"

    @property
    def opposite(self) -> "SettingState":
        return SettingState.OFF if self is SettingState.ON else SettingState.ON


class Hook(str, Enum):
    """Host extension points the plugin subscribes to."""
    PLUGINS_LOADED = "plugins_loaded"
    INIT = "init"
    ADMIN_INIT = "admin_init"
    ADMIN_BAR_MENU = "admin_bar_menu"
    ENQUEUE_SCRIPTS = "enqueue_scripts"
    ADMIN_ENQUEUE_SCRIPTS = "admin_enqueue_scripts"
    PRE_HTTP_REQUEST = "pre_http_request"
    STYLE_LOADER_SRC = "style_loader_src"
    SCRIPT_LOADER_SRC = "script_loader_src"
    GET_AVATAR = "get_avatar"
    DEFAULT_AVATAR = "airplane_mode_default_avatar"
    ACTIVATE = "activate_airplane-mode"
    DEACTIVATE = "deactivate_airplane-mode"
