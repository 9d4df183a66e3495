"""Tests for PolicyGate decisions, toggle and setting lifecycle."""

import httpx
import pytest

from airplane_mode.config import BLANK_AVATAR, get_config
from airplane_mode.core.enums import Hook, SettingState
from airplane_mode.core.protocols import HttpBlocked
from airplane_mode.kernel.policy_gate import PolicyGate

REMOTE = "https://example.com/x"
MARKUP = '<img src="https://secure.gravatar.com/avatar/abc?s=96" class="avatar" />'


def _token(gate, principal):
    return gate.nonces.create(get_config().nonce.action, principal.id)


# ── Locality predicate ──


@pytest.mark.parametrize("url", [
    "http://localhost/x",
    "http://127.0.0.1:8080/y",
    "/a/b",
    "",
    None,
    "relative/path.css",
    "http://LOCALHOST/upper",
    "http://[::1",  # malformed
])
def test_is_local_true(gate, url):
    assert gate.is_local(url) is True


@pytest.mark.parametrize("url", [
    "https://example.com/x",
    "//cdn.example.com/lib.js",
    "http://localhost.example.com/",
    "http://10.0.0.5/",
])
def test_is_local_false(gate, url):
    assert gate.is_local(url) is False


def test_is_local_uses_configured_hosts(options):
    config = get_config().model_copy(deep=True)
    config.policy.local_hosts = ["dev.test"]
    gate = PolicyGate(options, config=config)
    assert gate.is_local("http://dev.test/api") is True
    assert gate.is_local("http://localhost/api") is False


# ── Setting lifecycle ──


def test_enabled_defaults_on_without_setting(options):
    gate = PolicyGate(options, config=get_config())
    assert options.get("airplane-mode") is None
    assert gate.enabled() is True


def test_create_setting_stores_on(gate, options):
    assert options.get("airplane-mode") == "on"
    assert gate.state() is SettingState.ON


def test_create_setting_keeps_existing_value(gate, options):
    options.set("airplane-mode", "off")
    gate.create_setting()
    assert gate.enabled() is False


def test_install_uninstall_reinstall(gate, options, admin):
    assert gate.toggle("off", admin, _token(gate, admin))
    assert gate.enabled() is False

    gate.remove_setting()
    assert options.get("airplane-mode") is None

    gate.create_setting()
    assert gate.enabled() is True


def test_remove_setting_twice_is_noop(gate, options):
    gate.remove_setting()
    gate.remove_setting()
    assert options.get("airplane-mode") is None


# ── Network ──


def test_network_denied_when_on(gate):
    verdict = gate.decide_network("https://example.com")
    assert isinstance(verdict, HttpBlocked)
    assert verdict.code == "airplane_mode_enabled"
    assert verdict.message == "Airplane Mode is enabled"
    assert verdict.url == "https://example.com"


def test_network_local_passes_preempt_through(gate):
    assert gate.decide_network("http://localhost") is False
    sentinel = {"response": {"code": 200}}
    assert gate.decide_network("http://localhost/api", sentinel) is sentinel


def test_network_allowed_when_off(gate, options):
    options.set("airplane-mode", "off")
    assert gate.decide_network("https://example.com") is False
    assert gate.decide_network("http://localhost") is False


# ── Assets ──


def test_asset_blocked_when_on(gate):
    assert gate.decide_asset("https://fonts.example.com/css?family=Roboto") is False
    assert gate.decide_asset("/static/site.css") == "/static/site.css"


def test_asset_passthrough_when_off(gate, options):
    options.set("airplane-mode", "off")
    assert gate.decide_asset(REMOTE) == REMOTE


# ── Avatar ──


def test_avatar_replaced_when_on(gate):
    out = gate.decide_avatar(MARKUP, 64, "Jane")
    assert out == (
        f'<img src="{BLANK_AVATAR}" class="avatar avatar-64 photo" '
        'height="64" width="64" alt="Jane" />'
    )


def test_avatar_ignores_input_markup(gate):
    assert gate.decide_avatar("anything", 32) == gate.decide_avatar(MARKUP, 32)


def test_avatar_escapes_alt_and_casts_size(gate):
    out = gate.decide_avatar(MARKUP, "48px", '"><script>')
    assert "avatar-0" in out
    assert "&quot;&gt;&lt;script&gt;" in out
    assert "<script>" not in out


def test_avatar_identity_when_off(gate, options):
    options.set("airplane-mode", "off")
    assert gate.decide_avatar(MARKUP, 96, "Jane") is MARKUP


def test_avatar_source_filter(gate, hooks):
    hooks.add_filter(Hook.DEFAULT_AVATAR, lambda src: "/img/blank.png")
    out = gate.decide_avatar(MARKUP, 24)
    assert 'src="/img/blank.png"' in out


# ── Update jobs ──


def test_update_jobs_follow_setting(gate, options):
    assert gate.decide_update_jobs() is True
    options.set("airplane-mode", "off")
    assert gate.decide_update_jobs() is False


# ── Toggle ──


def test_toggle_off_and_on(gate, admin):
    assert gate.toggle("off", admin, _token(gate, admin)) is True
    assert gate.enabled() is False
    assert gate.toggle("on", admin, _token(gate, admin)) is True
    assert gate.enabled() is True


def test_toggle_requires_capability(gate, subscriber):
    assert gate.toggle("off", subscriber, _token(gate, subscriber)) is False
    assert gate.enabled() is True


def test_toggle_rejects_bad_token(gate, admin):
    assert gate.toggle("off", admin, "") is False
    assert gate.toggle("off", admin, "0" * 24) is False
    assert gate.enabled() is True


def test_toggle_rejects_unknown_state(gate, admin, options):
    token = _token(gate, admin)
    assert gate.toggle("maybe", admin, token) is False
    assert gate.toggle("ON", admin, token) is False
    assert options.get("airplane-mode") == "on"
    # Token was not spent on the invalid requests
    assert gate.toggle("off", admin, token) is True


def test_toggle_token_single_use(gate, admin):
    token = _token(gate, admin)
    assert gate.toggle("off", admin, token) is True
    assert gate.toggle("on", admin, token) is False
    assert gate.enabled() is False


def test_toggle_token_bound_to_user(gate, admin):
    other_admin = admin.model_copy(update={"id": 99})
    assert gate.toggle("off", other_admin, _token(gate, admin)) is False
    assert gate.enabled() is True


# ── Toggle affordance ──


def test_affordance_hidden_from_unauthorized(gate, subscriber):
    assert gate.render_toggle_affordance(subscriber, "http://localhost/") is None


def test_affordance_links_to_opposite_state(gate, admin):
    node = gate.render_toggle_affordance(admin, "http://localhost/wp-admin/?page=tools")
    assert node.id == "airplane-mode-toggle"
    assert node.title == "Airplane Mode: ON"

    params = httpx.URL(node.href).params
    assert params["airplane-mode"] == "off"
    assert params["page"] == "tools"
    assert gate.toggle(params["airplane-mode"], admin, params["airmde_nonce"]) is True

    node = gate.render_toggle_affordance(admin, "http://localhost/wp-admin/")
    assert node.title == "Airplane Mode: OFF"
    assert httpx.URL(node.href).params["airplane-mode"] == "on"
