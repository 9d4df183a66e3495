"""Kernel package — the decision core of Airplane Mode.

- PolicyGate: every allow/deny decision and the guarded toggle
- NonceManager: single-use replay-protection tokens for the toggle link
- HookRegistry: the event-subscription table the host dispatches through
"""

from airplane_mode.kernel.nonce import NonceManager
from airplane_mode.kernel.policy_gate import PolicyGate
from airplane_mode.kernel.registry import HookRegistry

__all__ = [
    "HookRegistry",
    "NonceManager",
    "PolicyGate",
]
