"""Side-effect detection rules in priority order."""

from __future__ import annotations

from collections.abc import Sequence
from re import IGNORECASE, compile, escape

from side_effects_lint.rules.base import SideEffectRule

DEFAULT_SDK_NAMESPACES = ("firebase", "AWS", "Azure", "amplify", "gapi", "Stripe", "Twilio")
GLOBAL_ALIASES = ("window", "globalThis", "global")
LISTENER_TARGETS = ("window", "document")

_GLOBALS = "|".join(GLOBAL_ALIASES)
_LISTENER_TARGETS = "|".join(LISTENER_TARGETS)


def side_effect_rules(
    sdk_namespaces: Sequence[str] = DEFAULT_SDK_NAMESPACES,
) -> tuple[SideEffectRule, ...]:
    """Build the ordered side-effect rules.

    The catch-all ``top_level_call`` rule stays last so that any more
    specific rule matching the same line supplies the reason.
    """
    if not sdk_namespaces:
        raise ValueError("sdk_namespaces must contain at least one namespace")
    namespaces = "|".join(escape(name) for name in sdk_namespaces)
    return (
        SideEffectRule(
            rule_id="service_init",
            pattern=compile(
                rf"\b(?:{namespaces})\w*(?:\s*\.\s*[\w$]+)*\s*\(.*\)",
                IGNORECASE,
            ),
            reason="service initialization at top level.",
            description="Cloud/SDK namespace invoked while the module loads.",
        ),
        SideEffectRule(
            rule_id="global_assignment",
            pattern=compile(rf"(?:{_GLOBALS})\.[a-zA-Z0-9_]+\s*="),
            reason="assignment to a global object property at top level.",
            description="Property of window/global/globalThis assigned on import.",
        ),
        SideEffectRule(
            rule_id="event_listener",
            pattern=compile(rf"(?:{_LISTENER_TARGETS})\.(?:addEventListener|on[a-zA-Z]+)\s*\("),
            reason="top-level event listener setup.",
            description="Event handler registered on window/document on import.",
        ),
        SideEffectRule(
            rule_id="global_define_property",
            pattern=compile(rf"Object\.defineProperty\s*\(\s*(?:{_GLOBALS})[ ,]"),
            reason="defining a property on the global object at top level.",
            description="Object.defineProperty targeting the global object.",
        ),
        SideEffectRule(
            rule_id="global_mutation",
            pattern=compile(rf"(?:{_GLOBALS})\.[a-zA-Z0-9_]+\s*\."),
            reason="direct mutation of a global object property at top level.",
            description="Member chain reached through the global object.",
        ),
        SideEffectRule(
            rule_id="top_level_call",
            pattern=compile(r"^[ \t]*[a-zA-Z0-9_$.]+\s*\(.*\);?\s*$"),
            reason="function/method call at top level, not wrapped in a function or class.",
            description="Whole-line call statement executed on import.",
        ),
    )
