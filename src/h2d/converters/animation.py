"""Animation and interaction metadata derived from stylesheet text."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any

from h2d.model.style import Keyframe, StyleRule, Stylesheet

INTERACTION_STATES = ("hover", "focus", "active", "visited")

_TIME_RE = re.compile(r"^([+-]?(?:\d+\.?\d*|\.\d+))(ms|s)$", re.IGNORECASE)
_TIMING_KEYWORDS = frozenset({
    "ease", "linear", "ease-in", "ease-out", "ease-in-out", "step-start", "step-end",
})
_DIRECTIONS = frozenset({"normal", "reverse", "alternate", "alternate-reverse"})
_FILL_MODES = frozenset({"none", "forwards", "backwards", "both"})
_TOKEN_RE = re.compile(r"[\w-]+\([^)]*\)|\S+")


def parse_duration(value: str) -> float:
    """Parse a CSS time value into seconds; anything else is 0."""
    match = _TIME_RE.match(value.strip())
    if match is None:
        return 0.0
    number = float(match.group(1))
    return number / 1000 if match.group(2).lower() == "ms" else number


@dataclass(frozen=True)
class AnimationInfo:
    selector: str
    name: str
    duration: float = 0.0
    timing_function: str = "ease"
    delay: float = 0.0
    iteration_count: str = "1"
    direction: str = "normal"
    fill_mode: str = "none"
    keyframes: tuple[Keyframe, ...] | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "selector": self.selector,
            "name": self.name,
            "duration": self.duration,
            "timingFunction": self.timing_function,
            "delay": self.delay,
            "iterationCount": self.iteration_count,
            "direction": self.direction,
            "fillMode": self.fill_mode,
        }
        if self.keyframes is not None:
            out["keyframes"] = [_keyframe_dict(k) for k in self.keyframes]
        return out


@dataclass(frozen=True)
class InteractionState:
    selector: str
    state: str
    styles: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {"selector": self.selector, "state": self.state, "styles": dict(self.styles)}


def _keyframe_dict(frame: Keyframe) -> dict[str, Any]:
    return {"offset": frame.offset, "properties": dict(frame.properties)}


def _apply_shorthand(value: str, fields: dict[str, Any]) -> None:
    tokens = _TOKEN_RE.findall(value)
    if not tokens:
        return
    times = 0
    for token in tokens:
        lowered = token.lower()
        if _TIME_RE.match(lowered):
            key = "duration" if times == 0 else "delay"
            fields[key] = parse_duration(lowered)
            times += 1
        elif lowered in _TIMING_KEYWORDS or lowered.startswith(("cubic-bezier(", "steps(")):
            fields["timing_function"] = token
        elif lowered == "infinite" or lowered.replace(".", "", 1).isdigit():
            fields["iteration_count"] = lowered
        elif lowered in _DIRECTIONS:
            fields["direction"] = lowered
        elif lowered in _FILL_MODES:
            fields["fill_mode"] = lowered
        elif "name" not in fields:
            fields["name"] = token


def _animation_for(rule: StyleRule, keyframes: dict[str, tuple[Keyframe, ...]]) -> AnimationInfo | None:
    decls = rule.declarations
    fields: dict[str, Any] = {}
    if "animation" in decls:
        _apply_shorthand(decls["animation"], fields)
    if "animation-name" in decls:
        fields["name"] = decls["animation-name"].split()[0]
    if "animation-duration" in decls:
        fields["duration"] = parse_duration(decls["animation-duration"])
    if "animation-delay" in decls:
        fields["delay"] = parse_duration(decls["animation-delay"])
    for prop, key in (
        ("animation-timing-function", "timing_function"),
        ("animation-iteration-count", "iteration_count"),
        ("animation-direction", "direction"),
        ("animation-fill-mode", "fill_mode"),
    ):
        if prop in decls:
            fields[key] = decls[prop]

    name = fields.get("name")
    if not name or name == "none":
        return None
    return AnimationInfo(selector=rule.selector, keyframes=keyframes.get(name), **fields)


def extract_animations(stylesheet: Stylesheet) -> list[AnimationInfo]:
    """Return one entry per top-level style rule that names an animation."""
    keyframes = {name: rule.keyframes for name, rule in stylesheet.keyframes().items()}
    found = []
    for rule in stylesheet.style_rules():
        info = _animation_for(rule, keyframes)
        if info is not None:
            found.append(info)
    return found


def interaction_state(selector: str) -> str | None:
    """Return the first interaction pseudo-class named by *selector*."""
    for state in INTERACTION_STATES:
        if f":{state}" in selector:
            return state
    return None


def extract_interactions(stylesheet: Stylesheet) -> list[InteractionState]:
    found = []
    for rule in stylesheet.style_rules():
        state = interaction_state(rule.selector)
        if state is not None:
            found.append(InteractionState(rule.selector, state, dict(rule.declarations)))
    return found


def animation_metadata(stylesheet: Stylesheet) -> dict[str, Any]:
    """Keyframes, animations and interaction states in serialized form."""
    return {
        "keyframes": {
            name: [_keyframe_dict(k) for k in rule.keyframes]
            for name, rule in stylesheet.keyframes().items()
        },
        "animations": [a.to_dict() for a in extract_animations(stylesheet)],
        "interactions": [i.to_dict() for i in extract_interactions(stylesheet)],
    }
