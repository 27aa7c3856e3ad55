"""
Domain service: pipe tier resolution.

A pipe's tier comes from the first matching rule of an ordered table:

1. explicit tier/type field
2. display color
3. secondary display color (only when the primary color is absent)
4. lateral
"""
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from app.domain.models import PIPE_TIERS, PipeSegment

DEFAULT_TIER = "lateral"

# Case-insensitive substring -> tier, checked in order
COLOR_TIERS: tuple[tuple[str, str], ...] = (
    ("blue", "main"),
    ("2563eb", "main"),
    ("green", "submain"),
    ("16a34a", "submain"),
    ("orange", "lateral"),
    ("purple", "lateral"),
    ("ea580c", "lateral"),
)


def tier_from_color(color: Optional[str]) -> Optional[str]:
    """
    Look up a tier from a display color name or hex code.

    Args:
        color: CSS color string such as "blue" or "#2563eb"

    Returns:
        Tier name, or None when the color is absent or unknown
    """
    if not color:
        return None
    lowered = color.lower()
    for fragment, tier in COLOR_TIERS:
        if fragment in lowered:
            return tier
    return None


def explicit_tier_rule(pipe: PipeSegment) -> Optional[str]:
    tier = (pipe.tier or "").strip().lower()
    return tier if tier in PIPE_TIERS else None


def color_rule(pipe: PipeSegment) -> Optional[str]:
    return tier_from_color(pipe.color)


def secondary_color_rule(pipe: PipeSegment) -> Optional[str]:
    if pipe.color:
        return None
    return tier_from_color(pipe.path_color)


ClassificationRule = Callable[[PipeSegment], Optional[str]]

DEFAULT_RULES: tuple[ClassificationRule, ...] = (
    explicit_tier_rule,
    color_rule,
    secondary_color_rule,
)


@dataclass(frozen=True)
class PipeClassifier:
    """Resolves a pipe's tier from an ordered list of rules."""
    rules: Sequence[ClassificationRule] = DEFAULT_RULES
    default: str = DEFAULT_TIER

    def classify(self, pipe: PipeSegment) -> str:
        """
        Resolve the tier of a pipe.

        Args:
            pipe: Pipe to classify

        Returns:
            One of "main", "submain", "lateral"
        """
        for rule in self.rules:
            tier = rule(pipe)
            if tier is not None:
                return tier
        return self.default


default_classifier = PipeClassifier()


def classify(pipe: PipeSegment) -> str:
    """Classify a pipe with the default rule table."""
    return default_classifier.classify(pipe)
