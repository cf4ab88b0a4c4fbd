"""Composition of ordered filter rules into a single transform."""

from collections.abc import Callable, Sequence

from .rules import FilterRule

Transform = Callable[[str], str]


def _identity(text: str) -> str:
    return text


def compose(rules: Sequence[FilterRule]) -> Transform:
    """Compose rules into one transform applied in sequence order.

    Each rule consumes the previous rule's output. As soon as the text
    becomes empty the remaining rules are skipped and the empty result is
    returned; empty input is returned without running any rule. No rules
    compose to the identity transform.
    """
    if not rules:
        return _identity

    steps = tuple(rules)

    def transform(text: str) -> str:
        for rule in steps:
            if not text:
                break
            text = rule.apply(text)
        return text

    return transform
