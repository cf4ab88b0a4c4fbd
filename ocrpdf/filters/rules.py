"""Filter rule types.

Every rule exposes a single ``apply(text) -> str`` operation and is tagged
with the scope it runs at: each recognized line, or the whole assembled
document. Returning an empty string drops the input.
"""

import re
from dataclasses import dataclass, field
from enum import StrEnum


class RuleScope(StrEnum):
    """Granularity a rule is applied at."""

    LINE = "line"
    DOCUMENT = "document"


class FilterRule:
    """Base class for a text transform with a scope."""

    kind = "rule"

    def __init__(self, scope: RuleScope = RuleScope.LINE) -> None:
        self.scope = RuleScope(scope)

    def apply(self, text: str) -> str:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}(scope={self.scope.value!r})"


class _PatternRule(FilterRule):
    def __init__(
        self,
        pattern: str,
        scope: RuleScope = RuleScope.LINE,
        ignore_case: bool = False,
    ) -> None:
        super().__init__(scope)
        flags = re.MULTILINE
        if ignore_case:
            flags |= re.IGNORECASE
        self.pattern = re.compile(pattern, flags)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(pattern={self.pattern.pattern!r}, "
            f"scope={self.scope.value!r})"
        )


class ReplaceRule(_PatternRule):
    """Regex substitution; ``replacement`` may use group references."""

    kind = "replace"

    def __init__(
        self,
        pattern: str,
        replacement: str = "",
        scope: RuleScope = RuleScope.LINE,
        ignore_case: bool = False,
    ) -> None:
        super().__init__(pattern, scope, ignore_case)
        self.replacement = replacement

    def apply(self, text: str) -> str:
        return self.pattern.sub(self.replacement, text)


class DeleteRule(_PatternRule):
    """Drops the input when the pattern matches anywhere in it."""

    kind = "delete"

    def apply(self, text: str) -> str:
        return "" if self.pattern.search(text) else text


class KeepRule(_PatternRule):
    """Drops the input unless the pattern matches somewhere in it."""

    kind = "keep"

    def apply(self, text: str) -> str:
        return text if self.pattern.search(text) else ""


class StripRule(FilterRule):
    """Trims leading and trailing whitespace."""

    kind = "strip"

    def apply(self, text: str) -> str:
        return text.strip()


class JoinHyphenatedRule(FilterRule):
    """Joins words split by a hyphen at the end of a line."""

    kind = "join_hyphenated"

    _BREAK = re.compile(r"(\w)-\n(?=\w)")

    def apply(self, text: str) -> str:
        return self._BREAK.sub(r"\1", text)


@dataclass
class RuleSet:
    """Ordered line-scoped and document-scoped rules."""

    line_rules: list[FilterRule] = field(default_factory=list)
    document_rules: list[FilterRule] = field(default_factory=list)

    def add(self, rule: FilterRule) -> None:
        """Append a rule to the sequence matching its scope."""
        if rule.scope is RuleScope.LINE:
            self.line_rules.append(rule)
        else:
            self.document_rules.append(rule)

    def __len__(self) -> int:
        return len(self.line_rules) + len(self.document_rules)
