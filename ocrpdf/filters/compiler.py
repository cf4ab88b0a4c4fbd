"""Rule specification compiler.

Reads YAML rule specification sources in the order given and sorts their
rules into the line and document sequences of a ``RuleSet``. A source is
either a list of rule mappings or a mapping holding such a list under
``rules``::

    - type: delete
      pattern: '^\\s*\\d+\\s*$'       # page numbers
    - type: replace
      pattern: '-$'
      replacement: ''
    - scope: document
      type: join_hyphenated

Each rule defaults to line scope. Order across sources and within a source
is preserved.
"""

import re
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any, TextIO

import yaml

from ocrpdf.exceptions import RuleSpecError
from ocrpdf.utils.logger import get_logger

from .rules import (
    DeleteRule,
    FilterRule,
    JoinHyphenatedRule,
    KeepRule,
    ReplaceRule,
    RuleScope,
    RuleSet,
    StripRule,
)

logger = get_logger(__name__)


def _pattern(spec: dict[str, Any]) -> str:
    pattern = spec.get("pattern")
    if not isinstance(pattern, str) or not pattern:
        raise ValueError("missing or empty 'pattern'")
    return pattern


def _build_replace(spec: dict[str, Any], scope: RuleScope) -> FilterRule:
    replacement = spec.get("replacement", "")
    if not isinstance(replacement, str):
        raise ValueError("'replacement' must be a string")
    return ReplaceRule(
        _pattern(spec),
        replacement,
        scope=scope,
        ignore_case=bool(spec.get("ignore_case", False)),
    )


def _build_delete(spec: dict[str, Any], scope: RuleScope) -> FilterRule:
    return DeleteRule(
        _pattern(spec), scope=scope, ignore_case=bool(spec.get("ignore_case", False))
    )


def _build_keep(spec: dict[str, Any], scope: RuleScope) -> FilterRule:
    return KeepRule(
        _pattern(spec), scope=scope, ignore_case=bool(spec.get("ignore_case", False))
    )


def _build_strip(spec: dict[str, Any], scope: RuleScope) -> FilterRule:
    return StripRule(scope=scope)


def _build_join_hyphenated(spec: dict[str, Any], scope: RuleScope) -> FilterRule:
    return JoinHyphenatedRule(scope=scope)


class RuleCompiler:
    """Accumulates rules from specification sources into a ``RuleSet``."""

    def __init__(self) -> None:
        self.rule_set = RuleSet()
        self._builders: dict[str, Callable[[dict[str, Any], RuleScope], FilterRule]] = {
            "replace": _build_replace,
            "delete": _build_delete,
            "keep": _build_keep,
            "strip": _build_strip,
            "join_hyphenated": _build_join_hyphenated,
        }

    def add(self, stream: TextIO, name: str) -> None:
        """Parse one specification source and append its rules.

        Args:
            stream: Readable text stream holding the YAML source.
            name: Source identity used in error messages.

        Raises:
            RuleSpecError: If the source is not valid YAML or a rule is
                malformed.
        """
        try:
            data = yaml.safe_load(stream)
        except yaml.YAMLError as exc:
            raise RuleSpecError(name, f"invalid YAML: {exc}") from exc
        except UnicodeDecodeError as exc:
            raise RuleSpecError(name, f"not valid UTF-8: {exc}") from exc

        if data is None:
            logger.debug("Rule source %s is empty", name)
            return
        if isinstance(data, dict):
            data = data.get("rules")
        if not isinstance(data, list):
            raise RuleSpecError(name, "expected a list of rules")

        for position, spec in enumerate(data, 1):
            try:
                rule = self._build(spec)
            except (ValueError, TypeError) as exc:
                raise RuleSpecError(name, f"rule {position}: {exc}") from exc
            self.rule_set.add(rule)

        logger.info("Loaded %d filter rules from %s", len(data), name)

    def add_file(self, path: Path) -> None:
        """Open a specification file and append its rules."""
        try:
            with open(path, encoding="utf-8") as f:
                self.add(f, str(path))
        except OSError as exc:
            raise RuleSpecError(str(path), exc.strerror or str(exc)) from exc

    def _build(self, spec: Any) -> FilterRule:
        if not isinstance(spec, dict):
            raise ValueError("expected a mapping")

        rule_type = spec.get("type")
        builder = self._builders.get(rule_type)
        if builder is None:
            raise ValueError(f"unknown rule type: {rule_type!r}")

        try:
            scope = RuleScope(spec.get("scope", RuleScope.LINE))
        except ValueError:
            raise ValueError(f"unknown scope: {spec.get('scope')!r}") from None

        try:
            return builder(spec, scope)
        except re.error as exc:
            raise ValueError(f"invalid pattern: {exc}") from exc


def compile_rules(paths: Iterable[Path | str]) -> RuleSet:
    """Compile rule specification files, in the given order, into a RuleSet.

    Raises:
        RuleSpecError: For the first file that cannot be read or parsed.
    """
    compiler = RuleCompiler()
    for path in paths:
        compiler.add_file(Path(path))
    return compiler.rule_set
