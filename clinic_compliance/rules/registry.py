"""Rule registry for managing active rules."""

from __future__ import annotations

from collections.abc import Callable, Iterable

from .models import RuleCheck, RuleDefinition, Severity


def rule(
    rule_id: str, severity: Severity, description: str
) -> Callable[[RuleCheck], RuleDefinition]:
    """Decorator binding a check function to its catalog identity."""

    def wrap(check: RuleCheck) -> RuleDefinition:
        return RuleDefinition(
            rule_id=rule_id,
            severity=severity,
            description=description,
            check=check,
        )

    return wrap


class RuleRegistry:
    def __init__(self) -> None:
        self._rules: list[RuleDefinition] = []

    def register(self, definition: RuleDefinition) -> None:
        if any(r.rule_id == definition.rule_id for r in self._rules):
            return
        self._rules.append(definition)

    def extend(self, rules: Iterable[RuleDefinition]) -> None:
        for definition in rules:
            self.register(definition)

    def active_rules(self, disabled: Iterable[str] = ()) -> tuple[RuleDefinition, ...]:
        skip = set(disabled)
        return tuple(r for r in self._rules if r.rule_id not in skip)

    def get(self, rule_id: str) -> RuleDefinition | None:
        for definition in self._rules:
            if definition.rule_id == rule_id:
                return definition
        return None

    def __len__(self) -> int:
        return len(self._rules)


default_registry = RuleRegistry()
