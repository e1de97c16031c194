"""Rule registry: property -> priority buckets of rules.

Built once per validator class by sequential ``register`` calls while the
class is being defined, then sealed on first use and shared read-only by
every validation call.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Iterator, Optional

import structlog
from pydantic import ValidationError as PydanticValidationError

from propguard.validators.errors import RegistrationError
from propguard.validators.models import RuleOptions

logger = structlog.get_logger()

RuleFunction = Callable[..., Any]


def default_message(property: str, rule_id: str) -> str:
    return f"{property} failed {rule_id} validation"


@dataclass(frozen=True)
class Rule:
    """One check attached to one property."""

    property: str
    rule_id: str
    func: RuleFunction
    options: RuleOptions
    bound: bool = False  # declared as a method; bind to the validator instance

    @property
    def default_message(self) -> str:
        return default_message(self.property, self.rule_id)

    def callable_for(self, instance: Any) -> RuleFunction:
        if self.bound:
            return self.func.__get__(instance, type(instance))
        return self.func


@dataclass
class PropertyRuleGroup:
    """Rules of one property, bucketed by priority in registration order."""

    rules_by_priority: dict[int, list[Rule]] = field(default_factory=dict)
    priorities: set[int] = field(default_factory=set)

    def add(self, rule: Rule) -> None:
        priority = rule.options.priority
        self.rules_by_priority.setdefault(priority, []).append(rule)
        self.priorities.add(priority)

    def ordered_buckets(self) -> Iterator[tuple[int, list[Rule]]]:
        """Buckets in ascending numeric priority (10 runs after 2)."""
        for priority in sorted(self.priorities):
            yield priority, self.rules_by_priority[priority]

    @property
    def has_nested(self) -> bool:
        return any(rule.options.is_nested for rules in self.rules_by_priority.values() for rule in rules)

    def __len__(self) -> int:
        return sum(len(rules) for rules in self.rules_by_priority.values())


class Registry:
    """Mapping from property name to its PropertyRuleGroup."""

    def __init__(self, owner: str = ""):
        self.owner = owner
        self._groups: dict[str, PropertyRuleGroup] = {}
        self._frozen = False

    # ── Building ──

    def register(
        self,
        property: str,
        func: RuleFunction,
        rule_id: Optional[str] = None,
        bound: bool = False,
        **options: Any,
    ) -> Rule:
        """Attach one rule. Defaults first, caller options win."""
        if self._frozen:
            raise RegistrationError(
                f"Cannot register '{property}' rule on {self.owner or 'registry'}: "
                "registry is sealed after the first validation"
            )
        if not isinstance(property, str) or not property:
            raise RegistrationError(f"Property name must be a non-empty string, got {property!r}")
        if not callable(func):
            raise RegistrationError(f"Rule for '{property}' must be callable, got {func!r}")

        rule_id = rule_id or getattr(func, "__name__", None) or repr(func)
        resolved = {"priority": 0, "message": default_message(property, rule_id)}
        resolved.update(options)

        try:
            rule_options = RuleOptions.model_validate(resolved)
        except PydanticValidationError as e:
            raise RegistrationError(f"Invalid options for rule '{rule_id}' on '{property}': {e}") from e

        group = self._groups.get(property)
        # A property reports either messages or nested report(s), never both.
        if group is not None and (rule_options.is_nested or group.has_nested):
            raise RegistrationError(
                f"Rule '{rule_id}' on '{property}': a nested rule must be the only rule of its property"
            )

        rule = Rule(property=property, rule_id=rule_id, func=func, options=rule_options, bound=bound)
        self._groups.setdefault(property, PropertyRuleGroup()).add(rule)
        return rule

    def freeze(self) -> None:
        if not self._frozen:
            self._frozen = True
            logger.debug("registry_frozen", owner=self.owner, properties=len(self._groups))

    @property
    def frozen(self) -> bool:
        return self._frozen

    def copy(self, owner: str = "") -> "Registry":
        """Unsealed copy; rule objects are shared, bucket lists are not."""
        clone = Registry(owner or self.owner)
        for property, group in self._groups.items():
            clone._groups[property] = PropertyRuleGroup(
                rules_by_priority={p: list(rules) for p, rules in group.rules_by_priority.items()},
                priorities=set(group.priorities),
            )
        return clone

    # ── Reading ──

    def properties(self) -> list[str]:
        return list(self._groups)

    def describe(self) -> dict[str, dict[int, list[tuple[str, dict]]]]:
        """Plain-data view: property -> priority -> [(rule_id, options)]."""
        return {
            property: {
                priority: [
                    (rule.rule_id, _summary(rule.options))
                    for rule in rules
                ]
                for priority, rules in group.rules_by_priority.items()
            }
            for property, group in self._groups.items()
        }

    def __contains__(self, property: object) -> bool:
        return property in self._groups

    def __getitem__(self, property: str) -> PropertyRuleGroup:
        return self._groups[property]

    def __iter__(self) -> Iterator[tuple[str, PropertyRuleGroup]]:
        return iter(self._groups.items())

    def __len__(self) -> int:
        return len(self._groups)


def _summary(options: RuleOptions) -> dict:
    data = options.model_dump(by_alias=True, exclude_defaults=True)
    data["priority"] = options.priority
    return data
