"""Validation engine: runs a validator class's registry against one subject.

Execution is strictly sequential and depth-first:
property -> priority bucket -> rule -> nested child validation.
Error message order and nested report order are therefore reproducible.

Usage:
    engine = ValidationEngine()
    report = await engine.run(SignupValidation(initial), subject, "create")
"""

import inspect
import time
from collections.abc import Mapping
from typing import Any, Optional, Union

import structlog

from propguard.config import get_settings
from propguard.validators.errors import RuleExecutionError
from propguard.validators.models import RuleOptions, ValidationReport
from propguard.validators.registry import PropertyRuleGroup, Rule
from propguard.validators.schema import RequestedSchema, normalize_requested, resolve

logger = structlog.get_logger()

PropertyEntry = Union[list[str], ValidationReport, list[ValidationReport]]


def _slot_names(record: Any) -> set[str]:
    names: set[str] = set()
    for klass in type(record).__mro__:
        slots = klass.__dict__.get("__slots__", ())
        names.update((slots,) if isinstance(slots, str) else slots)
    return names


def is_record(value: Any) -> bool:
    """Mappings and objects carrying their own fields; scalars and sequences are not."""
    if isinstance(value, Mapping):
        return True
    if value is None or isinstance(value, (str, bytes, int, float, complex, list, tuple, set, frozenset)):
        return False
    return hasattr(value, "__dict__") or bool(_slot_names(value))


def read_value(record: Any, property: str) -> Any:
    """Field of a mapping or a record object; missing reads as None.

    Only instance fields are read, never methods or class attributes, so a
    scalar subject reads as an empty record.
    """
    if isinstance(record, Mapping):
        return record.get(property)
    if not is_record(record):
        return None
    fields = getattr(record, "__dict__", None)
    if fields is not None and property in fields:
        return fields[property]
    if property in _slot_names(record):
        return getattr(record, property, None)
    return None


def _as_record(value: Any) -> Any:
    """Keep mappings and objects as nested initial values, drop scalars."""
    return value if is_record(value) else None


class ValidationEngine:
    """Evaluates every registered property of a validator against a subject.

    Policy:
        - Priorities run in ascending numeric order
        - A failed bucket stops later buckets unless an optional skip is active
        - Rules inside a bucket run one after the other, never concurrently
        - A rule that raises aborts the whole call with RuleExecutionError
    """

    def __init__(
        self,
        reset_optional_per_priority: Optional[bool] = None,
        slow_rule_threshold_ms: Optional[float] = None,
    ):
        settings = get_settings()
        self.reset_optional_per_priority = (
            settings.RESET_OPTIONAL_PER_PRIORITY
            if reset_optional_per_priority is None
            else reset_optional_per_priority
        )
        self.slow_rule_threshold_ms = (
            settings.SLOW_RULE_THRESHOLD_MS if slow_rule_threshold_ms is None else slow_rule_threshold_ms
        )

    async def run(self, validation, subject: Any, schema: RequestedSchema = None) -> ValidationReport:
        """Validate ``subject`` with the rules of ``validation``'s class.

        Args:
            validation: BaseValidation instance (supplies registry and initial values)
            subject: Mapping or object to validate; None reads as an empty record
            schema: Requested schema name(s); schema-tagged rules only run when matched

        Returns:
            ValidationReport with per-property errors
        """
        start_time = time.perf_counter()

        registry = type(validation).registry
        registry.freeze()
        requested = normalize_requested(schema)
        if subject is None:
            subject = {}

        errors: dict[str, PropertyEntry] = {}
        for property, group in registry:
            entry = await self._validate_property(validation, property, group, subject, requested)
            if entry is not None:
                errors[property] = entry

        report = ValidationReport(errors=errors, valid=not errors)

        logger.debug(
            "validation_complete",
            validator=registry.owner,
            schema=requested,
            valid=report.valid,
            failed_properties=list(errors),
            duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
        )
        return report

    async def _validate_property(
        self,
        validation,
        property: str,
        group: PropertyRuleGroup,
        subject: Any,
        requested: list[str],
    ) -> Optional[PropertyEntry]:
        value = read_value(subject, property)
        initial = read_value(validation.initial_values, property)

        messages: list[str] = []
        nested_entry: Optional[PropertyEntry] = None
        property_valid = True
        active_optional = False

        for _, rules in group.ordered_buckets():
            if not (property_valid or active_optional):
                break
            if self.reset_optional_per_priority:
                active_optional = False

            for rule in rules:
                resolution = resolve(rule.options.schema_selector, requested)
                if not resolution.eligible:
                    continue
                options = rule.options.merged(resolution.overrides)

                if value is None and options.optional:
                    active_optional = True
                    continue

                if options.is_nested:
                    child_value = await self._call(rule, validation, value, initial, subject)
                    if child_value is None and options.optional:
                        active_optional = True
                        continue
                    child_entry = await self._validate_nested(options, child_value, initial, requested)
                    if child_entry is not None:
                        nested_entry = child_entry
                        property_valid = False
                    continue

                result = await self._call(rule, validation, value, initial, subject)
                passed = not result if options.inverse else bool(result)
                if not passed:
                    messages.append(options.message or rule.default_message)
                    property_valid = False

        if nested_entry is not None:
            return nested_entry
        return messages or None

    async def _call(self, rule: Rule, validation, value: Any, initial: Any, subject: Any) -> Any:
        """Invoke a sync or async rule with (value, initial, subject)."""
        func = rule.callable_for(validation)
        start_time = time.perf_counter()
        try:
            result = func(value, initial, subject)
            if inspect.isawaitable(result):
                result = await result
        except Exception as e:
            logger.error(
                "rule_raised",
                validator=type(validation).registry.owner,
                property=rule.property,
                rule=rule.rule_id,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise RuleExecutionError(rule.property, rule.rule_id, e) from e
        finally:
            duration_ms = (time.perf_counter() - start_time) * 1000
            if duration_ms > self.slow_rule_threshold_ms:
                logger.warning(
                    "slow_rule",
                    property=rule.property,
                    rule=rule.rule_id,
                    duration_ms=round(duration_ms, 2),
                )
        return result

    async def _validate_nested(
        self,
        options: RuleOptions,
        child_value: Any,
        initial: Any,
        requested: list[str],
    ) -> Optional[PropertyEntry]:
        """Run the nested validator class; None when the child passed."""
        nested_cls = options.nested
        child_schema = options.nested_schema if options.nested_schema is not None else requested

        if isinstance(child_value, (list, tuple)):
            initial_items = initial if isinstance(initial, (list, tuple)) else []
            reports = []
            for index, item in enumerate(child_value):
                item_initial = _as_record(initial_items[index]) if index < len(initial_items) else None
                reports.append(await nested_cls(item_initial).validate(item, child_schema))
            if all(report.valid for report in reports):
                return None
            return reports

        report = await nested_cls(_as_record(initial)).validate(child_value, child_schema)
        return None if report.valid else report


# Module-level singleton
validation_engine = ValidationEngine()
