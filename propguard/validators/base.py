"""Base validation class: owns a rule registry and exposes ``validate``.

Each subclass gets its own Registry, seeded with a copy of its parent's
rules, and filled from the ``@validator`` decorated methods of its body.

    report = await SignupValidation.validate(subject, "create")
    report = await SignupValidation(initial_values).validate(subject, ["update"])
"""

import copy
from collections.abc import Mapping
from types import MappingProxyType, MethodType
from typing import Any, Callable, ClassVar, Optional

from propguard.validators.decorators import declared_rules
from propguard.validators.engine import ValidationEngine, validation_engine
from propguard.validators.errors import RegistrationError
from propguard.validators.models import ValidationReport
from propguard.validators.registry import Registry, Rule
from propguard.validators.schema import RequestedSchema, is_schema_like


class _ClassOrInstanceMethod:
    """Descriptor exposing one name with a class-level and an instance-level body."""

    def __init__(self, class_func: Callable):
        self.class_func = class_func
        self.instance_func: Optional[Callable] = None
        self.__doc__ = class_func.__doc__

    def instance(self, func: Callable) -> "_ClassOrInstanceMethod":
        self.instance_func = func
        return self

    def __get__(self, instance, owner):
        if instance is None:
            return MethodType(self.class_func, owner)
        return MethodType(self.instance_func, instance)


class BaseValidation:
    """Validator type: declare rules with ``@validator`` on methods.

    Rule methods receive ``(value, initial_value, subject)`` and return a
    truthy/falsy result, or, for nested rules, the value to validate with
    the nested validator class. They may be coroutines.
    """

    registry: ClassVar[Registry] = Registry("BaseValidation")
    engine: ClassVar[ValidationEngine] = validation_engine

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        cls.registry = cls.registry.copy(owner=cls.__qualname__)
        for name, member in list(cls.__dict__.items()):
            for property, options in declared_rules(member):
                cls._register_rule(property, member, rule_id=name, bound=True, **options)

    def __init__(self, initial_values: Any = None):
        """Snapshot ``initial_values``.

        Mappings become a read-only view of a copy. Record objects (dataclasses,
        pydantic models) are shallow-copied, so later changes to the caller's
        object are not seen; their nested values are shared.
        """
        if initial_values is None:
            initial_values = {}
        if isinstance(initial_values, Mapping):
            initial_values = MappingProxyType(dict(initial_values))
        else:
            initial_values = copy.copy(initial_values)
        self.initial_values = initial_values

    @classmethod
    def register(cls, property: str, func: Callable, rule_id: Optional[str] = None, **options: Any) -> Rule:
        """Attach a plain callable ``func(value, initial, subject)`` as a rule."""
        return cls._register_rule(property, func, rule_id=rule_id, bound=False, **options)

    @classmethod
    def _register_rule(cls, property: str, func: Callable, rule_id: Optional[str], bound: bool, **options: Any) -> Rule:
        nested = options.get("nested")
        if nested is not None and not (isinstance(nested, type) and issubclass(nested, BaseValidation)):
            raise RegistrationError(f"Nested validator for '{property}' must be a BaseValidation subclass, got {nested!r}")
        return cls.registry.register(property, func, rule_id=rule_id, bound=bound, **options)

    @_ClassOrInstanceMethod
    async def validate(
        cls,
        subject: Any,
        initial_values_or_schema: Any = None,
        schema: RequestedSchema = None,
    ) -> ValidationReport:
        """Validate with a fresh instance.

        A schema name (or list of names) as second argument is the requested
        schema; anything else is the initial values and ``schema`` follows.
        """
        if is_schema_like(initial_values_or_schema):
            initial_values, schema = None, initial_values_or_schema
        else:
            initial_values = initial_values_or_schema
        return await cls(initial_values).validate(subject, schema)

    @validate.instance
    async def validate(self, subject: Any, schema: RequestedSchema = None) -> ValidationReport:
        return await self.engine.run(self, subject, schema)
