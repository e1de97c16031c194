"""Declarative per-property validation.

Usage:
    from propguard.validators import BaseValidation, validator

    class LocationValidation(BaseValidation):
        @validator("latitude")
        def in_range(self, value, initial, subject):
            return isinstance(value, (int, float)) and -90 <= value <= 90

    report = await LocationValidation.validate({"latitude": 120})
    if not report.valid:
        ...
"""

from propguard.validators.base import BaseValidation
from propguard.validators.decorators import validator
from propguard.validators.engine import ValidationEngine, validation_engine
from propguard.validators.errors import RegistrationError, RuleExecutionError
from propguard.validators.models import RuleOptions, RuleOverrides, SchemaDescriptor, ValidationReport
from propguard.validators.registry import PropertyRuleGroup, Registry, Rule

__all__ = [
    "BaseValidation",
    "validator",
    "ValidationEngine",
    "validation_engine",
    "RegistrationError",
    "RuleExecutionError",
    "RuleOptions",
    "RuleOverrides",
    "SchemaDescriptor",
    "ValidationReport",
    "PropertyRuleGroup",
    "Registry",
    "Rule",
]
