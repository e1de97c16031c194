"""propguard: declarative per-property validation with priorities, schemas and nesting."""

from propguard.validators import (
    BaseValidation,
    RegistrationError,
    RuleExecutionError,
    SchemaDescriptor,
    ValidationEngine,
    ValidationReport,
    validator,
)

__version__ = "1.0.0"

__all__ = [
    "BaseValidation",
    "RegistrationError",
    "RuleExecutionError",
    "SchemaDescriptor",
    "ValidationEngine",
    "ValidationReport",
    "validator",
]
