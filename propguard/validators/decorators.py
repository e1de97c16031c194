"""Rule attachment decorator for BaseValidation subclasses.

    class SignupValidation(BaseValidation):
        @validator("email")
        def is_string(self, value, initial, subject):
            return isinstance(value, str)

        @validator("email", schema="create")
        async def unique_email(self, value, initial, subject):
            return not await users.exists(email=value)

The decorator only records metadata on the function; the owning class
performs the registry calls once its body has been executed.
"""

from typing import Any, Optional, Sequence, Union

RULES_ATTR = "__propguard_rules__"


def validator(
    property: str,
    nested: Optional[type] = None,
    nested_schema: Union[str, Sequence[str], None] = None,
    **options: Any,
):
    """Attach a rule for ``property`` to the decorated method.

    Args:
        property: Subject property the rule checks
        nested: Validator class to run against the value the method returns,
            making the method a selector rather than a boolean check
        nested_schema: Fixed schema for the nested validation
        **options: priority, message, inverse, optional, schema
    """
    if nested is not None:
        options["nested"] = nested
    if nested_schema is not None:
        options["nested_schema"] = nested_schema if isinstance(nested_schema, str) else list(nested_schema)

    def decorator(func):
        declared = getattr(func, RULES_ATTR, None)
        if declared is None:
            declared = []
            setattr(func, RULES_ATTR, declared)
        # Stacked decorators apply bottom-up; keep reading order.
        declared.insert(0, (property, options))
        return func

    return decorator


def declared_rules(func) -> list[tuple[str, dict]]:
    return list(getattr(func, RULES_ATTR, ()))
