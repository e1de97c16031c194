"""Schema resolution: decides whether a schema-tagged rule runs for a request.

A rule without a selector always runs. A tagged rule only runs when one of
its schemas was explicitly requested; a descriptor may also override options.
"""

from typing import NamedTuple, Optional, Sequence, Union

from propguard.validators.models import RuleOverrides, SchemaDescriptor, SchemaSelector

RequestedSchema = Union[str, Sequence[str], None]


class Resolution(NamedTuple):
    eligible: bool
    overrides: Optional[RuleOverrides] = None


ALWAYS = Resolution(True)
SKIP = Resolution(False)


def is_schema_like(value) -> bool:
    """True for a schema name or a list/tuple of schema names."""
    if isinstance(value, str):
        return True
    if isinstance(value, (list, tuple)):
        return all(isinstance(item, str) for item in value)
    return False


def normalize_requested(schema: RequestedSchema) -> list[str]:
    if schema is None:
        return []
    if isinstance(schema, str):
        return [schema]
    return list(schema)


def _match(entry: Union[str, SchemaDescriptor], requested: list[str]) -> Optional[Resolution]:
    if isinstance(entry, str):
        return ALWAYS if entry in requested else None
    if entry.for_ in requested:
        return Resolution(True, entry.options)
    return None


def resolve(selector: Optional[SchemaSelector], requested: list[str]) -> Resolution:
    """Resolve a rule's selector against the requested schema names.

    For a list selector the first matching entry decides, later entries are
    not consulted.
    """
    if selector is None:
        return ALWAYS
    if not requested:
        return SKIP

    entries = selector if isinstance(selector, list) else [selector]
    for entry in entries:
        resolution = _match(entry, requested)
        if resolution is not None:
            return resolution
    return SKIP
