"""Validation models: rule options, schema descriptors and the report structure."""

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictInt, model_validator


class RuleOverrides(BaseModel):
    """Partial rule options a schema descriptor may override."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    priority: Optional[StrictInt] = None
    message: Optional[str] = None
    inverse: Optional[bool] = None
    optional: Optional[bool] = None

    def updates(self) -> dict:
        """Only the keys the caller actually set."""
        return self.model_dump(exclude_unset=True, exclude_none=True)


class SchemaDescriptor(BaseModel):
    """Enables a rule for one schema and overrides some of its options there.

    Built from ``{"for": "custom", "options": {"message": "..."}}`` or
    ``SchemaDescriptor(for_="custom", options=RuleOverrides(...))``.
    """

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    for_: str = Field(alias="for", min_length=1)
    options: RuleOverrides = Field(default_factory=RuleOverrides)


SchemaSelector = Union[str, SchemaDescriptor, list[Union[str, SchemaDescriptor]]]


class RuleOptions(BaseModel):
    """Resolved options of one registered rule."""

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        populate_by_name=True,
        arbitrary_types_allowed=True,
    )

    priority: StrictInt = 0
    message: Optional[str] = None
    inverse: bool = False
    optional: bool = False
    schema_selector: Optional[SchemaSelector] = Field(default=None, alias="schema")
    nested: Optional[type] = None
    nested_schema: Optional[Union[str, list[str]]] = None

    @property
    def is_nested(self) -> bool:
        return self.nested is not None

    def merged(self, overrides: Optional[RuleOverrides]) -> "RuleOptions":
        """Options with a schema descriptor's overrides applied (override wins)."""
        if overrides is None:
            return self
        updates = overrides.updates()
        if not updates:
            return self
        return self.model_copy(update=updates)


ReportEntry = Union[list[str], "ValidationReport", list["ValidationReport"]]


class ValidationReport(BaseModel):
    """Result of one validation call.

    ``errors`` maps a property to its failed-rule messages, to the report of a
    nested object, or to one report per element of a nested list.
    """

    errors: dict[str, ReportEntry] = Field(default_factory=dict)
    valid: bool = True

    @model_validator(mode="after")
    def _valid_matches_errors(self) -> "ValidationReport":
        if self.valid != (not self.errors):
            raise ValueError("valid must be true exactly when errors is empty")
        return self

    @classmethod
    def ok(cls) -> "ValidationReport":
        return cls(errors={}, valid=True)

    def messages_for(self, property: str) -> list[str]:
        """Flat messages for one property, including nested ones."""
        return [
            message
            for path, messages in self.flatten().items()
            if path == property or path.startswith((property + ".", property + "["))
            for message in messages
        ]

    def flatten(self, prefix: str = "") -> dict[str, list[str]]:
        """Collapse nested reports into ``location.latitude`` / ``tags[1].name`` paths."""
        flat: dict[str, list[str]] = {}
        for property, entry in self.errors.items():
            path = f"{prefix}.{property}" if prefix else property
            if isinstance(entry, ValidationReport):
                flat.update(entry.flatten(path))
            elif entry and isinstance(entry[0], ValidationReport):
                for index, child in enumerate(entry):
                    flat.update(child.flatten(f"{path}[{index}]"))
            else:
                flat[path] = list(entry)
        return flat


ValidationReport.model_rebuild()
