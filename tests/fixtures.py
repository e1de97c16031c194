"""Validator classes shared across the test modules."""

import re

from propguard.validators import BaseValidation, validator

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class GoodValidation(BaseValidation):
    @validator("name")
    def name(self, value, *_):
        return value == "right name"

    @validator("multiple")
    def multiple1(self, value, *_):
        return value == "right multiple"

    @validator("multiple")
    def multiple2(self, value, *_):
        return isinstance(value, str)

    @validator("inverse", inverse=True)
    def inverse(self, value, *_):
        return value == "right inverse"

    @validator("message", message="Custom message for invalid")
    def message(self, value, *_):
        return value == "right message"

    @validator("optional", optional=True)
    def optional(self, value, *_):
        return value == "right optional"

    @validator("priority")
    def priority1(self, value, *_):
        return isinstance(value, (int, float)) and not isinstance(value, bool)

    @validator("priority", priority=1)
    def priority2a(self, value, *_):
        return value > 10

    @validator("priority", priority=1)
    def priority2b(self, value, *_):
        return value < 100

    @validator("initial-value", optional=True)
    def initial_value(self, value, initial, subject):
        return value == initial


GOOD_SUBJECT = {
    "name": "right name",
    "multiple": "right multiple",
    "inverse": "wrong inverse",
    "message": "right message",
    "optional": "right optional",
    "priority": 50,
}


class SchemaValidation(BaseValidation):
    @validator("email")
    def is_string(self, value, *_):
        return isinstance(value, str)

    @validator("email")
    def valid_format(self, value, *_):
        return isinstance(value, str) and EMAIL_PATTERN.match(value)

    @validator("email", schema="create")
    async def unique_email(self, value, *_):
        # Stands in for a lookup against storage
        return value != "taken@example.com"

    @validator(
        "email",
        schema={
            "for": "custom",
            "options": {"message": "Email domain must be example.org for custom schema", "optional": True},
        },
    )
    def custom_domain_email(self, value, *_):
        return value.endswith("@example.org")

    @validator(
        "email",
        schema=[
            {"for": "premium", "options": {"message": "Premium users must use premium domain"}},
            {"for": "admin", "options": {"message": "Admins must use admin domain", "priority": 2}},
        ],
    )
    def special_domain_email(self, value, *_):
        return value.endswith("@premium.example.com") or value.endswith("@admin.example.com")

    @validator(
        "email",
        schema=["legacy", {"for": "mixed", "options": {"message": "Mixed schema validation failed"}}],
    )
    def mixed_schema_email(self, value, *_):
        return value.endswith("@example.org")

    @validator("email", schema={"for": "minimal"})
    def domain_validation(self, value, *_):
        return value.endswith("@example.org")

    @validator("password")
    def is_password_string(self, value, *_):
        return isinstance(value, str)

    @validator("password", schema="create")
    def strong_password(self, value, *_):
        return isinstance(value, str) and len(value) >= 8

    @validator("password", schema=["update", "reset"])
    def different_password(self, value, initial, subject):
        return value != initial

    @validator("name", schema=["create", "update"])
    def valid_name(self, value, *_):
        return isinstance(value, str) and len(value) >= 2


class LocationValidation(BaseValidation):
    @validator("longitude")
    def validate_longitude(self, value, *_):
        return isinstance(value, (int, float)) and -180 <= value <= 180

    @validator("latitude")
    def validate_latitude(self, value, *_):
        return isinstance(value, (int, float)) and -90 <= value <= 90


class TagValidation(BaseValidation):
    @validator("name")
    def validate_name(self, value, *_):
        return value == "valid"


class NestedValidation(BaseValidation):
    @validator("name")
    def validate_name(self, value, *_):
        return value == "valid-name"

    @validator("location", nested=LocationValidation)
    def validate_location(self, location, *_):
        return location

    @validator("optional_location", nested=LocationValidation, optional=True)
    def validate_optional_location(self, location, *_):
        return location

    @validator("tags", nested=TagValidation, optional=True)
    def validate_tags(self, tags, *_):
        return tags
