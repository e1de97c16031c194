"""Programmer-error exceptions.

Rule failures are never raised; they are returned in a ValidationReport.
These exceptions signal a broken registry or a broken rule contract.
"""


class RegistrationError(ValueError):
    """A rule could not be attached: malformed options, bad callable, sealed registry."""


class RuleExecutionError(RuntimeError):
    """A rule raised instead of returning a result."""

    def __init__(self, property: str, rule_id: str, error: BaseException):
        self.property = property
        self.rule_id = rule_id
        super().__init__(f"Rule '{rule_id}' on property '{property}' raised {type(error).__name__}: {error}")
