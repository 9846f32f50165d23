"""Exceptions raised by the calendar and almanac layers."""


class AmlichError(Exception):
    """Base class for all amlich errors."""


class RuleSetError(AmlichError):
    """An almanac rule set is malformed or is missing a required entry."""


class UnknownRulesetError(AmlichError, LookupError):
    """No registered rule set matches the requested id or alias."""

    def __init__(self, ruleset_id: str):
        self.ruleset_id = ruleset_id
        super().__init__(f"unknown almanac ruleset id: {ruleset_id}")

    def __str__(self) -> str:
        return f"unknown almanac ruleset id: {self.ruleset_id}"


class LeapMonthScanError(AmlichError, RuntimeError):
    """The leap month scan did not settle within its iteration cap."""
