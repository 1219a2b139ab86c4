"""Error kinds raised by the brewery domain beyond Protean's own.

Not-found, validation and version conflicts use ``ObjectNotFoundError``,
``ValidationError`` and ``ExpectedVersionError`` from ``protean.exceptions``.
The two kinds below depend on state held outside the request itself.
"""

from protean.exceptions import InvalidOperationError


class BusinessRuleViolation(InvalidOperationError):
    """A state-dependent rule rejected an otherwise well-formed request.

    Carries a field -> messages map, like ``ValidationError``, so callers can
    point at the fields that need to change.
    """

    def __init__(self, messages: dict[str, list[str]]):
        super().__init__(messages)
        self.messages = messages
        self.detail = "; ".join(dict.fromkeys(message for values in messages.values() for message in values))


class UniquenessConflict(InvalidOperationError):
    """A value that must be unique is already taken by another record."""

    def __init__(self, field: str, value: str):
        messages = {field: [f"{value} is already in use"]}
        super().__init__(messages)
        self.messages = messages
        self.detail = f"{field} already exists: {value}"
