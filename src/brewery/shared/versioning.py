"""Optimistic concurrency helpers shared by all mutating command handlers."""

from datetime import UTC, datetime

from protean.exceptions import ExpectedVersionError


def assert_expected_version(aggregate, expected_version: int | None) -> None:
    """Reject a write prepared against a version that is no longer current.

    ``None`` means the caller did not send a version token; the write then
    applies to whatever version is stored.
    """
    if expected_version is None:
        return
    if aggregate.version != expected_version:
        raise ExpectedVersionError(
            f"{aggregate.__class__.__name__} {aggregate.id} is at version {aggregate.version}, "
            f"not {expected_version}"
        )


def mark_revised(aggregate) -> None:
    """Bump the version token and update timestamp after a successful change."""
    aggregate.version = (aggregate.version or 0) + 1
    aggregate.updated_date = datetime.now(UTC)
