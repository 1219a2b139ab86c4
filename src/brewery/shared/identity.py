"""Integer identity sequences.

Every aggregate and entity in the brewery domain is keyed by a positive,
monotonically increasing integer. Each kind of record draws its identifiers
from its own named sequence. The sequence row is written through the same
unit of work as the records it numbers, so identifiers handed out by a failed
command are rolled back with it.
"""

from protean.exceptions import ObjectNotFoundError
from protean.fields import Integer, String
from protean.utils.globals import current_domain

from brewery.domain import brewery


@brewery.aggregate
class IdentitySequence:
    name = String(identifier=True, max_length=50)
    last_value = Integer(default=0, min_value=0)

    def reserve(self, count: int) -> list[int]:
        first = self.last_value + 1
        self.last_value += count
        return list(range(first, self.last_value + 1))


def next_identities(name: str, count: int) -> list[int]:
    """Reserve ``count`` consecutive identifiers from the named sequence."""
    if count < 1:
        return []

    repo = current_domain.repository_for(IdentitySequence)
    try:
        sequence = repo.get(name)
    except ObjectNotFoundError:
        sequence = IdentitySequence(name=name)

    identities = sequence.reserve(count)
    repo.add(sequence)
    return identities


def next_identity(name: str) -> int:
    """Reserve a single identifier from the named sequence."""
    return next_identities(name, 1)[0]
