"""Preferences concept.

The collection is declared but nothing reads or writes it yet: every
operation is a no-op that returns None.
"""
from tandem.concepts.base import Concept
from tandem.models.preference import Preference


class PreferencesConcept(Concept[Preference]):
    """Placeholder for user preferences."""

    model = Preference
    collection_name = "preferences"
    entity = "preference"

    async def create(self) -> None:
        return None

    async def view(self) -> None:
        return None

    async def edit(self) -> None:
        return None

    async def delete(self) -> None:
        return None
