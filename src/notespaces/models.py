"""Defines the in-memory representation of a space's notes.

The most important class is :class:`Notes`.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple


@dataclass
class Notes:
    """An ordered collection of notes, keyed by stringified positive integers.

    Iteration order is insertion order. Keys stay dense - ``"1"`` to ``"N"`` - because :meth:`delete`
    renumbers everything after a removal, and :meth:`add` always uses ``N + 1``.
    Adding, replacing and swapping never reorder anything.
    """

    entries: Dict[str, str] = field(default_factory=dict)
    """Maps keys to note text, in display order."""

    def __len__(self) -> int:
        return len(self.entries)

    def get(self, key: str) -> Optional[str]:
        return self.entries.get(key)

    def items(self) -> List[Tuple[str, str]]:
        """Returns ``(key, text)`` pairs in display order."""
        return list(self.entries.items())

    def add(self, text: str) -> str:
        """Appends a note and returns its key, which is the number of notes after adding it."""
        key = str(len(self.entries) + 1)
        self.entries[key] = text
        return key

    def delete(self, key: str) -> bool:
        """Removes the note with the given key and renumbers the rest.

        Returns False, leaving the collection untouched, if there is no such note.
        """
        if key not in self.entries:
            return False
        del self.entries[key]
        self.renumber()
        return True

    def renumber(self) -> None:
        """Rewrites the keys as ``"1"`` to ``"N"``, keeping the current order of the notes."""
        values = list(self.entries.values())
        self.entries = {str(i): value for i, value in enumerate(values, 1)}

    def replace(self, key: str, text: str) -> bool:
        """Changes the text of an existing note without moving it. Returns False if there is no such note."""
        if key not in self.entries:
            return False
        self.entries[key] = text
        return True

    def swap(self, key1: str, key2: str) -> bool:
        """Exchanges the text of two notes. The keys stay where they are.

        Returns False, changing nothing, unless both keys exist.
        """
        if key1 not in self.entries or key2 not in self.entries:
            return False
        self.entries[key1], self.entries[key2] = self.entries[key2], self.entries[key1]
        return True

    def clear(self) -> None:
        self.entries = {}

    def is_dense(self) -> bool:
        """True if the keys are exactly ``"1"`` to ``"N"`` in order."""
        return list(self.entries.keys()) == [str(i) for i in range(1, len(self.entries) + 1)]

    def as_json(self) -> dict:
        """Returns a dict representing the instance, suitable for serializing as json."""
        return {'entries': dict(self.entries)}

    @classmethod
    def from_json(cls, data) -> Notes:
        """Builds an instance from the structure produced by :meth:`as_json`.

        Raises :exc:`ValueError` if the data does not have that shape.
        """
        if not isinstance(data, dict) or not isinstance(data.get('entries'), dict):
            raise ValueError('Expected an object with an "entries" object')
        entries = data['entries']
        for key, value in entries.items():
            if not isinstance(value, str):
                raise ValueError(f'Note {key} is not a string: {value!r}')
        return cls(dict(entries))
