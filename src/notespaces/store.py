"""Reads and writes the JSON files that hold each space's notes.

The file format is::

    {
      "entries": {
        "1": "first note",
        "2": "second note"
      }
    }
"""

import json
import logging
import os
import os.path
from notespaces.models import Notes


logger = logging.getLogger(__name__)


def load_notes(path: str) -> Notes:
    """Reads the notes stored at the given path.

    This never raises for a bad file. A missing file gives an empty collection. So does a file that
    cannot be read or parsed, but in that case a warning is logged. If the keys in the file are not
    ``"1"`` to ``"N"`` (which can happen if it was edited by hand), they are renumbered, so that
    :meth:`notespaces.models.Notes.add` cannot produce a duplicate key.
    """
    if not os.path.exists(path):
        logger.debug('No notes file at %s', path)
        return Notes()
    try:
        with open(path, 'r', encoding='utf-8') as file:
            notes = Notes.from_json(json.load(file))
    except (OSError, ValueError) as e:
        logger.warning('Ignoring unreadable notes file %s: %s', path, e)
        return Notes()
    if not notes.is_dense():
        logger.warning('Renumbering notes in %s because the keys were not 1 to %d', path, len(notes))
        notes.renumber()
    return notes


def save_notes(notes: Notes, path: str) -> None:
    """Overwrites the file at the given path with the notes, creating parent directories as needed.

    Raises an IO-related exception if the file cannot be written.
    """
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as file:
        json.dump(notes.as_json(), file, indent=2, ensure_ascii=False)
    logger.debug('Saved %d notes to %s', len(notes), path)
