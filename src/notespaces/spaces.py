"""Provides the :class:`SpaceRegistry` class, which tracks which spaces exist and which one is active."""

import logging
import os
import os.path
from typing import List
from notespaces.conf import NotespacesConf
from notespaces.models import Notes
from notespaces.store import load_notes, save_notes


logger = logging.getLogger(__name__)


class SpaceError(Exception):
    """Base class for problems with a space."""
    def __init__(self, message: str, name: str):
        super().__init__(message)
        self.message = message
        self.name = name


class SpaceNotFoundError(SpaceError):
    def __init__(self, name: str):
        super().__init__(f"Space '{name}' does not exist", name)


class SpaceExistsError(SpaceError):
    def __init__(self, name: str):
        super().__init__(f"Space '{name}' already exists", name)


class InvalidSpaceNameError(SpaceError):
    def __init__(self, name: str):
        super().__init__(f"Invalid space name: '{name}'", name)


def validate_name(name: str) -> str:
    """Returns the name unchanged, or raises :exc:`InvalidSpaceNameError` if it cannot be used as a filename."""
    if not name or name.startswith('.') or '/' in name or os.sep in name:
        raise InvalidSpaceNameError(name)
    return name


class SpaceRegistry:
    """Manages the space files and the pointer to the current space.

    .. attribute:: conf
       :type: notespaces.conf.NotespacesConf
    """
    def __init__(self, conf: NotespacesConf):
        self.conf = conf

    def path(self, name: str) -> str:
        return self.conf.space_path(validate_name(name))

    def exists(self, name: str) -> bool:
        return os.path.isfile(self.path(name))

    def current(self) -> str:
        """Returns the name of the current space, or the default space if none has been selected.

        Never raises. An unreadable or empty pointer file, or one naming an invalid space, also gives the
        default space.
        """
        try:
            with open(self.conf.pointer_path(), 'r', encoding='utf-8') as file:
                name = file.read().strip()
        except FileNotFoundError:
            return self.conf.default_space
        except OSError as e:
            logger.warning('Could not read current space from %s: %s', self.conf.pointer_path(), e)
            return self.conf.default_space
        if not name:
            return self.conf.default_space
        try:
            return validate_name(name)
        except InvalidSpaceNameError:
            logger.warning('Ignoring invalid current space %r in %s', name, self.conf.pointer_path())
            return self.conf.default_space

    def _point_to(self, name: str) -> None:
        os.makedirs(self.conf.base_path, exist_ok=True)
        with open(self.conf.pointer_path(), 'w', encoding='utf-8') as file:
            file.write(f'{name}\n')
        logger.debug('Current space is now %s', name)

    def switch(self, name: str) -> None:
        """Makes the named space current.

        Raises :exc:`SpaceNotFoundError`, leaving the current space unchanged, if the space's file does not exist.
        """
        if not self.exists(name):
            raise SpaceNotFoundError(name)
        self._point_to(name)

    def create(self, name: str) -> None:
        """Creates a space with no notes and makes it current.

        Raises :exc:`SpaceExistsError` rather than overwriting an existing space, or an IO-related exception
        if the file cannot be created.
        """
        path = self.path(name)
        os.makedirs(os.path.dirname(path), exist_ok=True)
        if os.path.exists(path):
            raise SpaceExistsError(name)
        save_notes(Notes(), path)
        self.switch(name)

    def remove(self, name: str) -> None:
        """Deletes the space's file and makes the default space current.

        The default space becomes current even if it has no file yet; it will be created by the first
        note added to it. Raises :exc:`SpaceNotFoundError` if the space does not exist.
        """
        path = self.path(name)
        try:
            os.remove(path)
        except FileNotFoundError:
            raise SpaceNotFoundError(name)
        self._point_to(self.conf.default_space)

    def list(self) -> List[str]:
        """Returns the names of all spaces, sorted.

        Files whose names could not be used as space names, such as ``.backup.json``, are skipped.
        """
        spaces_path = self.conf.spaces_path()
        if not os.path.isdir(spaces_path):
            return []
        names = []
        for entry in os.scandir(spaces_path):
            stem, ext = os.path.splitext(entry.name)
            if ext != '.json' or not entry.is_file():
                continue
            try:
                names.append(validate_name(stem))
            except InvalidSpaceNameError:
                logger.debug('Skipping %s', entry.path)
        return sorted(names)

    def count(self, name: str) -> int:
        """Returns the number of notes in the named space."""
        return len(self.load(name))

    def load(self, name: str) -> Notes:
        return load_notes(self.path(name))

    def save(self, notes: Notes, name: str) -> None:
        save_notes(notes, self.path(name))
