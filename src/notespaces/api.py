"""Provides the main entry point for using the library, :class:`Notespaces`"""

from __future__ import annotations
import logging
from typing import List, Optional
from notespaces.conf import NotespacesConf
from notespaces.editor import edit_text
from notespaces.models import Notes
from notespaces.spaces import SpaceRegistry


logger = logging.getLogger(__name__)


class Notespaces:
    """Main entry point for working programmatically with your notes.

    Generally, you should get an instance using the :meth:`Notespaces.for_user` method, which also works as a
    context manager.

    The current space is looked up once, when the instance is created, and every note operation applies to that
    space. Methods that change notes save them immediately; reading never writes.

    .. attribute:: conf
       :type: notespaces.conf.NotespacesConf

    .. attribute:: registry
       :type: notespaces.spaces.SpaceRegistry

    .. attribute:: space
       :type: str

       Name of the space being worked on.

    Here's an example that copies every note in the current space into a space named "archive":

    .. code-block:: python

       from notespaces.api import Notespaces
       with Notespaces.for_user() as ns:
           texts = [text for _, text in ns.notes.items()]
           ns.use('archive')
           for text in texts:
               ns.add(text)
    """

    @staticmethod
    def for_user() -> Notespaces:
        """Creates an instance using the user's ``~/.notespaces.conf.py`` file, or the defaults if there is none."""
        return Notespaces(NotespacesConf.for_user())

    def __init__(self, conf: NotespacesConf):
        self.conf = conf
        self.registry = SpaceRegistry(conf)
        self.space = self.registry.current()
        self._notes: Optional[Notes] = None

    @property
    def notes(self) -> Notes:
        """The notes in the current space, loaded from disk the first time they are needed."""
        if self._notes is None:
            self._notes = self.registry.load(self.space)
        return self._notes

    def save(self) -> None:
        self.registry.save(self.notes, self.space)

    def add(self, text: str) -> str:
        """Appends a note, saves, and returns the new note's key."""
        key = self.notes.add(text)
        self.save()
        return key

    def delete(self, key: str) -> bool:
        """Deletes a note and renumbers the remaining ones. Returns False, without saving, if there was no such note."""
        if not self.notes.delete(key):
            return False
        self.save()
        return True

    def edit(self, key: str) -> bool:
        """Opens a note in the configured editor and saves the result.

        Returns False if there is no such note; the editor is not started in that case. Raises
        :exc:`notespaces.editor.EditorError` if the editor fails, in which case nothing is changed.
        """
        old = self.notes.get(key)
        if old is None:
            return False
        new = edit_text(old, self.conf.editor_command())
        self.notes.replace(key, new)
        self.save()
        return True

    def swap(self, key1: str, key2: str) -> bool:
        """Exchanges the text of two notes. Returns False, without saving, unless both exist."""
        if not self.notes.swap(key1, key2):
            return False
        self.save()
        return True

    def clear(self) -> None:
        """Deletes every note in the current space. Ask the user first!"""
        self.notes.clear()
        self.save()

    def spaces(self) -> List[str]:
        return self.registry.list()

    def use(self, name: str) -> None:
        """Makes the named space current. Raises :exc:`notespaces.spaces.SpaceNotFoundError` if it does not exist."""
        self.registry.switch(name)
        self._set_space(name)

    def create_space(self, name: str) -> None:
        """Creates an empty space and makes it current."""
        self.registry.create(name)
        self._set_space(name)

    def remove_space(self, name: str) -> None:
        """Deletes a space and all its notes, then makes the default space current."""
        self.registry.remove(name)
        self._set_space(self.conf.default_space)

    def _set_space(self, name: str) -> None:
        if name != self.space:
            logger.debug('Switching from space %s to %s', self.space, name)
        self.space = name
        self._notes = None

    def close(self):
        """Releases any cached notes. Changes are already saved by the methods that make them."""
        self._notes = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
