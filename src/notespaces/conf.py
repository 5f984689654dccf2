from __future__ import annotations
from dataclasses import dataclass, replace
import os
import os.path
from typing import Optional


DEFAULT_EDITOR = 'vim'


@dataclass
class NotespacesConf:
    base_path: str = os.path.join('~', '.my_notes')
    """Directory holding the current-space pointer file and the ``spaces`` folder.

    Each space is stored as ``<base_path>/spaces/<name>.json``, and the name of the active space
    is kept in ``<base_path>/current_space``.
    """

    default_space: str = 'default'
    """The space used when no space has been selected yet, and after the active space is removed."""

    editor: Optional[str] = None
    """Command used by ``edit`` to open a note, such as ``"nano"`` or ``"code --wait"``.

    If None, the ``EDITOR`` environment variable is used, or ``vim`` if that is unset too.
    """

    pointer_filename: str = 'current_space'
    spaces_dirname: str = 'spaces'

    @classmethod
    def user_config_path(cls) -> str:
        return os.path.expanduser(os.path.join('~', '.notespaces.conf.py'))

    @classmethod
    def for_user(cls) -> NotespacesConf:
        """Loads the user's ``~/.notespaces.conf.py`` file, or returns the defaults if it does not exist.

        The file is a Python script which must assign an instance of this class to the variable ``conf``.
        """
        path = cls.user_config_path()
        if not os.path.exists(path):
            return cls().standardize()
        with open(path, 'r') as file:
            conf_script = file.read()
        context = {}
        exec(conf_script, context)
        if 'conf' not in context or not isinstance(context['conf'], cls):
            raise Exception('You need to assign an instance of NotespacesConf to the variable `conf` '
                            f'in your config file: {path}')
        return context['conf'].standardize()

    def standardize(self) -> NotespacesConf:
        return replace(
            self,
            base_path=os.path.abspath(os.path.expanduser(self.base_path))
        )

    def spaces_path(self) -> str:
        return os.path.join(self.base_path, self.spaces_dirname)

    def pointer_path(self) -> str:
        return os.path.join(self.base_path, self.pointer_filename)

    def space_path(self, name: str) -> str:
        return os.path.join(self.spaces_path(), f'{name}.json')

    def editor_command(self) -> str:
        return self.editor or os.environ.get('EDITOR') or DEFAULT_EDITOR
