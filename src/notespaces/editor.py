"""Lets the user edit text in an external editor such as vim."""

import logging
import os
import shlex
import subprocess
import tempfile


logger = logging.getLogger(__name__)


class EditorError(Exception):
    """Raised when the editor cannot be started or exits unsuccessfully."""
    def __init__(self, message: str, cause: BaseException = None):
        super().__init__(message)
        self.message = message
        self.cause = cause


def edit_text(initial: str, command: str) -> str:
    """Opens the text in the given editor command, waits for it to exit, and returns the edited text.

    The text is written to a temporary file (followed by a newline), which is passed to the command as its last
    argument and deleted afterward. Leading and trailing whitespace is stripped from the result.

    Raises :exc:`EditorError` if the editor fails to start or exits with a nonzero status.
    """
    fd, path = tempfile.mkstemp(prefix='notespaces-', suffix='.txt')
    try:
        with os.fdopen(fd, 'w', encoding='utf-8') as file:
            file.write(f'{initial}\n')
        args = shlex.split(command) + [path]
        logger.debug('Running editor: %s', args)
        try:
            subprocess.run(args, check=True)
        except (OSError, subprocess.SubprocessError) as e:
            raise EditorError(f'Editor command failed: {command}', e)
        with open(path, 'r', encoding='utf-8') as file:
            return file.read().strip()
    finally:
        if os.path.exists(path):
            os.remove(path)
