"""Command-line interface for notespaces."""


import argparse
import json
import logging
import sys
from typing import List, Optional
from terminaltables import AsciiTable
from notespaces.api import Notespaces
from notespaces.editor import EditorError
from notespaces.spaces import SpaceError


class UsageError(Exception):
    pass


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message):
        raise UsageError(f'{self.format_usage()}{self.prog}: error: {message}')


def _note_text_as_positional(argv: List[str]) -> List[str]:
    """Inserts ``--`` after the ``add`` command so that note text starting with a dash is not read as an option."""
    for i, arg in enumerate(argv):
        if arg.startswith('-'):
            continue
        rest = argv[i + 1:]
        if arg == 'add' and rest and rest[0] not in ('--', '-h', '--help'):
            return argv[:i + 1] + ['--'] + rest
        break
    return argv


def _confirm(prompt: str) -> Optional[bool]:
    """Asks a yes/no question on stdin. Returns None if the answer is neither."""
    print(prompt)
    answer = sys.stdin.readline().strip().lower()
    if answer in ('y', 'yes'):
        return True
    if answer in ('n', 'no'):
        return False
    return None


def _print_notes(ns: Notespaces) -> None:
    print(f'[{ns.space}]')
    if not len(ns.notes):
        print('No notes found')
    for key, text in ns.notes.items():
        print(f'{key}: {text}')


def _list(args, ns: Notespaces) -> int:
    if args.json:
        print(json.dumps({'space': ns.space, 'entries': ns.notes.as_json()['entries']}))
    elif args.table and len(ns.notes):
        data = [('Key', 'Note')] + ns.notes.items()
        table = AsciiTable(data, title=ns.space)
        table.justify_columns[0] = 'right'
        print(table.table)
    else:
        _print_notes(ns)
    return 0


def _add(args, ns: Notespaces) -> int:
    text = ' '.join(args.text)
    if not text:
        print('Usage: add <text>', file=sys.stderr)
        return 0
    key = ns.add(text)
    print(f'Note added: {key} -> {text}')
    _print_notes(ns)
    return 0


def _delete(args, ns: Notespaces) -> int:
    if not args.key:
        print('Usage: delete <key>', file=sys.stderr)
    elif ns.delete(args.key):
        print(f'Note deleted: {args.key}')
        _print_notes(ns)
    else:
        print(f'Note not found: {args.key}', file=sys.stderr)
    return 0


def _edit(args, ns: Notespaces) -> int:
    if not args.key:
        print('Usage: edit <key>', file=sys.stderr)
        return 0
    try:
        found = ns.edit(args.key)
    except EditorError as e:
        print(f'Edit aborted or failed. {e.message}', file=sys.stderr)
        return 0
    if found:
        print('Note updated.')
        _print_notes(ns)
    else:
        print(f'Note not found: {args.key}', file=sys.stderr)
    return 0


def _swap(args, ns: Notespaces) -> int:
    if not (args.key1 and args.key2):
        print('Usage: swap <key1> <key2>', file=sys.stderr)
    elif ns.swap(args.key1, args.key2):
        print(f'Swapped notes {args.key1} and {args.key2}')
        _print_notes(ns)
    else:
        print('One or both keys not found.', file=sys.stderr)
    return 0


def _clear(args, ns: Notespaces) -> int:
    answer = _confirm('Are you sure you want to delete all notes? (y/n): ')
    if answer:
        ns.clear()
        print('All notes deleted.')
    elif answer is None:
        print("Invalid input. Please enter 'y' or 'n'.")
    else:
        print('Aborted. No notes were deleted.')
    return 0


def _cd(args, ns: Notespaces) -> int:
    if not args.name:
        print('Usage: cd <space>', file=sys.stderr)
        return 0
    try:
        ns.use(args.name)
    except SpaceError as e:
        print(f'Failed to switch space: {e.message}', file=sys.stderr)
        return 1
    print(f"Switched to space '{args.name}'")
    return 0


def _spaces_usage(args, ns: Notespaces) -> int:
    print('Usage: spaces [list|add|rm|use] <name>', file=sys.stderr)
    return 0


def _spaces_list(args, ns: Notespaces) -> int:
    names = ns.spaces()
    if args.json:
        print(json.dumps([{'name': name, 'notes': ns.registry.count(name), 'current': name == ns.space}
                          for name in names]))
    elif args.table:
        data = [('Space', 'Notes', 'Current')]
        data += [(name, ns.registry.count(name), '*' if name == ns.space else '') for name in names]
        table = AsciiTable(data)
        table.justify_columns[1] = 'right'
        print(table.table)
    else:
        print('Available spaces:')
        for name in names:
            print(f'- {name}')
    return 0


def _spaces_add(args, ns: Notespaces) -> int:
    if not args.name:
        return _spaces_usage(args, ns)
    try:
        ns.create_space(args.name)
    except SpaceError as e:
        print(f'Failed to create space: {e.message}', file=sys.stderr)
        return 0
    print(f"Created and switched to space '{args.name}'")
    return 0


def _spaces_rm(args, ns: Notespaces) -> int:
    if not args.name:
        return _spaces_usage(args, ns)
    answer = _confirm(f"Are you sure you want to remove space '{args.name}' and all its notes? (y/n): ")
    if answer is None:
        print("Invalid input. Please enter 'y' or 'n'.")
        return 0
    if not answer:
        print('Aborted.')
        return 0
    try:
        ns.remove_space(args.name)
    except SpaceError:
        print(f"Failed to remove space '{args.name}'.", file=sys.stderr)
        return 0
    print(f"Removed space '{args.name}'.")
    print(f"Switched to '{ns.space}'.")
    return 0


def _spaces_use(args, ns: Notespaces) -> int:
    if not args.name:
        return _spaces_usage(args, ns)
    try:
        ns.use(args.name)
    except SpaceError:
        print(f"Failed to switch to space '{args.name}'.", file=sys.stderr)
        return 0
    print(f"Using space '{args.name}'.")
    return 0


def _add_format_args(parser: argparse.ArgumentParser) -> None:
    formats = parser.add_mutually_exclusive_group()
    formats.add_argument('-j', '--json', action='store_true', help='Output as JSON.')
    formats.add_argument('-t', '--table', action='store_true', help='Format output as a table.')


def argparser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(prog='notespaces')
    parser.set_defaults(func=None)
    parser.add_argument('-v', '--verbose', action='store_true', help='Log details of what is being done.')

    subs = parser.add_subparsers(title='Commands', dest='command')

    p_list = subs.add_parser('list', aliases=['ls'], help='Show the notes in the current space.')
    _add_format_args(p_list)
    p_list.set_defaults(func=_list)

    p_add = subs.add_parser('add', help='Add a note to the end of the current space.')
    p_add.add_argument('text', nargs='*', help='Text of the note. Multiple words are joined with spaces.')
    p_add.set_defaults(func=_add)

    p_del = subs.add_parser(
        'delete', aliases=['del', 'rm'],
        help='Delete a note. The notes after it are renumbered so that the keys stay contiguous.')
    p_del.add_argument('key', nargs='?')
    p_del.set_defaults(func=_delete)

    p_edit = subs.add_parser(
        'edit', aliases=['ed'],
        help='Edit a note in your editor (the "editor" config setting, or $EDITOR, or vim).')
    p_edit.add_argument('key', nargs='?')
    p_edit.set_defaults(func=_edit)

    p_swap = subs.add_parser('swap', help='Exchange the text of two notes.')
    p_swap.add_argument('key1', nargs='?')
    p_swap.add_argument('key2', nargs='?')
    p_swap.set_defaults(func=_swap)

    p_clear = subs.add_parser('clear', aliases=['cl'], help='Delete all notes in the current space, after asking.')
    p_clear.set_defaults(func=_clear)

    p_cd = subs.add_parser('cd', help='Switch to an existing space.')
    p_cd.add_argument('name', nargs='?')
    p_cd.set_defaults(func=_cd)

    p_spaces = subs.add_parser('spaces', help='Manage spaces.')
    p_spaces.set_defaults(func=_spaces_usage)
    spaces_subs = p_spaces.add_subparsers(title='Space commands', dest='spaces_command')

    p_sl = spaces_subs.add_parser('list', help='Show all spaces.')
    _add_format_args(p_sl)
    p_sl.set_defaults(func=_spaces_list)

    p_sa = spaces_subs.add_parser('add', help='Create an empty space and switch to it.')
    p_sa.add_argument('name', nargs='?')
    p_sa.set_defaults(func=_spaces_add)

    p_sr = spaces_subs.add_parser(
        'rm', help='Delete a space and all its notes, after asking, and switch to the default space.')
    p_sr.add_argument('name', nargs='?')
    p_sr.set_defaults(func=_spaces_rm)

    p_su = spaces_subs.add_parser('use', help='Switch to an existing space.')
    p_su.add_argument('name', nargs='?')
    p_su.set_defaults(func=_spaces_use)

    return parser


def main(args=None) -> int:
    """Runs the tool and returns its exit code.

    args may be an array of string command-line arguments; if absent,
    the process's arguments are used.
    """
    parser = argparser()
    try:
        args = parser.parse_args(_note_text_as_positional(sys.argv[1:] if args is None else list(args)))
    except UsageError as e:
        print(e, file=sys.stderr)
        return 1
    logging.basicConfig(format='%(levelname)s: %(message)s')
    logging.getLogger('notespaces').setLevel(logging.DEBUG if args.verbose else logging.WARNING)
    if not args.func:
        print('Error: No command provided.', file=sys.stderr)
        parser.print_usage(sys.stderr)
        return 1
    with Notespaces.for_user() as ns:
        try:
            return args.func(args, ns)
        except (OSError, SpaceError) as e:
            print(f'Error: {e}', file=sys.stderr)
            return 1
