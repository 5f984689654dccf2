import io
import json
from pathlib import Path
import subprocess
from notespaces import cli


NOTES_HOME = Path('/home/tester/.my_notes')


def nd_setup(fs, home, notes=None, space='default', current=None):
    if notes is not None:
        fs.create_file(NOTES_HOME.joinpath('spaces', f'{space}.json'),
                       contents=json.dumps({'entries': notes}))
    if current:
        fs.create_file(NOTES_HOME.joinpath('current_space'), contents=f'{current}\n')


def stored(space='default'):
    return json.loads(NOTES_HOME.joinpath('spaces', f'{space}.json').read_text())['entries']


def answer(monkeypatch, text):
    monkeypatch.setattr('sys.stdin', io.StringIO(text))


def test_no_command(home, capsys):
    assert cli.main([]) == 1
    out, err = capsys.readouterr()
    assert 'No command provided' in err


def test_unknown_command(home, capsys):
    assert cli.main(['frobnicate']) == 1
    out, err = capsys.readouterr()
    assert 'invalid choice' in err
    assert not out


def test_list_empty(home, capsys):
    assert cli.main(['list']) == 0
    out, err = capsys.readouterr()
    assert out == '[default]\nNo notes found\n'
    assert not NOTES_HOME.exists()


def test_list(fs, home, capsys):
    nd_setup(fs, home, {'1': 'first', '2': 'second'})
    assert cli.main(['ls']) == 0
    out, err = capsys.readouterr()
    assert out == '[default]\n1: first\n2: second\n'
    assert cli.main(['ls', '-j']) == 0
    out, err = capsys.readouterr()
    assert json.loads(out) == {'space': 'default', 'entries': {'1': 'first', '2': 'second'}}
    assert cli.main(['ls', '-t']) == 0
    out, err = capsys.readouterr()
    assert 'default' in out
    assert '| Key | Note   |' in out
    assert '|   2 | second |' in out


def test_list_malformed(fs, home, capsys, caplog):
    fs.create_file(NOTES_HOME.joinpath('spaces', 'default.json'), contents='not json')
    assert cli.main(['list']) == 0
    out, err = capsys.readouterr()
    assert out == '[default]\nNo notes found\n'
    assert 'Ignoring unreadable notes file' in caplog.text
    assert NOTES_HOME.joinpath('spaces', 'default.json').read_text() == 'not json'


def test_add(home, capsys):
    assert cli.main(['add', 'buy', 'milk']) == 0
    assert cli.main(['add', 'call mom']) == 0
    out, err = capsys.readouterr()
    assert out == ('Note added: 1 -> buy milk\n[default]\n1: buy milk\n'
                   'Note added: 2 -> call mom\n[default]\n1: buy milk\n2: call mom\n')
    assert stored() == {'1': 'buy milk', '2': 'call mom'}


def test_add_missing_text(home, capsys):
    assert cli.main(['add']) == 0
    out, err = capsys.readouterr()
    assert 'Usage: add <text>' in err
    assert not NOTES_HOME.exists()


def test_delete(fs, home, capsys):
    nd_setup(fs, home, {'1': 'A', '2': 'B', '3': 'C'})
    assert cli.main(['rm', '2']) == 0
    out, err = capsys.readouterr()
    assert out == 'Note deleted: 2\n[default]\n1: A\n2: C\n'
    assert stored() == {'1': 'A', '2': 'C'}
    assert cli.main(['del', '9']) == 0
    out, err = capsys.readouterr()
    assert err == 'Note not found: 9\n'
    assert cli.main(['delete']) == 0
    out, err = capsys.readouterr()
    assert 'Usage: delete <key>' in err
    assert stored() == {'1': 'A', '2': 'C'}


def test_edit(fs, home, capsys, mocker, monkeypatch):
    monkeypatch.setenv('EDITOR', 'my-editor')

    def run(args, check):
        assert args[0] == 'my-editor'
        Path(args[-1]).write_text('rewritten\n')
    mocker.patch('subprocess.run', side_effect=run)
    nd_setup(fs, home, {'1': 'A', '2': 'B'})
    assert cli.main(['ed', '1']) == 0
    out, err = capsys.readouterr()
    assert out == 'Note updated.\n[default]\n1: rewritten\n2: B\n'
    assert stored() == {'1': 'rewritten', '2': 'B'}


def test_edit_failures(fs, home, capsys, mocker):
    run = mocker.patch('subprocess.run', side_effect=subprocess.CalledProcessError(1, 'vim'))
    nd_setup(fs, home, {'1': 'A'})
    assert cli.main(['edit', '2']) == 0
    out, err = capsys.readouterr()
    assert err == 'Note not found: 2\n'
    run.assert_not_called()
    assert cli.main(['edit', '1']) == 0
    out, err = capsys.readouterr()
    assert 'Edit aborted or failed.' in err
    assert stored() == {'1': 'A'}


def test_swap(fs, home, capsys):
    nd_setup(fs, home, {'1': 'A', '2': 'B'})
    assert cli.main(['swap', '1', '2']) == 0
    out, err = capsys.readouterr()
    assert out == 'Swapped notes 1 and 2\n[default]\n1: B\n2: A\n'
    assert cli.main(['swap', '1', '3']) == 0
    out, err = capsys.readouterr()
    assert err == 'One or both keys not found.\n'
    assert cli.main(['swap', '1']) == 0
    out, err = capsys.readouterr()
    assert 'Usage: swap <key1> <key2>' in err
    assert stored() == {'1': 'B', '2': 'A'}


def test_clear(fs, home, capsys, monkeypatch):
    nd_setup(fs, home, {'1': 'A', '2': 'B'})
    answer(monkeypatch, 'n\n')
    assert cli.main(['clear']) == 0
    out, err = capsys.readouterr()
    assert 'Aborted. No notes were deleted.' in out
    assert stored() == {'1': 'A', '2': 'B'}

    answer(monkeypatch, 'maybe\n')
    assert cli.main(['cl']) == 0
    out, err = capsys.readouterr()
    assert "Invalid input. Please enter 'y' or 'n'." in out
    assert stored() == {'1': 'A', '2': 'B'}

    answer(monkeypatch, '')
    assert cli.main(['cl']) == 0
    assert stored() == {'1': 'A', '2': 'B'}

    answer(monkeypatch, 'YES\n')
    assert cli.main(['clear']) == 0
    out, err = capsys.readouterr()
    assert 'All notes deleted.' in out
    assert stored() == {}


def test_cd(fs, home, capsys):
    nd_setup(fs, home, {'1': 'work note'}, space='work')
    assert cli.main(['cd', 'work']) == 0
    out, err = capsys.readouterr()
    assert out == "Switched to space 'work'\n"
    assert NOTES_HOME.joinpath('current_space').read_text() == 'work\n'
    assert cli.main(['ls']) == 0
    out, err = capsys.readouterr()
    assert out == '[work]\n1: work note\n'


def test_cd_missing(fs, home, capsys):
    nd_setup(fs, home, current='default')
    assert cli.main(['cd', 'nowhere']) == 1
    out, err = capsys.readouterr()
    assert 'Failed to switch space' in err
    assert NOTES_HOME.joinpath('current_space').read_text() == 'default\n'
    assert cli.main(['cd']) == 0
    out, err = capsys.readouterr()
    assert 'Usage: cd <space>' in err


def test_spaces_add_and_list(home, capsys):
    assert cli.main(['spaces', 'add', 'work']) == 0
    out, err = capsys.readouterr()
    assert out == "Created and switched to space 'work'\n"
    assert stored('work') == {}
    assert cli.main(['add', 'task']) == 0
    assert cli.main(['spaces', 'add', 'home']) == 0
    capsys.readouterr()

    assert cli.main(['spaces', 'list']) == 0
    out, err = capsys.readouterr()
    assert out == 'Available spaces:\n- home\n- work\n'
    assert cli.main(['spaces', 'list', '-j']) == 0
    out, err = capsys.readouterr()
    assert json.loads(out) == [{'name': 'home', 'notes': 0, 'current': True},
                               {'name': 'work', 'notes': 1, 'current': False}]
    assert cli.main(['spaces', 'list', '-t']) == 0
    out, err = capsys.readouterr()
    assert '| work  |     1 |         |' in out


def test_spaces_add_existing(fs, home, capsys):
    nd_setup(fs, home, {'1': 'precious'}, space='work')
    assert cli.main(['spaces', 'add', 'work']) == 0
    out, err = capsys.readouterr()
    assert "Space 'work' already exists" in err
    assert stored('work') == {'1': 'precious'}


def test_spaces_use(fs, home, capsys):
    nd_setup(fs, home, {}, space='work')
    assert cli.main(['spaces', 'use', 'work']) == 0
    out, err = capsys.readouterr()
    assert out == "Using space 'work'.\n"
    assert cli.main(['spaces', 'use', 'nope']) == 0
    out, err = capsys.readouterr()
    assert err == "Failed to switch to space 'nope'.\n"
    assert NOTES_HOME.joinpath('current_space').read_text() == 'work\n'


def test_spaces_rm(fs, home, capsys, monkeypatch):
    nd_setup(fs, home, {'1': 'w'}, space='work', current='work')
    answer(monkeypatch, 'no\n')
    assert cli.main(['spaces', 'rm', 'work']) == 0
    out, err = capsys.readouterr()
    assert 'Aborted.' in out
    assert stored('work') == {'1': 'w'}

    answer(monkeypatch, 'y\n')
    assert cli.main(['spaces', 'rm', 'work']) == 0
    out, err = capsys.readouterr()
    assert out.endswith("Removed space 'work'.\nSwitched to 'default'.\n")
    assert not NOTES_HOME.joinpath('spaces', 'work.json').exists()
    assert not NOTES_HOME.joinpath('spaces', 'default.json').exists()
    assert NOTES_HOME.joinpath('current_space').read_text() == 'default\n'

    answer(monkeypatch, 'y\n')
    assert cli.main(['spaces', 'rm', 'work']) == 0
    out, err = capsys.readouterr()
    assert err == "Failed to remove space 'work'.\n"


def test_spaces_usage(home, capsys):
    assert cli.main(['spaces']) == 0
    out, err = capsys.readouterr()
    assert 'Usage: spaces [list|add|rm|use] <name>' in err
    assert cli.main(['spaces', 'add']) == 0
    out, err = capsys.readouterr()
    assert 'Usage: spaces' in err
    assert cli.main(['spaces', 'bogus']) == 1


def test_save_failure_is_reported(fs, home, capsys, mocker):
    mocker.patch('notespaces.spaces.save_notes', side_effect=PermissionError('read-only'))
    assert cli.main(['add', 'lost']) == 1
    out, err = capsys.readouterr()
    assert 'Error: read-only' in err


def test_add_text_starting_with_dash(home, capsys):
    assert cli.main(['add', '-x', 'marks', 'the', 'spot']) == 0
    assert cli.main(['-v', 'add', '--', '--verbose', 'is', 'a', 'flag']) == 0
    assert stored() == {'1': '-x marks the spot', '2': '--verbose is a flag'}


def test_spaces_list_skips_hidden_files(fs, home, capsys):
    nd_setup(fs, home, {'1': 'w'}, space='work')
    fs.create_file(NOTES_HOME.joinpath('spaces', '.backup.json'), contents='{"entries": {}}')
    assert cli.main(['spaces', 'list', '-j']) == 0
    out, err = capsys.readouterr()
    assert json.loads(out) == [{'name': 'work', 'notes': 1, 'current': False}]
    assert cli.main(['spaces', 'list']) == 0
    out, err = capsys.readouterr()
    assert out == 'Available spaces:\n- work\n'


def test_invalid_current_space_falls_back_to_default(fs, home, capsys):
    nd_setup(fs, home, {'1': 'd'}, current='../oops')
    assert cli.main(['ls']) == 0
    out, err = capsys.readouterr()
    assert out == '[default]\n1: d\n'
