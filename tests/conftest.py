import pytest


@pytest.fixture
def home(fs, monkeypatch):
    monkeypatch.setenv('HOME', '/home/tester')
    monkeypatch.delenv('EDITOR', raising=False)
    fs.create_dir('/home/tester')
    return '/home/tester'
