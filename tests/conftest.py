import pytest

from main import main


@pytest.fixture
def repo(tmp_path, monkeypatch):
    root = tmp_path.resolve()
    monkeypatch.chdir(root)
    assert main(["init"]) == 0
    return root
