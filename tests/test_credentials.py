import json
from pathlib import Path

import pytest

from attendance_sync.credentials import ACCESS_TOKEN_KEY, BASIC_AUTH_KEY, CredentialStore
from attendance_sync.errors import CredentialStoreError
from attendance_sync.models import Credentials


def test_load_missing_file_defaults_to_empty(tmp_path: Path) -> None:
    store = CredentialStore(tmp_path / "creds.json")

    assert store.load() == Credentials(basic_auth="", access_token="")


def test_save_writes_both_namespaced_keys(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "creds.json"
    store = CredentialStore(path)

    store.save(Credentials(basic_auth="c3NkX2F", access_token="tok-123"))

    assert json.loads(path.read_text(encoding="utf-8")) == {
        BASIC_AUTH_KEY: "c3NkX2F",
        ACCESS_TOKEN_KEY: "tok-123",
    }
    assert CredentialStore(path).load() == Credentials("c3NkX2F", "tok-123")
    assert [p.name for p in path.parent.iterdir()] == ["creds.json"]


def test_save_overwrites_previous_values(tmp_path: Path) -> None:
    store = CredentialStore(tmp_path / "creds.json")
    store.save(Credentials("old-basic", "old-token"))
    store.save(Credentials("new-basic", ""))

    assert store.load() == Credentials("new-basic", "")


def test_load_partial_file(tmp_path: Path) -> None:
    path = tmp_path / "creds.json"
    path.write_text(json.dumps({BASIC_AUTH_KEY: "abc"}), encoding="utf-8")

    assert CredentialStore(path).load() == Credentials("abc", "")


@pytest.mark.parametrize("content", ["{not json", "[1, 2]"])
def test_load_corrupt_file_is_treated_as_empty(tmp_path: Path, content: str) -> None:
    path = tmp_path / "creds.json"
    path.write_text(content, encoding="utf-8")

    assert CredentialStore(path).load() == Credentials()


def test_default_path_comes_from_environment(tmp_path: Path, monkeypatch) -> None:
    target = tmp_path / "from-env.json"
    monkeypatch.setenv("CREDENTIALS_FILE", str(target))

    assert CredentialStore().path == target


def test_save_failure_raises_store_error(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    store = CredentialStore(blocker / "creds.json")

    with pytest.raises(CredentialStoreError):
        store.save(Credentials("a", "b"))


def test_repr_hides_secrets() -> None:
    text = repr(Credentials(basic_auth="c3NkX2F", access_token="tok-123"))

    assert "c3NkX2F" not in text
    assert "tok-123" not in text
