import fcntl
import threading
from pathlib import Path

import pytest

from logcheck.core.state import StateStore, canonical_key, record_path


def test_missing_record_loads_zero(state_root: Path):
    assert StateStore(state_root).load("/var/log/app.log") == 0


def test_save_then_load(state_root: Path):
    store = StateStore(state_root)
    store.save("/var/log/app.log", 4096)
    assert store.load("/var/log/app.log") == 4096
    assert store.path_for("/var/log/app.log").read_text() == "4096\n"


def test_save_creates_parent_directories(state_root: Path):
    store = StateStore(state_root)
    store.save("/deeply/nested/dir/app.log", 1)
    assert (state_root / "posix" / "deeply" / "nested" / "dir" / "app.log").is_file()


def test_shorter_offset_fully_replaces_longer(state_root: Path):
    store = StateStore(state_root)
    store.save("/var/log/app.log", 123456)
    store.save("/var/log/app.log", 7)
    assert store.load("/var/log/app.log") == 7


def test_reads_bare_integer_without_newline(state_root: Path):
    store = StateStore(state_root)
    path = store.path_for("/var/log/app.log")
    path.parent.mkdir(parents=True)
    path.write_text("1234")
    assert store.load("/var/log/app.log") == 1234


@pytest.mark.parametrize("content", ["", "abc", "-5", "12 34", "\n42", "١٢"])
def test_corrupt_record_loads_zero(state_root: Path, content: str):
    store = StateStore(state_root)
    path = store.path_for("/var/log/app.log")
    path.parent.mkdir(parents=True)
    path.write_text(content)
    assert store.load("/var/log/app.log") == 0


def test_record_is_a_directory_loads_zero(state_root: Path):
    store = StateStore(state_root)
    store.path_for("/var/log/app.log").mkdir(parents=True)
    assert store.load("/var/log/app.log") == 0


def test_negative_offset_rejected(state_root: Path):
    with pytest.raises(ValueError):
        StateStore(state_root).save("/var/log/app.log", -1)


def test_record_path_mirrors_posix_paths(tmp_path: Path):
    assert record_path(tmp_path, "/var/log/app.log") == tmp_path / "posix" / "var" / "log" / "app.log"


def test_record_path_keeps_drive_letters_apart_from_posix(tmp_path: Path):
    drive = record_path(tmp_path, "C:\\logs\\app.log")
    posix = record_path(tmp_path, "/C/logs/app.log")
    assert drive == tmp_path / "drive_C" / "logs" / "app.log"
    assert drive != posix


def test_record_path_drive_letter_case_is_normalised(tmp_path: Path):
    assert record_path(tmp_path, "c:/logs/app.log") == record_path(tmp_path, "C:\\logs\\app.log")


def test_canonical_key_resolves_relative_and_symlinked_paths(tmp_path: Path, monkeypatch):
    real = tmp_path / "real.log"
    real.write_text("")
    link = tmp_path / "link.log"
    link.symlink_to(real)
    monkeypatch.chdir(tmp_path)
    assert canonical_key("real.log") == canonical_key(link) == str(real.resolve())


def test_load_waits_for_exclusive_writer(state_root: Path):
    store = StateStore(state_root)
    store.save("/var/log/app.log", 10)
    results = []

    with open(store.path_for("/var/log/app.log"), "r+") as held:
        fcntl.flock(held, fcntl.LOCK_EX)
        reader = threading.Thread(target=lambda: results.append(store.load("/var/log/app.log")))
        reader.start()
        reader.join(0.3)
        assert reader.is_alive()
        held.seek(0)
        held.truncate()
        held.write("20\n")
        held.flush()
        fcntl.flock(held, fcntl.LOCK_UN)

    reader.join(5)
    assert results == [20]


def test_drive_like_name_is_relative_on_posix(tmp_path: Path, monkeypatch):
    first, second = tmp_path / "one", tmp_path / "two"
    first.mkdir()
    second.mkdir()
    monkeypatch.chdir(first)
    key_one = canonical_key("C:/app.log")
    monkeypatch.chdir(second)
    key_two = canonical_key("C:/app.log")
    assert key_one == str(first.resolve() / "C:" / "app.log")
    assert key_one != key_two
