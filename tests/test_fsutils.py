import io
import os
import sys
import time

import pytest

from cpackget.errors import FailedCreatingDirectoryError
from cpackget.fsutils import (
    clean_path,
    dir_exists,
    ensure_dir,
    file_exists,
    is_empty,
    is_terminal_interactive,
    list_dir,
    same_file,
    set_read_only,
    set_read_only_recursive,
    touch_file,
    unset_read_only,
    unset_read_only_recursive,
)


@pytest.fixture
def in_tmp(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def listing_dir(in_tmp):
    root = "test-listdir"
    for name in ("dir1", "dir2", "dir3"):
        os.makedirs(os.path.join(root, name))
    for name in ("file1", "file2"):
        open(os.path.join(root, name), "w").close()
    open(os.path.join(root, "dir1", "nested"), "w").close()
    return root


def test_file_exists(in_tmp):
    assert file_exists("this-file-does-not-exist") is False
    open("present", "w").close()
    assert file_exists("present") is True
    os.mkdir("a-dir")
    assert file_exists("a-dir") is False


def test_ensure_dir_creates_tree(in_tmp):
    name = os.path.join("tmp", "ensure-dir-test")
    assert dir_exists(name) is False
    ensure_dir(name)
    assert dir_exists(name) is True
    ensure_dir(name)
    assert dir_exists(name) is True


def test_ensure_dir_under_file_fails(in_tmp):
    open("plain-file", "w").close()
    with pytest.raises(FailedCreatingDirectoryError):
        ensure_dir(os.path.join("plain-file", "sub"))


def test_same_file(in_tmp):
    assert same_file("dummy-file", "dummy-file") is True
    assert same_file("dummy-file", "other-file") is False
    open("real", "w").close()
    assert same_file("real", os.path.join(".", "real")) is True


def test_list_dir_missing():
    with pytest.raises(FileNotFoundError):
        list_dir("dir-does-not-exist", "")


def test_list_dir_empty(in_tmp):
    os.mkdir("empty-dir")
    assert list_dir("empty-dir", "") == []


def test_list_dir_everything(listing_dir):
    assert list_dir(listing_dir, "") == [
        os.path.join(listing_dir, "dir1"),
        os.path.join(listing_dir, "dir2"),
        os.path.join(listing_dir, "dir3"),
        os.path.join(listing_dir, "file1"),
        os.path.join(listing_dir, "file2"),
    ]


def test_list_dir_pattern(listing_dir):
    assert list_dir(listing_dir, "file.*") == [
        os.path.join(listing_dir, "file1"),
        os.path.join(listing_dir, "file2"),
    ]


def test_touch_creates_file(in_tmp):
    touch_file("touchfile-test-file-create")
    assert file_exists("touchfile-test-file-create") is True


def test_touch_changes_time_and_truncates(in_tmp):
    name = "touchfile-test-change-time"
    with open(name, "w") as handle:
        handle.write("content")
    yesterday = time.time() - 24 * 3600
    os.utime(name, (yesterday, yesterday))
    touch_file(name)
    assert file_exists(name) is True
    info = os.stat(name)
    assert info.st_mtime > yesterday + 3600
    assert info.st_size == 0


def test_is_empty(listing_dir):
    assert is_empty("dir-does-not-exist") is False
    assert is_empty(listing_dir) is False
    os.mkdir("empty-dir")
    assert is_empty("empty-dir") is True


def test_clean_path():
    sep = os.sep
    assert clean_path(f"{sep}c:{sep}some{sep}path") == f"c:{sep}some{sep}path"


def test_clean_path_normalises():
    assert clean_path(os.path.join("a", ".", "b", "..", "c")) == os.path.join("a", "c")


def test_set_read_only(in_tmp):
    touch_file("test-file-perms")
    set_read_only("test-file-perms")
    assert file_exists("test-file-perms") is True
    assert os.stat("test-file-perms").st_mode & 0o777 == 0o444

    ensure_dir("test-dir-perms")
    set_read_only("test-dir-perms")
    try:
        assert dir_exists("test-dir-perms") is True
        assert os.stat("test-dir-perms").st_mode & 0o777 == 0o555
    finally:
        unset_read_only("test-dir-perms")


def test_set_read_only_recursive(in_tmp):
    root = "test-dir-perms-r"
    sub_dir = os.path.join(root, "sub-dir")
    sub_file = os.path.join(root, "sub-file")
    sub_sub_file = os.path.join(sub_dir, "sub-sub-file")
    ensure_dir(sub_dir)
    touch_file(sub_file)
    touch_file(sub_sub_file)

    set_read_only_recursive(root)
    try:
        assert os.stat(sub_sub_file).st_mode & 0o777 == 0o444
        assert os.stat(sub_file).st_mode & 0o777 == 0o444
        assert os.stat(sub_dir).st_mode & 0o777 == 0o555
        assert os.stat(root).st_mode & 0o777 == 0o555
    finally:
        unset_read_only_recursive(root)


def test_unset_read_only(in_tmp):
    touch_file("test-file-perms-unset")
    set_read_only("test-file-perms-unset")
    unset_read_only("test-file-perms-unset")
    assert file_exists("test-file-perms-unset") is True
    assert os.stat("test-file-perms-unset").st_mode & 0o666 == 0o666

    ensure_dir("test-dir-perms-unset")
    set_read_only("test-dir-perms-unset")
    unset_read_only("test-dir-perms-unset")
    assert is_empty("test-dir-perms-unset") is True
    assert os.stat("test-dir-perms-unset").st_mode & 0o777 == 0o777


def test_unset_read_only_recursive(in_tmp):
    root = "test-unset-dir-perms-r"
    sub_dir = os.path.join(root, "sub-dir")
    sub_file = os.path.join(root, "sub-file")
    sub_sub_file = os.path.join(sub_dir, "sub-sub-file")
    ensure_dir(sub_dir)
    touch_file(sub_file)
    touch_file(sub_sub_file)
    set_read_only_recursive(root)

    unset_read_only_recursive(root)
    assert os.stat(sub_sub_file).st_mode & 0o666 == 0o666
    assert os.stat(sub_file).st_mode & 0o666 == 0o666
    assert os.stat(sub_dir).st_mode & 0o777 == 0o777
    assert os.stat(root).st_mode & 0o777 == 0o777


def test_is_terminal_interactive_with_string_buffer(monkeypatch):
    monkeypatch.setattr(sys, "stdout", io.StringIO())
    assert is_terminal_interactive() is False


def test_is_terminal_interactive_with_regular_file(in_tmp, monkeypatch):
    with open("stdout.txt", "w") as handle:
        monkeypatch.setattr(sys, "stdout", handle)
        assert is_terminal_interactive() is False