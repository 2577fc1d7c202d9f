"""Tests for debtwise.core.utils.file_io."""

import os

import pytest

from debtwise.core.exceptions import FileIOError
from debtwise.core.utils.file_io import dump_structured, load_structured, safe_write


class TestSafeWrite:
    def test_creates_parent_dirs(self, tmp_dir):
        path = os.path.join(tmp_dir, "a", "b", "out.txt")
        safe_write(path, "hello")
        with open(path) as f:
            assert f.read() == "hello"
        assert not os.path.exists(path + ".tmp")

    def test_overwrites(self, tmp_dir):
        path = os.path.join(tmp_dir, "out.txt")
        safe_write(path, "first")
        safe_write(path, "second")
        with open(path) as f:
            assert f.read() == "second"


class TestStructured:
    @pytest.mark.parametrize("name", ["data.yaml", "data.yml", "data.json"])
    def test_dump_and_load(self, tmp_dir, name):
        path = os.path.join(tmp_dir, name)
        dump_structured(path, {"loans": [{"loan_id": "1", "balance": 100.5}]})
        assert load_structured(path) == {"loans": [{"loan_id": "1", "balance": 100.5}]}

    def test_empty_document(self, tmp_dir):
        path = os.path.join(tmp_dir, "empty.json")
        safe_write(path, "")
        assert load_structured(path) is None

    def test_missing_file(self, tmp_dir):
        with pytest.raises(FileIOError, match="Could not read"):
            load_structured(os.path.join(tmp_dir, "missing.yaml"))

    def test_bad_json(self, tmp_dir):
        path = os.path.join(tmp_dir, "bad.json")
        safe_write(path, "{not json")
        with pytest.raises(FileIOError, match="Could not parse"):
            load_structured(path)
