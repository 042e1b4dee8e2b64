from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

from certverify.exceptions import ReferenceDataError
from certverify.reference_store import ReferenceStore

if TYPE_CHECKING:
    from pathlib import Path


def _write(path: Path, payload: object) -> Path:
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_load_object_with_blacklist(tmp_path: Path) -> None:
    path = _write(
        tmp_path / "refs.json",
        {
            "certificates": [
                {"id": 1, "certNumber": "UPLD-1002", "name": "Arjun Mehta", "year": 2018, "createdAt": "2024-01-01"},
            ],
            "blacklist": ["upld-0001", {"certNumber": "upld-0002", "reason": "forged"}],
        },
    )

    store = ReferenceStore.load(path)

    assert store.certificates[0].cert_number == "UPLD-1002"
    assert store.certificates[0].year == "2018"
    assert store.blacklist == ["UPLD-0001", "UPLD-0002"]


def test_load_bare_list(tmp_path: Path) -> None:
    path = _write(tmp_path / "refs.json", [{"cert_number": "X-1", "name": "Jane Doe"}])

    store = ReferenceStore.load(path)

    assert [record.name for record in store.certificates] == ["Jane Doe"]
    assert store.blacklist == []


def test_null_blacklist_loads_as_empty(tmp_path: Path) -> None:
    path = _write(tmp_path / "refs.json", {"certificates": [{"certNumber": "X-1"}], "blacklist": None})

    store = ReferenceStore.load(path)

    assert store.blacklist == []
    assert store.certificates[0].cert_number == "X-1"


def test_non_list_blacklist_raises(tmp_path: Path) -> None:
    with pytest.raises(ReferenceDataError, match="Blacklist"):
        ReferenceStore.load(_write(tmp_path / "refs.json", {"certificates": [], "blacklist": "X-1"}))


@pytest.mark.parametrize("content", ["{not json", "42", '[{"name": "no number"}]'])
def test_invalid_reference_files_raise(tmp_path: Path, content: str) -> None:
    path = tmp_path / "refs.json"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(ReferenceDataError):
        ReferenceStore.load(path)


def test_missing_reference_file_raises(tmp_path: Path) -> None:
    with pytest.raises(ReferenceDataError, match="Cannot read reference file"):
        ReferenceStore.load(tmp_path / "absent.json")
