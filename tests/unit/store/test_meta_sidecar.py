"""Unit tests for metadata sidecar persistence."""

from __future__ import annotations

import pytest

from core.errors import StowageStoreError
from store.meta_sidecar import delete_meta, read_meta, write_meta


def test_legacy_meta_matches_yaml_meta(tmp_path) -> None:
    """Legacy and YAML sidecars should parse to the same mapping."""
    yaml_content = tmp_path / "new.bin"
    legacy_content = tmp_path / "old.bin"
    write_meta(yaml_content, {"some": "meta", "number": 5})
    (tmp_path / "old.bin.meta").write_text("some: meta\nnumber: 5\n", encoding="utf-8")

    assert read_meta(legacy_content) == read_meta(yaml_content) == {"some": "meta", "number": 5}


def test_yaml_meta_wins_over_legacy(tmp_path) -> None:
    """The YAML sidecar should be preferred when both forms exist."""
    content_path = tmp_path / "both.bin"
    write_meta(content_path, {"source": "yaml"})
    (tmp_path / "both.bin.meta").write_text("source: legacy\n", encoding="utf-8")

    assert read_meta(content_path) == {"source": "yaml"}


def test_read_meta_rejects_non_mapping(tmp_path) -> None:
    """A sidecar holding a list should be reported as invalid."""
    (tmp_path / "list.bin.meta.yml").write_text("- a\n- b\n", encoding="utf-8")

    with pytest.raises(StowageStoreError):
        read_meta(tmp_path / "list.bin")


def test_delete_meta_removes_both_forms(tmp_path) -> None:
    """delete_meta should clear YAML and legacy sidecars."""
    content_path = tmp_path / "gone.bin"
    write_meta(content_path, {"a": 1})
    (tmp_path / "gone.bin.meta").write_text("a: 1\n", encoding="utf-8")

    delete_meta(content_path)

    assert list(tmp_path.iterdir()) == []
