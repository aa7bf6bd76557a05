"""
Unit tests for the blocked keyword store.

Covers write-through mutations, import and export result codes, and the
guarantee that failures leave persisted state and earlier exports alone.
"""

import io
import os
from pathlib import Path

import pytest
from pydantic import ValidationError

from messages_core.config.settings import KeywordSettings
from messages_core.domain.entities import ExportResult, ImportResult
from messages_core.errors import StorageError
from messages_core.infra.config_store import SqlConfigStore
from messages_core.keywords.store import KeywordStore

from conftest import InMemoryConfigStore


class FailingStream(io.RawIOBase):
    """Binary stream whose writes always fail like a full disk."""

    def writable(self) -> bool:
        return True

    def write(self, data) -> int:
        raise OSError(28, "No space left on device")


class TestMutations:
    """Tests for add/remove with write-through persistence."""

    def test_add_persists(self, config_store: InMemoryConfigStore) -> None:
        store = KeywordStore(config_store)
        assert store.add("spam") is True
        assert config_store.keywords == ["spam"]
        assert config_store.writes == 1

    def test_add_duplicate_does_not_write(self, config_store: InMemoryConfigStore) -> None:
        store = KeywordStore(config_store)
        store.add("spam")
        assert store.add("spam") is False
        assert config_store.writes == 1

    def test_add_empty_rejected(self, config_store: InMemoryConfigStore) -> None:
        store = KeywordStore(config_store)
        assert store.add("") is False
        assert config_store.writes == 0

    def test_remove(self, config_store: InMemoryConfigStore) -> None:
        config_store.keywords = ["spam", "win"]
        store = KeywordStore(config_store)
        assert store.remove("spam") is True
        assert store.keywords() == ["win"]

    def test_remove_absent(self, config_store: InMemoryConfigStore) -> None:
        store = KeywordStore(config_store)
        assert store.remove("spam") is False
        assert config_store.writes == 0

    def test_clear(self, config_store: InMemoryConfigStore) -> None:
        config_store.keywords = ["spam", "win"]
        store = KeywordStore(config_store)
        assert store.clear() == 2
        assert store.keywords() == []
        assert store.clear() == 0

    def test_reads_are_fresh(self, config_store: InMemoryConfigStore) -> None:
        """The store never serves a cached copy across an external change."""
        store = KeywordStore(config_store)
        store.add("spam")
        config_store.keywords = ["other"]
        assert store.keywords() == ["other"]


class TestReplace:
    """Tests for editing a keyword in place."""

    def test_replace_keeps_position_and_persists_once(
        self, config_store: InMemoryConfigStore
    ) -> None:
        config_store.keywords = ["spam", "lottery", "win"]
        store = KeywordStore(config_store)

        assert store.replace("lottery", "jackpot") is True

        assert config_store.keywords == ["spam", "jackpot", "win"]
        assert config_store.writes == 1

    @pytest.mark.parametrize("new", ["win", "", "  ", "two\nlines"])
    def test_rejected_replacement_leaves_set_unchanged(
        self, config_store: InMemoryConfigStore, new: str
    ) -> None:
        config_store.keywords = ["spam", "win"]

        assert KeywordStore(config_store).replace("spam", new) is False

        assert config_store.keywords == ["spam", "win"]
        assert config_store.writes == 0

    def test_replace_absent_keyword(self, config_store: InMemoryConfigStore) -> None:
        config_store.keywords = ["spam"]
        assert KeywordStore(config_store).replace("win", "prize") is False
        assert config_store.writes == 0


class TestImport:
    """Tests for importing keyword files."""

    def test_import_skips_blank_lines(self, config_store: InMemoryConfigStore, tmp_path: Path) -> None:
        path = tmp_path / "keywords.txt"
        path.write_text("spam\nlottery\n\nwin\n", encoding="utf-8")
        store = KeywordStore(config_store)

        assert store.import_from(path) == ImportResult.OK
        assert store.keywords() == ["spam", "lottery", "win"]

    def test_import_merges_and_deduplicates(
        self, config_store: InMemoryConfigStore, tmp_path: Path
    ) -> None:
        config_store.keywords = ["prize", "spam"]
        path = tmp_path / "keywords.txt"
        path.write_text("spam\nlottery\n\nwin\n", encoding="utf-8")
        store = KeywordStore(config_store)

        assert store.import_from(str(path)) == ImportResult.OK
        assert store.keywords() == ["prize", "spam", "lottery", "win"]
        assert config_store.writes == 1

    def test_import_of_known_keywords_is_ok_without_write(
        self, config_store: InMemoryConfigStore, tmp_path: Path
    ) -> None:
        config_store.keywords = ["spam"]
        path = tmp_path / "keywords.txt"
        path.write_text("spam\n", encoding="utf-8")

        assert KeywordStore(config_store).import_from(path) == ImportResult.OK
        assert config_store.writes == 0

    def test_import_missing_file_fails(self, config_store: InMemoryConfigStore, tmp_path: Path) -> None:
        config_store.keywords = ["spam"]
        store = KeywordStore(config_store)

        assert store.import_from(tmp_path / "missing.txt") == ImportResult.FAIL
        assert store.keywords() == ["spam"]
        assert config_store.writes == 0

    def test_import_blank_file_fails(self, config_store: InMemoryConfigStore, tmp_path: Path) -> None:
        path = tmp_path / "blank.txt"
        path.write_text("\n  \n\n", encoding="utf-8")
        store = KeywordStore(config_store)

        assert store.import_from(path) == ImportResult.FAIL
        assert config_store.writes == 0

    def test_import_directory_fails(self, config_store: InMemoryConfigStore, tmp_path: Path) -> None:
        assert KeywordStore(config_store).import_from(tmp_path) == ImportResult.FAIL


class TestExport:
    """Tests for exporting to streams and files."""

    def test_export_to_stream(self, config_store: InMemoryConfigStore) -> None:
        config_store.keywords = ["spam", "lottery", "win"]
        stream = io.BytesIO()

        assert KeywordStore(config_store).export_to(stream) == ExportResult.OK
        assert stream.getvalue() == b"spam\nlottery\nwin\n"

    def test_export_empty_set_fails_without_writing(self, config_store: InMemoryConfigStore) -> None:
        stream = io.BytesIO(b"previous")
        stream.seek(0, io.SEEK_END)

        assert KeywordStore(config_store).export_to(stream) == ExportResult.FAIL
        assert stream.getvalue() == b"previous"

    def test_export_write_fault_fails(self, config_store: InMemoryConfigStore) -> None:
        config_store.keywords = ["spam"]
        assert KeywordStore(config_store).export_to(FailingStream()) == ExportResult.FAIL

    def test_export_to_closed_stream_fails(self, config_store: InMemoryConfigStore) -> None:
        config_store.keywords = ["spam"]
        stream = io.BytesIO()
        stream.close()

        assert KeywordStore(config_store).export_to(stream) == ExportResult.FAIL

    def test_export_to_text_stream_is_utf8(self, config_store: InMemoryConfigStore) -> None:
        config_store.keywords = ["café", "спам"]
        raw = io.BytesIO()
        stream = io.TextIOWrapper(raw, encoding="cp1252")

        assert KeywordStore(config_store).export_to(stream) == ExportResult.OK
        assert raw.getvalue() == "café\nспам\n".encode("utf-8")

    def test_export_to_incompatible_text_stream_fails(
        self, config_store: InMemoryConfigStore
    ) -> None:
        class Latin1StringIO(io.StringIO):
            @property
            def encoding(self) -> str:
                return "latin-1"

        config_store.keywords = ["café"]
        stream = Latin1StringIO()

        assert KeywordStore(config_store).export_to(stream) == ExportResult.FAIL
        assert stream.getvalue() == ""

    def test_export_to_path_and_remember(self, config_store: InMemoryConfigStore, tmp_path: Path) -> None:
        config_store.keywords = ["spam", "win"]
        target = tmp_path / "blocked.txt"
        store = KeywordStore(config_store)

        assert store.export_to_path(target) == ExportResult.OK
        assert target.read_bytes() == b"spam\nwin\n"
        assert store.last_export_path == str(target)

    def test_export_to_path_empty_creates_nothing(
        self, config_store: InMemoryConfigStore, tmp_path: Path
    ) -> None:
        target = tmp_path / "blocked.txt"
        assert KeywordStore(config_store).export_to_path(target) == ExportResult.FAIL
        assert not target.exists()
        assert list(tmp_path.iterdir()) == []

    def test_failed_export_keeps_previous_file(
        self,
        config_store: InMemoryConfigStore,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        target = tmp_path / "blocked.txt"
        target.write_bytes(b"old\n")
        config_store.keywords = ["spam"]

        def broken_replace(src, dst):
            raise OSError("replace failed")

        monkeypatch.setattr(os, "replace", broken_replace)

        store = KeywordStore(config_store)
        assert store.export_to_path(target) == ExportResult.FAIL
        assert target.read_bytes() == b"old\n"
        assert [p.name for p in tmp_path.iterdir()] == ["blocked.txt"]
        assert store.last_export_path is None

    def test_export_to_missing_directory_fails(
        self, config_store: InMemoryConfigStore, tmp_path: Path
    ) -> None:
        config_store.keywords = ["spam"]
        target = tmp_path / "nope" / "blocked.txt"
        assert KeywordStore(config_store).export_to_path(target) == ExportResult.FAIL


class TestSqlBackedStore:
    """End-to-end tests against the SQL configuration store."""

    def test_round_trip_through_database_and_file(
        self, sql_config_store: SqlConfigStore, tmp_path: Path
    ) -> None:
        store = KeywordStore(sql_config_store)
        for keyword in ["spam", "lottery", "win"]:
            store.add(keyword)

        target = tmp_path / "export.txt"
        assert store.export_to_path(target) == ExportResult.OK

        store.clear()
        assert store.keywords() == []

        assert store.import_from(target) == ImportResult.OK
        assert store.keywords() == ["spam", "lottery", "win"]
        assert store.last_export_path == str(target)

    def test_storage_failure_propagates(self, tmp_path: Path) -> None:
        class BrokenConfigStore(InMemoryConfigStore):
            def set_blocked_keywords(self, keywords) -> None:
                raise StorageError("disk is read-only")

        path = tmp_path / "keywords.txt"
        path.write_text("spam\n", encoding="utf-8")
        config = BrokenConfigStore()

        with pytest.raises(StorageError):
            KeywordStore(config).import_from(path)
        assert config.keywords == []


class TestKeywordSettings:
    """Tests for the store honouring keyword settings."""

    def test_configured_encoding_is_used(self, config_store: InMemoryConfigStore) -> None:
        config_store.keywords = ["café"]
        store = KeywordStore(config_store, settings=KeywordSettings(encoding="latin-1"))
        stream = io.BytesIO()

        assert store.export_to(stream) == ExportResult.OK
        assert stream.getvalue() == b"caf\xe9\n"

    def test_unknown_encoding_is_rejected(self) -> None:
        with pytest.raises(ValidationError):
            KeywordSettings(encoding="no-such-codec")

    def test_suggested_export_path(self, config_store: InMemoryConfigStore, tmp_path: Path) -> None:
        config_store.keywords = ["spam"]
        store = KeywordStore(
            config_store, settings=KeywordSettings(default_export_filename="keywords.txt")
        )
        assert store.suggested_export_path == "keywords.txt"

        target = tmp_path / "exported.txt"
        assert store.export_to_path(target) == ExportResult.OK
        assert store.suggested_export_path == str(target)
