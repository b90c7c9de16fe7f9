"""Unit tests for PersistenceAdapter and the key-value stores."""

import json
import sys

import pytest

from vellum.contexts.document.defaults import default_document
from vellum.contexts.document.exceptions import PersistenceDecodeError, PersistenceWriteError
from vellum.contexts.document.persistence import (
    FileKeyValueStore,
    InMemoryKeyValueStore,
    PersistenceAdapter,
)
from vellum.contexts.document.resume_data_structure import ResumeDocument, TemplateVariant

SLOT = "wf_resume_draft"


class BrokenStore:
    """Key-value store whose every operation fails like an unavailable disk."""

    def get(self, key):
        raise OSError("disk unavailable")

    def set(self, key, value):
        raise OSError("disk unavailable")

    def delete(self, key):
        raise OSError("disk unavailable")


@pytest.fixture
def edited_document():
    doc = default_document()
    return ResumeDocument(
        personal=doc.personal,
        summary="Zoë — naïve café résumé",
        skills=("Python", "Python"),
        experience=doc.experience,
        education=(),
        template=TemplateVariant.CLASSIC,
    )


@pytest.mark.unit
def test_load_absent_slot_returns_default():
    """Test that an empty slot loads the default document."""
    assert PersistenceAdapter(InMemoryKeyValueStore()).load() == default_document()


@pytest.mark.unit
def test_save_then_load(edited_document):
    """Test that a saved document loads back equal."""
    adapter = PersistenceAdapter(InMemoryKeyValueStore())

    assert adapter.save(edited_document) is True
    assert adapter.load() == edited_document


@pytest.mark.unit
def test_encoded_payload_is_readable_json(edited_document):
    """Test the stored JSON format."""
    kv = InMemoryKeyValueStore()
    PersistenceAdapter(kv).save(edited_document)
    payload = kv.get(SLOT)

    # 2-space indent, non-ASCII kept as is
    assert '\n  "personal": {' in payload
    assert "Zoë" in payload
    assert json.loads(payload)["template"] == "classic"


@pytest.mark.unit
@pytest.mark.parametrize(
    "payload",
    [
        "{not json",
        "[]",
        '{"personal": {}}',
        json.dumps({**default_document().to_dict(), "template": "fancy"}),
        json.dumps({**default_document().to_dict(), "skills": None}),
        "[" * 200000,
        pytest.param(
            json.dumps(default_document().to_dict()).replace('"id": 1', '"id": ' + "9" * 5000, 1),
            marks=pytest.mark.skipif(
                sys.version_info < (3, 11), reason="integer digit limit added in 3.11"
            ),
        ),
    ],
    ids=[
        "bad-json",
        "wrong-root",
        "missing-fields",
        "bad-template",
        "bad-skills",
        "deep-nesting",
        "huge-id",
    ],
)
def test_malformed_payload_falls_back_to_default(payload):
    """Test that undecodable payloads load the default document."""
    kv = InMemoryKeyValueStore()
    kv.set(SLOT, payload)
    adapter = PersistenceAdapter(kv)

    assert adapter.load() == default_document()
    with pytest.raises(PersistenceDecodeError):
        adapter.decode(payload)


@pytest.mark.unit
def test_unreadable_store_falls_back_to_default():
    """Test that a failing store read loads the default document."""
    assert PersistenceAdapter(BrokenStore()).load() == default_document()


@pytest.mark.unit
def test_save_failure_returns_false(edited_document):
    """Test that write failures return False instead of raising."""
    assert PersistenceAdapter(BrokenStore()).save(edited_document) is False
    assert PersistenceAdapter(InMemoryKeyValueStore(quota_bytes=16)).save(edited_document) is False


@pytest.mark.unit
def test_clear_removes_slot(edited_document):
    """Test that clear removes the stored draft."""
    kv = InMemoryKeyValueStore()
    adapter = PersistenceAdapter(kv)
    adapter.save(edited_document)
    adapter.clear()

    assert SLOT not in kv
    assert adapter.load() == default_document()


@pytest.mark.unit
def test_clear_failure_is_not_raised():
    """Test that a failing clear is logged, not raised."""
    PersistenceAdapter(BrokenStore()).clear()


@pytest.mark.unit
def test_custom_slot(edited_document):
    """Test saving to a non-default slot."""
    kv = InMemoryKeyValueStore()
    PersistenceAdapter(kv, slot="other_draft").save(edited_document)

    assert "other_draft" in kv
    assert SLOT not in kv


@pytest.mark.unit
def test_in_memory_quota():
    """Test the in-memory store byte quota."""
    kv = InMemoryKeyValueStore(quota_bytes=4)
    kv.set("k", "abcd")

    with pytest.raises(PersistenceWriteError, match="Quota exceeded"):
        kv.set("k", "abcde")
    # Multi-byte characters count in UTF-8 bytes
    with pytest.raises(PersistenceWriteError):
        kv.set("k", "ééé")
    assert kv.get("k") == "abcd"


@pytest.mark.unit
def test_file_store_round_trip(tmp_path, edited_document):
    """Test the file store writes one JSON file per key."""
    kv = FileKeyValueStore(tmp_path / "drafts")
    adapter = PersistenceAdapter(kv)

    assert kv.get(SLOT) is None
    adapter.save(edited_document)

    draft_file = tmp_path / "drafts" / f"{SLOT}.json"
    assert draft_file.exists()
    assert list((tmp_path / "drafts").iterdir()) == [draft_file]
    assert PersistenceAdapter(FileKeyValueStore(tmp_path / "drafts")).load() == edited_document

    adapter.clear()
    assert not draft_file.exists()
    kv.delete(SLOT)


@pytest.mark.unit
def test_file_store_rejects_unsafe_keys(tmp_path):
    """Test that keys unsafe as file names are rejected."""
    kv = FileKeyValueStore(tmp_path)

    with pytest.raises(ValueError, match="Invalid key"):
        kv.set("../escape", "{}")


@pytest.mark.unit
def test_file_store_corrupt_draft_falls_back(tmp_path):
    """Test that a corrupt draft file loads the default document."""
    (tmp_path / f"{SLOT}.json").write_text('{"personal": ', encoding="utf-8")

    assert PersistenceAdapter(FileKeyValueStore(tmp_path)).load() == default_document()


@pytest.mark.unit
def test_file_store_non_utf8_draft_falls_back(tmp_path):
    """Test that a draft file with invalid UTF-8 loads the default document."""
    (tmp_path / f"{SLOT}.json").write_bytes(b"\xff\xfe\x00garbage")

    assert PersistenceAdapter(FileKeyValueStore(tmp_path)).load() == default_document()


@pytest.mark.unit
@pytest.mark.parametrize("kv_factory", [InMemoryKeyValueStore, FileKeyValueStore], ids=["memory", "file"])
def test_unencodable_text_save_returns_false(kv_factory, tmp_path):
    """Test that text with a lone surrogate fails the write without raising."""
    kv = kv_factory(tmp_path) if kv_factory is FileKeyValueStore else kv_factory()
    document = ResumeDocument(summary="bad \ud800 text")

    assert PersistenceAdapter(kv).save(document) is False
    assert kv.get(SLOT) is None
    assert list(tmp_path.iterdir()) == []
