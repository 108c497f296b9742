"""Tests for the manifest codec."""

from __future__ import annotations

import json
import uuid

import pytest

from jetjot.errors import MalformedDataError
from jetjot.models import Manuscript
from jetjot.storage.manifest import (
    ManuscriptManifest,
    build_manifest,
    decode_manifest,
    encode_manifest,
)

ID_A = "11111111-1111-1111-1111-111111111111"
ID_B = "22222222-2222-2222-2222-222222222222"


class TestBuildManifest:
    def test_order_is_current_index(self):
        m = Manuscript(name="Book")
        a = m.new_document("A")
        b = m.new_document("B")
        m.move_document(b.id, 0)
        m.mark_open(a.id)

        manifest = build_manifest(m)
        assert manifest.name == "Book"
        assert manifest.last_open_document_id == a.id
        assert [(e.id, e.order) for e in manifest.documents] == [(b.id, 0), (a.id, 1)]

    def test_to_dict_keys(self):
        m = Manuscript(name="Book")
        doc = m.new_document("A")
        doc.word_goal = 500
        doc.is_locked = True

        data = build_manifest(m).to_dict()
        assert data == {
            "name": "Book",
            "lastOpenDocumentId": None,
            "documents": [
                {"id": str(doc.id), "title": "A", "wordGoal": 500, "isLocked": True, "order": 0}
            ],
        }


class TestEncodeDecode:
    def test_encode_is_indented_and_deterministic(self):
        m = Manuscript(name="Livre café")
        m.new_document("Un")
        manifest = build_manifest(m)
        text = encode_manifest(manifest)
        assert text == encode_manifest(manifest)
        assert '\n  "name": "Livre café",' in text
        assert text.endswith("}\n")

    def test_decode(self):
        text = json.dumps(
            {
                "name": "Book",
                "lastOpenDocumentId": ID_B,
                "documents": [
                    {"id": ID_A, "title": "A", "wordGoal": 10, "isLocked": False, "order": 1},
                    {"id": ID_B, "title": "B", "wordGoal": 20, "isLocked": True, "order": 0},
                ],
            }
        )
        manifest = decode_manifest(text)
        assert manifest.name == "Book"
        assert manifest.last_open_document_id == uuid.UUID(ID_B)
        assert [e.title for e in manifest.ordered_documents()] == ["B", "A"]

    def test_ordered_documents_ties_keep_input_order(self):
        data = {
            "documents": [
                {"id": ID_A, "title": "first", "order": 0},
                {"id": ID_B, "title": "second", "order": 0},
            ]
        }
        manifest = ManuscriptManifest.from_dict(data)
        assert [e.title for e in manifest.ordered_documents()] == ["first", "second"]

    def test_pascal_case_keys_accepted(self):
        data = {
            "Name": "Book",
            "LastOpenDocumentId": None,
            "Documents": [{"Id": ID_A, "Title": "A", "WordGoal": 1000, "IsLocked": False, "Order": 0}],
        }
        manifest = ManuscriptManifest.from_dict(data)
        assert manifest.name == "Book"
        assert manifest.documents[0].id == uuid.UUID(ID_A)

    def test_defaults_for_missing_fields(self):
        manifest = ManuscriptManifest.from_dict({"documents": [{"id": ID_A}, {"id": ID_B}]})
        assert manifest.name == "Untitled Manuscript"
        assert manifest.last_open_document_id is None
        first, second = manifest.documents
        assert (first.title, first.word_goal, first.is_locked, first.order) == (
            "Untitled",
            1000,
            False,
            0,
        )
        assert second.order == 1

    def test_unknown_keys_ignored(self):
        manifest = ManuscriptManifest.from_dict({"name": "Book", "theme": "dark", "documents": []})
        assert manifest.name == "Book"


class TestMalformed:
    @pytest.mark.parametrize(
        "text",
        [
            "not json",
            "[]",
            '{"name": 5}',
            '{"documents": {}}',
            '{"documents": [42]}',
            '{"documents": [{"title": "no id"}]}',
            f'{{"documents": [{{"id": "{ID_A}", "wordGoal": "many"}}]}}',
            f'{{"documents": [{{"id": "{ID_A}", "wordGoal": 0}}]}}',
            f'{{"documents": [{{"id": "{ID_A}", "isLocked": "yes"}}]}}',
            f'{{"documents": [{{"id": "{ID_A}", "order": true}}]}}',
            '{"documents": [{"id": "nope"}]}',
            '{"lastOpenDocumentId": "nope"}',
        ],
    )
    def test_rejected(self, text):
        with pytest.raises(MalformedDataError):
            decode_manifest(text)

    def test_duplicate_ids(self):
        data = {"documents": [{"id": ID_A}, {"id": ID_A.upper()}]}
        with pytest.raises(MalformedDataError, match="Duplicate"):
            ManuscriptManifest.from_dict(data)
