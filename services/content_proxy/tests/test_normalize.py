from services.content_proxy.core.normalize import (
    extract_collection,
    fallback_envelope,
    normalize_envelope,
    render_fallback,
    shape_category_index,
    shape_collection,
    shape_payload,
    shape_record,
    shape_sub_category,
)
from services.content_proxy.models.resource import ResourceSpec


class TestNormalizeEnvelope:
    def test_bare_list(self):
        assert normalize_envelope([1, 2]) == {"data": [1, 2], "success": True}

    def test_object_with_data_list_unchanged(self):
        payload = {"data": [1], "meta": {"page": 1}}
        assert normalize_envelope(payload) is payload

    def test_single_object_is_wrapped(self):
        assert normalize_envelope({"id": 1}) == {"data": [{"id": 1}], "success": True}

    def test_empty_values_become_empty_list(self):
        assert normalize_envelope(None) == {"data": [], "success": True}
        assert normalize_envelope({}) == {"data": [], "success": True}


def test_extract_collection_key_order():
    payload = {"categories": [1], "data": [2]}

    assert extract_collection(payload, ["data", "categories"]) == [2]
    assert extract_collection(payload, ["categories", "data"]) == [1]
    assert extract_collection({"data": "x"}, ["data"]) is None


def test_shape_collection_total():
    assert shape_collection({"tags": [1, 2]}, ["tags"]) == {"data": [1, 2], "success": True, "total": 2}
    assert shape_collection({"unexpected": 1}, ["tags"]) == {"data": [], "success": True, "total": 0}


def test_shape_category_index_for_unusable_payload():
    assert shape_category_index("nope") == {"data": {"total": 0, "categories": []}, "success": True}


def test_shape_record():
    assert shape_record({"id": 1}) == {"id": 1, "success": True}
    assert shape_record(None) == {"data": None, "success": True}


def test_shape_sub_category_falls_back_for_empty_payload():
    fallback = {"sub_category_id": "9", "total": 0, "data": []}

    assert shape_sub_category([], fallback) == {"data": fallback, "success": True}


def test_render_fallback_fills_placeholders_and_copies():
    template = {"id": "{slug}", "items": [], "note": "{missing}"}

    rendered = render_fallback(template, {"slug": "abc"})
    rendered["items"].append(1)

    assert rendered == {"id": "abc", "items": [1], "note": "{missing}"}
    assert template["items"] == []


def test_shape_payload_dispatches_on_shape():
    resource = ResourceSpec(name="tags", route="/api/tags", shape="collection", collection_keys=["tags"])

    assert shape_payload(resource, {"tags": [1]}, {}) == {"data": [1], "success": True, "total": 1}


def test_fallback_envelope():
    resource = ResourceSpec(name="r", route="/api/r/{id}", fallback={"id": "{id}"})

    assert fallback_envelope(resource, "boom", {"id": "5"}) == {
        "data": {"id": "5"},
        "success": False,
        "error": "boom",
    }
