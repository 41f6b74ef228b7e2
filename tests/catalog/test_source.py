"""Tests for reading pricing documents from files and URLs."""

import json

import httpx
import pytest

from modelprices.catalog.errors import SourceError
from modelprices.catalog.loader import load_dataset
from modelprices.catalog.source import fetch_document, is_url, load_document, parse_document, read_document


def test_parse_document_keeps_duplicate_top_level_keys():
    text = '{"m": {"input_cost_per_token": 1e-06}, "x": {}, "m": {"input_cost_per_token": 2e-06}}'

    pairs = parse_document(text)

    assert [key for key, _ in pairs] == ["m", "x", "m"]
    dataset = load_dataset(pairs)
    assert dataset.ids() == ["m", "x"]
    assert dataset.get("m").to_raw() == {"input_cost_per_token": 2e-06}


def test_parse_document_nested_objects_are_dicts():
    pairs = parse_document('{"m": {"metadata": {"a": [{"b": 1}]}}}')
    assert pairs == [("m", {"metadata": {"a": [{"b": 1}]}})]
    assert type(pairs[0][1]) is dict


@pytest.mark.parametrize("text", ["[1, 2]", '"text"', "{not json"])
def test_parse_document_rejects_non_objects(text):
    with pytest.raises(SourceError):
        parse_document(text)


def test_read_document_accepts_utf8_bom(tmp_path, sample_document):
    path = tmp_path / "prices.json"
    path.write_text(json.dumps(sample_document), encoding="utf-8-sig")

    pairs = read_document(path)

    assert pairs[0][0] == "sample_spec"
    assert dict(pairs)["gpt-4o"]["litellm_provider"] == "openai"


def test_read_missing_file_raises_source_error(tmp_path):
    with pytest.raises(SourceError):
        read_document(tmp_path / "nope.json")


def test_fetch_document_uses_http(sample_document):
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(str(request.url))
        return httpx.Response(200, json=sample_document)

    pairs = fetch_document("https://example.com/prices.json", transport=httpx.MockTransport(handler))

    assert seen == ["https://example.com/prices.json"]
    assert len(pairs) == len(sample_document)


def test_fetch_document_http_error_raises_source_error():
    transport = httpx.MockTransport(lambda request: httpx.Response(404, text="missing"))
    with pytest.raises(SourceError):
        fetch_document("https://example.com/prices.json", transport=transport)


def test_load_document_dispatches_on_location(monkeypatch, sample_file):
    assert is_url("https://example.com/x.json")
    assert not is_url(str(sample_file))

    calls = []
    monkeypatch.setattr(
        "modelprices.catalog.source.fetch_document",
        lambda url, timeout=30.0: calls.append((url, timeout)) or [],
    )
    assert load_document("http://example.com/x.json", timeout=5) == []
    assert calls == [("http://example.com/x.json", 5)]

    assert dict(load_document(str(sample_file)))["dall-e-3"]["mode"] == "image_generation"
