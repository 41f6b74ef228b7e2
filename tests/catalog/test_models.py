"""Tests for record types and cost kinds."""

from datetime import date

import pytest
from pydantic import ValidationError

from modelprices.catalog.models import ContextLimits, CostKind, Mode, ModelRecord, capability_name


def test_cost_kind_parse_accepts_key_or_name():
    assert CostKind.parse("input_cost_per_token") is CostKind.INPUT_TOKEN
    assert CostKind.parse("output_token") is CostKind.OUTPUT_TOKEN
    assert CostKind.parse("CACHE-READ-TOKEN") is CostKind.CACHE_READ_TOKEN
    with pytest.raises(ValueError):
        CostKind.parse("per_vibe")


def test_cost_kind_units():
    assert CostKind.INPUT_TOKEN.unit == "token"
    assert CostKind.OUTPUT_IMAGE.unit == "image"
    assert CostKind.OUTPUT_VIDEO_SECOND.unit == "second"
    assert not CostKind.FILE_SEARCH_1K_CALLS.scalable
    assert not CostKind.VECTOR_STORE_GB_DAY.scalable
    assert all(kind.scalable for kind in CostKind if kind.unit in ("token", "image", "second"))


def test_records_are_immutable():
    record = ModelRecord(id="m", provider="openai")
    with pytest.raises(ValidationError):
        record.provider = "anthropic"


def test_record_mappings_are_read_only():
    record = ModelRecord(
        id="m",
        costs={CostKind.INPUT_TOKEN: 1e-06},
        capabilities={"vision": True},
        extra={"tpm": 10},
    )
    with pytest.raises(TypeError):
        record.costs[CostKind.INPUT_TOKEN] = 0.0
    with pytest.raises(TypeError):
        record.capabilities["vision"] = False
    with pytest.raises(TypeError):
        record.extra["tpm"] = 0

    assert record.cost(CostKind.INPUT_TOKEN) == 1e-06
    assert record.supports("vision")


def test_record_does_not_share_the_callers_dicts():
    costs = {CostKind.INPUT_TOKEN: 1e-06}
    record = ModelRecord(id="m", costs=costs)

    costs[CostKind.INPUT_TOKEN] = 5.0

    assert record.cost(CostKind.INPUT_TOKEN) == 1e-06


def test_known_mode():
    assert ModelRecord(id="m", mode="chat").known_mode is Mode.CHAT
    assert ModelRecord(id="m", mode="hologram").known_mode is None
    assert ModelRecord(id="m").known_mode is None


def test_supports_normalizes_prefix():
    record = ModelRecord(id="m", capabilities={"vision": True, "audio_input": False})
    assert record.supports("vision")
    assert record.supports("supports_vision")
    assert not record.supports("audio_input")
    assert not record.supports("function_calling")
    assert capability_name("supports_pdf_input") == "pdf_input"


def test_is_deprecated():
    record = ModelRecord(id="m", deprecation_date=date(2025, 6, 1))
    assert record.is_deprecated(date(2025, 6, 1))
    assert not record.is_deprecated(date(2025, 5, 31))
    assert not ModelRecord(id="m").is_deprecated(date(2100, 1, 1))


def test_context_limits_consistency():
    assert ContextLimits().is_consistent
    assert ContextLimits(max_tokens=100, max_input_tokens=60, max_output_tokens=40).is_consistent
    assert not ContextLimits(max_tokens=100, max_input_tokens=60, max_output_tokens=41).is_consistent


def test_to_raw_omits_absent_fields():
    assert ModelRecord(id="m").to_raw() == {}
    raw = ModelRecord(
        id="m",
        provider="openai",
        costs={CostKind.INPUT_TOKEN: 1e-06},
        capabilities={"vision": True},
        extra={"tpm": 10},
    ).to_raw()
    assert raw == {
        "input_cost_per_token": 1e-06,
        "litellm_provider": "openai",
        "supports_vision": True,
        "tpm": 10,
    }


def test_to_raw_copies_nested_unknown_fields():
    record = ModelRecord(id="m", extra={"supported_regions": ["global"]})

    raw = record.to_raw()
    raw["supported_regions"].append("eu")

    assert record.extra["supported_regions"] == ["global"]
