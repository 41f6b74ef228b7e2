"""Shared fixtures: a small pricing document in the upstream JSON shape."""

import json

import pytest


SAMPLE_DOCUMENT = {
    "sample_spec": {
        "max_tokens": "LEGACY parameter. set to max_output_tokens if provider specifies it.",
        "input_cost_per_token": 0.0,
        "litellm_provider": "one of https://docs.litellm.ai/docs/providers",
        "mode": "one of: chat, embedding, completion, image_generation",
        "supports_vision": True,
    },
    "gpt-4o": {
        "max_tokens": 144384,
        "max_input_tokens": 128000,
        "max_output_tokens": 16384,
        "input_cost_per_token": 2.5e-06,
        "output_cost_per_token": 1e-05,
        "cache_read_input_token_cost": 1.25e-06,
        "litellm_provider": "openai",
        "mode": "chat",
        "supports_function_calling": True,
        "supports_vision": True,
        "supports_prompt_caching": True,
    },
    "claude-3-5-sonnet-20240620": {
        "max_tokens": 208192,
        "max_input_tokens": 200000,
        "max_output_tokens": 8192,
        "input_cost_per_token": 3e-06,
        "output_cost_per_token": 1.5e-05,
        "cache_creation_input_token_cost": 3.75e-06,
        "cache_read_input_token_cost": 3e-07,
        "litellm_provider": "anthropic",
        "mode": "chat",
        "supports_function_calling": True,
        "supports_vision": True,
        "deprecation_date": "2025-06-01",
    },
    "gpt-4o-mini": {
        "max_tokens": 144384,
        "max_input_tokens": 128000,
        "max_output_tokens": 16384,
        "input_cost_per_token": 1.5e-07,
        "output_cost_per_token": 6e-07,
        "litellm_provider": "openai",
        "mode": "chat",
        "supports_function_calling": True,
        "supports_vision": True,
    },
    "text-embedding-3-small": {
        "max_tokens": 8191,
        "max_input_tokens": 8191,
        "input_cost_per_token": 2e-08,
        "output_cost_per_token": 0.0,
        "litellm_provider": "openai",
        "mode": "embedding",
    },
    "dall-e-3": {
        "output_cost_per_image": 0.04,
        "litellm_provider": "openai",
        "mode": "image_generation",
    },
    "assistants/file-search": {
        "file_search_cost_per_1k_calls": 2.5,
        "vector_store_cost_per_gigabyte_per_day": 0.1,
        "litellm_provider": "openai",
        "mode": "chat",
    },
    "local/unpriced": {
        "max_tokens": 4096,
        "mode": "completion",
    },
}


@pytest.fixture
def sample_document():
    return json.loads(json.dumps(SAMPLE_DOCUMENT))


@pytest.fixture
def sample_file(tmp_path, sample_document):
    path = tmp_path / "model_prices.json"
    path.write_text(json.dumps(sample_document), encoding="utf-8")
    return path
