from __future__ import annotations

import copy
from datetime import date
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

CAPABILITY_PREFIX = "supports_"
PROVIDER_KEY = "litellm_provider"


class Mode(str, Enum):
    """Known values of the ``mode`` field. Other values are kept as plain strings."""
    CHAT = "chat"
    EMBEDDING = "embedding"
    IMAGE_GENERATION = "image_generation"
    AUDIO_TRANSCRIPTION = "audio_transcription"
    AUDIO_SPEECH = "audio_speech"
    COMPLETION = "completion"
    MODERATION = "moderation"
    RERANK = "rerank"
    SEARCH = "search"


class CostKind(str, Enum):
    """Pricing dimensions. Values are the keys used in the JSON document."""
    INPUT_TOKEN = "input_cost_per_token"
    OUTPUT_TOKEN = "output_cost_per_token"
    CACHE_CREATION_TOKEN = "cache_creation_input_token_cost"
    CACHE_READ_TOKEN = "cache_read_input_token_cost"
    REASONING_TOKEN = "output_cost_per_reasoning_token"
    INPUT_AUDIO_TOKEN = "input_cost_per_audio_token"
    OUTPUT_AUDIO_TOKEN = "output_cost_per_audio_token"
    INPUT_IMAGE = "input_cost_per_image"
    OUTPUT_IMAGE = "output_cost_per_image"
    INPUT_SECOND = "input_cost_per_second"
    OUTPUT_SECOND = "output_cost_per_second"
    OUTPUT_VIDEO_SECOND = "output_cost_per_video_per_second"
    FILE_SEARCH_1K_CALLS = "file_search_cost_per_1k_calls"
    VECTOR_STORE_GB_DAY = "vector_store_cost_per_gigabyte_per_day"

    @property
    def unit(self) -> str:
        return COST_UNITS[self]

    @property
    def scalable(self) -> bool:
        """Whether the cost grows linearly with a token/image/second volume."""
        return self not in FLAT_RATE_KINDS

    @classmethod
    def parse(cls, text: str) -> "CostKind":
        """Accept either the JSON key (``input_cost_per_token``) or the member name (``input_token``)."""
        value = text.strip()
        try:
            return cls(value)
        except ValueError:
            pass
        try:
            return cls[value.upper().replace("-", "_")]
        except KeyError:
            raise ValueError(f"Unknown cost kind: {text}") from None


COST_UNITS: Dict[CostKind, str] = {
    CostKind.INPUT_TOKEN: "token",
    CostKind.OUTPUT_TOKEN: "token",
    CostKind.CACHE_CREATION_TOKEN: "token",
    CostKind.CACHE_READ_TOKEN: "token",
    CostKind.REASONING_TOKEN: "token",
    CostKind.INPUT_AUDIO_TOKEN: "token",
    CostKind.OUTPUT_AUDIO_TOKEN: "token",
    CostKind.INPUT_IMAGE: "image",
    CostKind.OUTPUT_IMAGE: "image",
    CostKind.INPUT_SECOND: "second",
    CostKind.OUTPUT_SECOND: "second",
    CostKind.OUTPUT_VIDEO_SECOND: "second",
    CostKind.FILE_SEARCH_1K_CALLS: "1k calls",
    CostKind.VECTOR_STORE_GB_DAY: "GB per day",
}

FLAT_RATE_KINDS = frozenset({CostKind.FILE_SEARCH_1K_CALLS, CostKind.VECTOR_STORE_GB_DAY})


def capability_name(name: str) -> str:
    """Normalize ``supports_vision`` and ``vision`` to ``vision``."""
    if name.startswith(CAPABILITY_PREFIX):
        return name[len(CAPABILITY_PREFIX):]
    return name


class ContextLimits(BaseModel):
    """Token limits of a model. Any of them may be unknown."""
    model_config = ConfigDict(frozen=True)

    max_tokens: Optional[int] = None
    max_input_tokens: Optional[int] = None
    max_output_tokens: Optional[int] = None

    @property
    def is_consistent(self) -> bool:
        """False only when all three are known and input + output exceeds the total."""
        if None in (self.max_tokens, self.max_input_tokens, self.max_output_tokens):
            return True
        return self.max_input_tokens + self.max_output_tokens <= self.max_tokens


class ModelRecord(BaseModel):
    """Pricing and capability metadata for one model identifier."""
    model_config = ConfigDict(frozen=True)

    id: str
    provider: Optional[str] = None
    mode: Optional[str] = None
    context_limits: ContextLimits = Field(default_factory=ContextLimits)
    costs: Mapping[CostKind, float] = Field(default_factory=dict)
    capabilities: Mapping[str, bool] = Field(default_factory=dict)
    deprecation_date: Optional[date] = None
    source: Optional[str] = None
    extra: Mapping[str, Any] = Field(default_factory=dict)  # unknown fields, verbatim

    @field_validator("costs", "capabilities", "extra", mode="after")
    @classmethod
    def freeze_mapping(cls, value: Mapping[Any, Any]) -> Mapping[Any, Any]:
        return MappingProxyType(dict(value))

    @property
    def known_mode(self) -> Optional[Mode]:
        if self.mode is None:
            return None
        try:
            return Mode(self.mode)
        except ValueError:
            return None

    def cost(self, kind: CostKind) -> Optional[float]:
        return self.costs.get(kind)

    def supports(self, capability: str) -> bool:
        """Missing capability keys count as unsupported."""
        return self.capabilities.get(capability_name(capability), False)

    def is_deprecated(self, on: date) -> bool:
        return self.deprecation_date is not None and self.deprecation_date <= on

    def to_raw(self) -> Dict[str, Any]:
        """Serialize back to the JSON document's entry shape."""
        raw: Dict[str, Any] = {}
        limits = self.context_limits
        for key in ("max_tokens", "max_input_tokens", "max_output_tokens"):
            value = getattr(limits, key)
            if value is not None:
                raw[key] = value
        for kind, value in self.costs.items():
            raw[kind.value] = value
        if self.provider is not None:
            raw[PROVIDER_KEY] = self.provider
        if self.mode is not None:
            raw["mode"] = self.mode
        for name, flag in self.capabilities.items():
            raw[CAPABILITY_PREFIX + name] = flag
        if self.deprecation_date is not None:
            raw["deprecation_date"] = self.deprecation_date.isoformat()
        if self.source is not None:
            raw["source"] = self.source
        raw.update(copy.deepcopy(dict(self.extra)))
        return raw
