"""Infrastructure configuration and per-model vLLM configuration profiles."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Mapping, Optional


@dataclass
class Config:
    """Kubernetes-side settings for the managed vLLM workload."""

    namespace: str = ""
    deployment: str = ""
    config_map_name: str = ""
    gpu_count: int = 0
    cpu_offload_gb: int = 0


class InvalidModelConfigError(ValueError):
    """Raised when a model configuration lacks a mandatory field."""


# ConfigMap key -> ModelConfig attribute, in the order they are written.
_CONFIG_MAP_KEYS = (
    ("MODEL_NAME", "model_name"),
    ("SERVED_MODEL_NAME", "served_model_name"),
    ("TOOL_CALL_PARSER", "tool_call_parser"),
    ("REASONING_PARSER", "reasoning_parser"),
    ("MAX_MODEL_LEN", "max_model_len"),
    ("GPU_MEMORY_UTILIZATION", "gpu_memory_utilization"),
    ("ENABLE_CHUNKED_PREFILL", "enable_chunked_prefill"),
    ("MAX_NUM_BATCHED_TOKENS", "max_num_batched_tokens"),
    ("MAX_NUM_SEQS", "max_num_seqs"),
    ("DTYPE", "dtype"),
    ("DISABLE_CUSTOM_ALL_REDUCE", "disable_custom_all_reduce"),
    ("ENABLE_PREFIX_CACHING", "enable_prefix_caching"),
    ("ENABLE_AUTO_TOOL_CHOICE", "enable_auto_tool_choice"),
)

# Mandatory fields checked by validate(), with their messages, in order.
_REQUIRED = (
    ("model_name", "modelName cannot be empty"),
    ("served_model_name", "servedModelName cannot be empty"),
    ("max_model_len", "maxModelLen is required"),
    ("max_num_batched_tokens", "maxNumBatchedTokens is required"),
    ("max_num_seqs", "maxNumSeqs is required"),
    ("gpu_memory_utilization", "gpuMemoryUtilization is required"),
    ("dtype", "dtype is required"),
    ("enable_chunked_prefill", "enableChunkedPrefill is required"),
    ("disable_custom_all_reduce", "disableCustomAllReduce is required"),
    ("enable_prefix_caching", "enablePrefixCaching is required"),
    ("enable_auto_tool_choice", "enableAutoToolChoice is required"),
)


@dataclass
class ModelConfig:
    """A model configuration profile; runtime values are kept as strings."""

    model_name: str = ""
    served_model_name: str = ""
    tool_call_parser: str = ""
    reasoning_parser: str = ""
    max_model_len: str = ""
    gpu_memory_utilization: str = ""
    enable_chunked_prefill: str = ""
    max_num_batched_tokens: str = ""
    max_num_seqs: str = ""
    dtype: str = ""
    disable_custom_all_reduce: str = ""
    enable_prefix_caching: str = ""
    enable_auto_tool_choice: str = ""

    def to_config_map_data(self) -> Dict[str, str]:
        """Return the configuration as ConfigMap data (deprecated format)."""
        return {key: getattr(self, attr) for key, attr in _CONFIG_MAP_KEYS}

    def validate(self) -> None:
        """Raise InvalidModelConfigError if a mandatory field is empty."""
        for attr, message in _REQUIRED:
            if not getattr(self, attr):
                raise InvalidModelConfigError(message)


def from_config_map_data(data: Mapping[str, str]) -> ModelConfig:
    """Build a ModelConfig from ConfigMap data (deprecated format)."""
    return ModelConfig(**{attr: data.get(key, "") for key, attr in _CONFIG_MAP_KEYS})


def bool_to_string(value: Optional[bool]) -> str:
    """Render an optional bool as "true" or "false"; None counts as false."""
    if value is None:
        return "false"
    return str(bool(value)).lower()