"""API types for the vLLM model custom resource (group vllm.sir-alfred.io, v1alpha1)."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

GROUP_NAME = "vllm.sir-alfred.io"
VERSION = "v1alpha1"
API_VERSION = f"{GROUP_NAME}/{VERSION}"
KIND = "VLLMModel"
LIST_KIND = "VLLMModelList"


@dataclass(frozen=True)
class GroupResource:
    """A resource qualified by its API group."""

    group: str
    resource: str

    def __str__(self) -> str:
        return f"{self.resource}.{self.group}" if self.group else self.resource


def resource(resource: str) -> GroupResource:
    """Qualify an unqualified resource name with this API group."""
    return GroupResource(group=GROUP_NAME, resource=resource)


@dataclass
class VLLMModelSpec:
    """Desired state of a VLLMModel."""

    model_name: str = ""
    served_model_name: str = ""
    tool_call_parser: str = ""
    reasoning_parser: str = ""
    max_model_len: int = 0
    gpu_memory_utilization: float = 0.0
    enable_chunked_prefill: Optional[bool] = None
    max_num_batched_tokens: int = 0
    max_num_seqs: int = 0
    dtype: str = ""
    disable_custom_all_reduce: Optional[bool] = None
    enable_prefix_caching: Optional[bool] = None
    enable_auto_tool_choice: Optional[bool] = None


@dataclass
class VLLMModelStatus:
    """Observed state of a VLLMModel."""

    phase: str = ""
    last_updated: Optional[datetime] = None
    message: str = ""


@dataclass
class VLLMModel:
    """A vLLM model configuration resource."""

    api_version: str = ""
    kind: str = ""
    name: str = ""
    namespace: str = ""
    spec: VLLMModelSpec = field(default_factory=VLLMModelSpec)
    status: VLLMModelStatus = field(default_factory=VLLMModelStatus)


@dataclass
class VLLMModelList:
    """A list of VLLMModel resources."""

    api_version: str = ""
    kind: str = ""
    resource_version: str = ""
    items: List[VLLMModel] = field(default_factory=list)