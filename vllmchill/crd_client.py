"""Access to VLLMModel custom resources through a dynamic Kubernetes client."""

from __future__ import annotations

import logging
import threading
from typing import (
    Any,
    Callable,
    Iterable,
    List,
    Mapping,
    NamedTuple,
    Optional,
    Protocol,
    Tuple,
)

from .model_config import InvalidModelConfigError, ModelConfig
from .v1alpha1 import GROUP_NAME, VERSION, VLLMModel

log = logging.getLogger(__name__)


class GroupVersionResource(NamedTuple):
    group: str
    version: str
    resource: str


VLLM_MODEL_GVR = GroupVersionResource(GROUP_NAME, VERSION, "models")

WATCH_MODIFIED = "MODIFIED"


class CRDError(Exception):
    """Raised when a VLLMModel operation fails."""


class ModelNotFoundError(CRDError, LookupError):
    """Raised when a requested model is not found."""

    def __init__(self, model_id: str, message: Optional[str] = None) -> None:
        self.model_id = model_id
        super().__init__(message or f"model '{model_id}' not found")


class DynamicClient(Protocol):
    """The part of a dynamic Kubernetes client that the CRD client needs."""

    def list(self, resource: GroupVersionResource) -> List[Mapping[str, Any]]:
        """Return all objects of a cluster-scoped resource."""
        ...

    def watch(
        self,
        resource: GroupVersionResource,
        *,
        field_selector: str,
        resource_version: str,
    ) -> Iterable[Mapping[str, Any]]:
        """Yield watch events, each a mapping with "type" and "object"."""
        ...


def _nested(
    obj: Mapping[str, Any], key: str, kinds: Tuple[type, ...], zero: Any
) -> Tuple[Any, bool]:
    """Look up a field; a present field of the wrong type yields its zero value."""
    if key not in obj:
        return zero, False
    value = obj[key]
    if isinstance(value, kinds) and not (bool not in kinds and isinstance(value, bool)):
        return value, True
    return zero, True


def _nested_str(obj: Mapping[str, Any], key: str) -> Tuple[str, bool]:
    return _nested(obj, key, (str,), "")


def _nested_int(obj: Mapping[str, Any], key: str) -> Tuple[int, bool]:
    return _nested(obj, key, (int,), 0)


def _nested_float(obj: Mapping[str, Any], key: str) -> Tuple[float, bool]:
    return _nested(obj, key, (float, int), 0.0)


def _nested_bool(obj: Mapping[str, Any], key: str) -> Tuple[bool, bool]:
    return _nested(obj, key, (bool,), False)


def _spec_of(obj: Mapping[str, Any]) -> Optional[Mapping[str, Any]]:
    spec = obj.get("spec")
    return spec if isinstance(spec, Mapping) else None


def _metadata_of(obj: Mapping[str, Any]) -> Mapping[str, Any]:
    metadata = obj.get("metadata")
    return metadata if isinstance(metadata, Mapping) else {}


def _format_bool(value: bool) -> str:
    return "true" if value else "false"


_STRING_FIELDS = (
    ("modelName", "model_name"),
    ("servedModelName", "served_model_name"),
    ("toolCallParser", "tool_call_parser"),
    ("reasoningParser", "reasoning_parser"),
    ("dtype", "dtype"),
)
_INT_FIELDS = (
    ("maxModelLen", "max_model_len"),
    ("maxNumBatchedTokens", "max_num_batched_tokens"),
    ("maxNumSeqs", "max_num_seqs"),
)
_BOOL_FIELDS = (
    ("enableChunkedPrefill", "enable_chunked_prefill"),
    ("disableCustomAllReduce", "disable_custom_all_reduce"),
    ("enablePrefixCaching", "enable_prefix_caching"),
    ("enableAutoToolChoice", "enable_auto_tool_choice"),
)


def convert_unstructured_to_vllm_model(obj: Mapping[str, Any]) -> VLLMModel:
    """Convert an unstructured object into a typed VLLMModel."""
    metadata = _metadata_of(obj)
    model = VLLMModel(
        api_version=str(obj.get("apiVersion", "") or ""),
        kind=str(obj.get("kind", "") or ""),
        name=str(metadata.get("name", "") or ""),
        namespace=str(metadata.get("namespace", "") or ""),
    )
    spec = _spec_of(obj)
    if spec is None:
        raise CRDError("spec not found")
    model_name, found = _nested_str(spec, "modelName")
    if found:
        model.spec.model_name = model_name
    served, found = _nested_str(spec, "servedModelName")
    if found:
        model.spec.served_model_name = served
    return model


class CRDClient:
    """Reads and watches VLLMModel resources."""

    def __init__(self, dynamic_client: Optional[DynamicClient]) -> None:
        self.dynamic_client = dynamic_client

    def _list(self, what: str) -> List[Mapping[str, Any]]:
        try:
            return list(self.dynamic_client.list(VLLM_MODEL_GVR))
        except Exception as exc:
            raise CRDError(f"failed to list {what}: {exc}") from exc

    def get_model(self, served_model_name: str) -> ModelConfig:
        """Return the configuration of the model with this served name."""
        for item in self._list("VLLMModels"):
            spec = _spec_of(item)
            if spec is None:
                continue
            served = spec.get("servedModelName")
            if not isinstance(served, str):
                continue
            if served == served_model_name:
                return self.convert_to_model_config(item)
        raise ModelNotFoundError(
            served_model_name,
            f"VLLMModel with servedModelName '{served_model_name}' not found",
        )

    def convert_to_model_config(self, obj: Mapping[str, Any]) -> ModelConfig:
        """Convert an unstructured VLLMModel into a validated ModelConfig."""
        spec = _spec_of(obj)
        if spec is None:
            raise CRDError("spec not found in VLLMModel")

        config = ModelConfig()
        for key, attr in _STRING_FIELDS:
            value, found = _nested_str(spec, key)
            if found:
                setattr(config, attr, value)
        for key, attr in _INT_FIELDS:
            value, found = _nested_int(spec, key)
            if found:
                setattr(config, attr, str(value))
        utilization, found = _nested_float(spec, "gpuMemoryUtilization")
        if found:
            config.gpu_memory_utilization = f"{float(utilization):.2f}"
        for key, attr in _BOOL_FIELDS:
            value, found = _nested_bool(spec, key)
            if found:
                setattr(config, attr, _format_bool(value))

        try:
            config.validate()
        except InvalidModelConfigError as exc:
            raise InvalidModelConfigError(
                f"invalid VLLMModel configuration: {exc}"
            ) from exc
        return config

    def list_models(self) -> List[VLLMModel]:
        """Return all VLLMModels, skipping those that cannot be converted."""
        models = []
        for item in self._list("VLLMModels"):
            try:
                models.append(convert_unstructured_to_vllm_model(item))
            except CRDError:
                continue
        return models

    def watch_model(
        self,
        model_name: str,
        callback: Callable[[], None],
        stop_event: Optional[threading.Event] = None,
    ) -> threading.Thread:
        """Call callback whenever the named model is modified.

        Watching runs in a background thread until stop_event is set; the
        watch is re-established if the event stream ends.
        """
        if stop_event is None:
            stop_event = threading.Event()

        resource_version = ""
        for item in self._list("models"):
            metadata = _metadata_of(item)
            if metadata.get("name") == model_name:
                resource_version = str(metadata.get("resourceVersion", "") or "")
                break
        if not resource_version:
            raise ModelNotFoundError(model_name, f"model {model_name} not found")

        try:
            events = self.dynamic_client.watch(
                VLLM_MODEL_GVR,
                field_selector=f"metadata.name={model_name}",
                resource_version=resource_version,
            )
        except Exception as exc:
            raise CRDError(f"failed to create watcher: {exc}") from exc

        thread = threading.Thread(
            target=self._consume,
            args=(events, model_name, callback, stop_event),
            name=f"watch-{model_name}",
            daemon=True,
        )
        thread.start()
        return thread

    def _consume(
        self,
        events: Iterable[Mapping[str, Any]],
        model_name: str,
        callback: Callable[[], None],
        stop_event: threading.Event,
    ) -> None:
        log.info("Started watching VLLMModel: %s", model_name)
        try:
            for event in events:
                if stop_event.is_set():
                    log.info("Stopped watching VLLMModel: %s", model_name)
                    return
                if event.get("type") == WATCH_MODIFIED:
                    log.info("VLLMModel %s was modified, triggering callback", model_name)
                    callback()
        finally:
            close = getattr(events, "close", None)
            if callable(close):
                close()

        if stop_event.is_set():
            log.info("Stopped watching VLLMModel: %s", model_name)
            return
        log.info("Watch channel closed for VLLMModel: %s, restarting watch", model_name)
        try:
            self.watch_model(model_name, callback, stop_event)
        except CRDError as exc:
            log.error("Failed to restart watch: %s", exc)