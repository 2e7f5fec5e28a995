"""HTTP handlers that report available and running models."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Protocol

from .model_config import ModelConfig
from .responses import JsonResponse


@dataclass
class ModelInfo:
    """Basic information about one model."""

    name: str = ""
    served_model_name: str = ""
    model_name: str = ""
    max_model_len: str = ""

    def to_dict(self) -> Dict[str, str]:
        """Return the JSON form of this model."""
        return {
            "name": self.name,
            "servedModelName": self.served_model_name,
            "modelName": self.model_name,
            "maxModelLen": self.max_model_len,
        }


class ModelManager(Protocol):
    """Operations the model handlers need from the model manager."""

    def get_active_model(self) -> str:
        ...

    def switch_model(self, model_id: str) -> None:
        ...

    def get_model_config(self, model_id: str) -> ModelConfig:
        ...

    def list_models(self) -> List[ModelInfo]:
        ...

    def is_running(self) -> bool:
        ...


class ModelsHandler:
    """Serves the model listing and running-model endpoints."""

    def __init__(self, manager: ModelManager) -> None:
        self.manager = manager

    def available(self) -> JsonResponse:
        """List all models known to the cluster."""
        try:
            models = list(self.manager.list_models())
        except Exception as exc:
            return JsonResponse(500, {"error": f"Failed to list models: {exc}"})
        return JsonResponse(
            200,
            {"models": [model.to_dict() for model in models], "count": len(models)},
        )

    def running(self) -> JsonResponse:
        """Report the active model, whether it runs, and its configuration."""
        active_model = self.manager.get_active_model()
        is_running = self.manager.is_running()
        try:
            config = self.manager.get_model_config(active_model)
        except Exception as exc:
            return JsonResponse(500, {"error": f"Failed to get model config: {exc}"})
        return JsonResponse(
            200,
            {
                "active_model": active_model,
                "running": is_running,
                "config": {
                    "modelName": config.model_name,
                    "servedModelName": config.served_model_name,
                    "maxModelLen": config.max_model_len,
                    "toolCallParser": config.tool_call_parser,
                    "reasoningParser": config.reasoning_parser,
                },
            },
        )