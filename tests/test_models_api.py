import json

import pytest

from vllmchill.model_config import ModelConfig
from vllmchill.models_api import ModelInfo, ModelsHandler


class FakeManager:
    def __init__(
        self,
        active_model="",
        running=False,
        models=None,
        model_config=None,
        list_error=None,
        config_error=None,
        switch_error=None,
    ):
        self.active_model = active_model
        self.running = running
        self.models = models
        self.model_config = model_config
        self.list_error = list_error
        self.config_error = config_error
        self.switch_error = switch_error
        self.requested_config = None

    def get_active_model(self):
        return self.active_model

    def switch_model(self, model_id):
        if self.switch_error is not None:
            raise self.switch_error
        self.active_model = model_id

    def get_model_config(self, model_id):
        self.requested_config = model_id
        if self.config_error is not None:
            raise self.config_error
        return self.model_config

    def list_models(self):
        if self.list_error is not None:
            raise self.list_error
        return self.models

    def is_running(self):
        return self.running


def test_handler_keeps_manager():
    manager = FakeManager()
    handler = ModelsHandler(manager)
    assert handler.manager is manager


def test_model_info_to_dict():
    info = ModelInfo(name="model1", served_model_name="model1", model_name="test/model1", max_model_len="4096")
    assert info.to_dict() == {
        "name": "model1",
        "servedModelName": "model1",
        "modelName": "test/model1",
        "maxModelLen": "4096",
    }


@pytest.mark.parametrize(
    "models, error, expected_status",
    [
        (
            [
                ModelInfo(name="model1", served_model_name="model1", model_name="test/model1"),
                ModelInfo(name="model2", served_model_name="model2", model_name="test/model2"),
            ],
            None,
            200,
        ),
        (None, RuntimeError("failed to list"), 500),
        ([], None, 200),
    ],
    ids=["successful list", "list error", "empty list"],
)
def test_available(models, error, expected_status):
    handler = ModelsHandler(FakeManager(models=models, list_error=error))
    response = handler.available()
    assert response.status == expected_status


def test_available_body_lists_models():
    models = [
        ModelInfo(name="model1", served_model_name="model1", model_name="test/model1"),
        ModelInfo(name="model2", served_model_name="model2", model_name="test/model2"),
    ]
    body = json.loads(ModelsHandler(FakeManager(models=models)).available().body())
    assert body["count"] == 2
    assert [m["modelName"] for m in body["models"]] == ["test/model1", "test/model2"]


def test_available_error_message():
    handler = ModelsHandler(FakeManager(list_error=RuntimeError("failed to list")))
    body = json.loads(handler.available().body())
    assert body == {"error": "Failed to list models: failed to list"}


@pytest.mark.parametrize(
    "active, running, config, error, expected_status",
    [
        (
            "test-model",
            True,
            ModelConfig(
                model_name="test/model",
                served_model_name="test-model",
                max_model_len="4096",
                tool_call_parser="hermes",
                reasoning_parser="deepseek_r1",
            ),
            None,
            200,
        ),
        ("test-model", False, None, RuntimeError("failed to get config"), 500),
        ("", False, ModelConfig(model_name="test/model", served_model_name=""), None, 200),
    ],
    ids=["successful running model", "config error", "model not running"],
)
def test_running(active, running, config, error, expected_status):
    manager = FakeManager(active_model=active, running=running, model_config=config, config_error=error)
    response = ModelsHandler(manager).running()
    assert response.status == expected_status
    assert manager.requested_config == active


def test_running_body():
    config = ModelConfig(
        model_name="test/model",
        served_model_name="test-model",
        max_model_len="4096",
        tool_call_parser="hermes",
        reasoning_parser="deepseek_r1",
    )
    manager = FakeManager(active_model="test-model", running=True, model_config=config)
    body = json.loads(ModelsHandler(manager).running().body())
    assert body == {
        "active_model": "test-model",
        "running": True,
        "config": {
            "modelName": "test/model",
            "servedModelName": "test-model",
            "maxModelLen": "4096",
            "toolCallParser": "hermes",
            "reasoningParser": "deepseek_r1",
        },
    }


def test_running_error_message():
    manager = FakeManager(active_model="x", config_error=RuntimeError("failed to get config"))
    body = json.loads(ModelsHandler(manager).running().body())
    assert body == {"error": "Failed to get model config: failed to get config"}