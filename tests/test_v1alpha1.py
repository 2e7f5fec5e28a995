from vllmchill.v1alpha1 import (
    GROUP_NAME,
    GroupResource,
    VLLMModel,
    VLLMModelList,
    VLLMModelSpec,
    VLLMModelStatus,
    resource,
)


def test_resource_qualifies_with_group():
    gr = resource("models")
    assert gr == GroupResource(group="vllm.sir-alfred.io", resource="models")
    assert str(gr) == "models.vllm.sir-alfred.io"


def test_group_name():
    assert resource("x").group == GROUP_NAME == "vllm.sir-alfred.io"


def test_vllm_model_defaults():
    model = VLLMModel()
    assert model.name == ""
    assert model.spec == VLLMModelSpec()
    assert model.status == VLLMModelStatus()


def test_vllm_model_spec_defaults():
    spec = VLLMModelSpec()
    assert spec.model_name == ""
    assert spec.max_model_len == 0
    assert spec.enable_chunked_prefill is None


def test_vllm_model_status_defaults():
    status = VLLMModelStatus()
    assert status.phase == ""
    assert status.last_updated is None


def test_vllm_model_list_items_are_independent():
    first = VLLMModelList()
    second = VLLMModelList()
    first.items.append(VLLMModel(name="a"))
    assert second.items == []
    assert [m.name for m in first.items] == ["a"]