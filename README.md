# vllmchill

Building blocks for an autoscaler that sits in front of a vLLM deployment
on Kubernetes: typed `VLLMModel` resources, model configuration profiles,
a client for reading and watching those resources, request handlers for
the model and start/stop endpoints, and the `vllm-chill` command line.

It has no dependencies outside the standard library.

## Modules

- `vllmchill.v1alpha1` – dataclasses for the `VLLMModel` custom resource
  (`vllm.sir-alfred.io/v1alpha1`): `VLLMModel`, `VLLMModelSpec`,
  `VLLMModelStatus`, `VLLMModelList`, and `resource(name)`, which returns a
  `GroupResource` qualified with the API group.
- `vllmchill.model_config` – `ModelConfig`, the flattened runtime
  configuration of a model with every value held as a string.
  `validate()` raises `InvalidModelConfigError` naming the first missing
  mandatory field. `to_config_map_data()` and `from_config_map_data()`
  convert to and from ConfigMap-style keys such as `MODEL_NAME` and
  `MAX_MODEL_LEN`. `bool_to_string()` renders an optional bool, with `None`
  as `"false"`. `Config` holds the infrastructure settings: namespace,
  deployment, ConfigMap name, GPU count and CPU offload.
- `vllmchill.crd_client` – `CRDClient` works on top of any object that
  satisfies the `DynamicClient` protocol, which has a `list(resource)` method
  and a `watch(resource, field_selector=..., resource_version=...)` method.
  - `get_model(served_model_name)` returns a validated `ModelConfig`, or
    raises `ModelNotFoundError`.
  - `list_models()` returns `VLLMModel` objects and skips items that have
    no spec.
  - `convert_to_model_config(obj)` turns an unstructured object into a
    `ModelConfig`.
  - `watch_model(model_name, callback, stop_event)` starts a daemon thread.
    The thread calls `callback` on every `MODIFIED` event and watches again
    when the event stream ends. It stops once `stop_event` is set.
  - Failures to list or watch raise `CRDError`.
- `vllmchill.responses` – `JsonResponse`, a status code with a payload.
  `body()` encodes the payload as compact JSON followed by a newline, or
  sends a string payload as plain text when it has a non-JSON content type.
- `vllmchill.models_api` – `ModelsHandler` works with any `ModelManager`.
  - `available()` returns the models and their count.
  - `running()` returns the active model, whether it is running, and its
    configuration.
  - Errors from the manager become status 500 responses. `ModelInfo` is the
    per-model entry.
- `vllmchill.operation` – handlers for manual start and stop, with any
  `OperationManager` (`start()`, `stop()`, `update_activity()`).
  - `OperationHandler.start(method)` and `stop(method)` answer anything
    other than POST with 405 "Method not allowed".
  - `RoutedOperationHandler.start()` and `stop()` expect the method to have
    been matched already.
  - A successful call answers `{"status": "success", ...}`. A failure
    answers status 500 with an error of type `start_failed` or `stop_failed`.
  - Starting records activity first.
- `vllmchill.cli` – the `vllm-chill` command line: `build_parser()`,
  `parse_serve_options(argv)` returning `ServeOptions`, `set_version()`,
  `get_env_or_default()`, `get_env_or_default_int()` and `main()`.

## Installation

```
pip install .
```

## Command line

```
vllm-chill --version
vllm-chill serve --namespace vllm --deployment vllm --model-id my-model
```

Every `serve` option falls back to an environment variable:

| Option              | Environment       | Default       |
|---------------------|-------------------|---------------|
| `--namespace`       | `VLLM_NAMESPACE`  | `vllm`        |
| `--deployment`      | `VLLM_DEPLOYMENT` | `vllm`        |
| `--configmap`       | `VLLM_CONFIGMAP`  | `vllm-config` |
| `--idle-timeout`    | `IDLE_TIMEOUT`    | `5m`          |
| `--port`            | `PORT`            | `8080`        |
| `--model-id`        | `MODEL_ID`        | (empty)       |
| `--gpu-count`       | `GPU_COUNT`       | `2`           |
| `--cpu-offload-gb`  | `CPU_OFFLOAD_GB`  | `0`           |
| `--public-endpoint` | `PUBLIC_ENDPOINT` | (empty)       |
| `--log-output`      | `LOG_OUTPUT`      | `false`       |

An integer variable that does not hold an integer is ignored. `LOG_OUTPUT`
enables output logging only when it is exactly `true`. With no command,
`vllm-chill` prints its help.

## Library use

```python
from vllmchill.model_config import ModelConfig, InvalidModelConfigError

config = ModelConfig(model_name="org/model", served_model_name="model")
try:
    config.validate()
except InvalidModelConfigError as err:
    print(err)  # maxModelLen is required
```

```python
from vllmchill.operation import OperationHandler

handler = OperationHandler(manager)   # any object with start(), stop(), update_activity()
response = handler.start("POST")
print(response.status, response.body())
```

## What this package does not do

- It contains no HTTP proxy or server. `vllm-chill serve` parses its
  options and logs the settings it would use. It then prints an error
  saying that no autoscaler backend is available, and exits with status 1.
- It does not talk to a Kubernetes API server itself. `CRDClient` needs a
  `DynamicClient` supplied by the caller. Nothing here creates, scales or
  deletes pods or services, or checks RBAC permissions.
- The handlers return `JsonResponse` values. Wiring them to a web framework
  is left to the caller.

## Tests

```
pip install .[test]
pytest
```