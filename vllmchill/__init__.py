"""VLLMModel resource types, model configuration, CRD client, request handlers and CLI for a vLLM autoscaler."""

__version__ = "0.1.0"