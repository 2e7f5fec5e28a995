"""Command-line interface for the vllm-chill autoscaler."""

from __future__ import annotations

import argparse
import logging
import os
import re
import sys
from dataclasses import dataclass
from typing import List, Optional, Sequence

log = logging.getLogger(__name__)

PROG = "vllm-chill"

_DESCRIPTION = (
    "vLLM AutoScaler is a lightweight proxy that automatically scales vLLM "
    "deployments to zero when idle and wakes them up on incoming requests. "
    "It buffers connections during scale-up and tracks activity to scale down "
    "after a configurable idle timeout."
)

_SERVE_DESCRIPTION = (
    "Start the HTTP proxy server that handles automatic scaling of vLLM: "
    "scale vLLM to 1 replica on incoming requests, buffer connections during "
    "scale-up (max 2 minutes), track activity and scale to 0 after the idle "
    "timeout, and proxy all requests to the vLLM backend."
)

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
_TRUE_WORDS = {"1", "t", "T", "TRUE", "true", "True"}
_FALSE_WORDS = {"0", "f", "F", "FALSE", "false", "False"}


@dataclass
class _BuildInfo:
    version: str = "dev"
    commit: str = "none"
    date: str = "unknown"

    def describe(self) -> str:
        return f"{self.version} (commit: {self.commit}, built: {self.date})"


_build_info = _BuildInfo()


@dataclass
class ServeOptions:
    """Settings for the serve command."""

    namespace: str = "vllm"
    deployment: str = "vllm"
    config_map_name: str = "vllm-config"
    idle_timeout: str = "5m"
    port: str = "8080"
    log_output: bool = False
    model_id: str = ""
    gpu_count: int = 2
    cpu_offload_gb: int = 0
    public_endpoint: str = ""


def get_env_or_default(key: str, default: str) -> str:
    """Return the environment variable, or default when unset or empty."""
    return os.environ.get(key) or default


def get_env_or_default_int(key: str, default: int) -> int:
    """Return the environment variable as an int, or default when unset or not an integer."""
    value = os.environ.get(key)
    if value and _INT_PATTERN.fullmatch(value):
        return int(value)
    return default


def set_version(version: str, commit: str, date: str) -> None:
    """Set the build information reported by --version."""
    _build_info.version = version
    _build_info.commit = commit
    _build_info.date = date


def _parse_bool(text: str) -> bool:
    if text in _TRUE_WORDS:
        return True
    if text in _FALSE_WORDS:
        return False
    raise argparse.ArgumentTypeError(f"invalid boolean value: {text!r}")


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser; flag defaults come from the environment."""
    parser = argparse.ArgumentParser(
        prog=PROG,
        description="Kubernetes autoscaler proxy for vLLM with scale-to-zero support. " + _DESCRIPTION,
    )
    parser.add_argument(
        "--version", action="version", version=f"{PROG} version {_build_info.describe()}"
    )
    commands = parser.add_subparsers(dest="command", metavar="command")
    serve = commands.add_parser(
        "serve", help="Start the autoscaler proxy server", description=_SERVE_DESCRIPTION
    )
    serve.add_argument(
        "--namespace", default=get_env_or_default("VLLM_NAMESPACE", "vllm"),
        help="Kubernetes namespace",
    )
    serve.add_argument(
        "--deployment", default=get_env_or_default("VLLM_DEPLOYMENT", "vllm"),
        help="Deployment name",
    )
    serve.add_argument(
        "--configmap", dest="config_map_name",
        default=get_env_or_default("VLLM_CONFIGMAP", "vllm-config"),
        help="ConfigMap name for model configuration",
    )
    serve.add_argument(
        "--idle-timeout", default=get_env_or_default("IDLE_TIMEOUT", "5m"),
        help="Idle timeout before scaling to 0",
    )
    serve.add_argument(
        "--port", default=get_env_or_default("PORT", "8080"), help="HTTP server port"
    )
    serve.add_argument(
        "--model-id", default=get_env_or_default("MODEL_ID", ""),
        help="Model ID to load from VLLMModel CRD (required)",
    )
    serve.add_argument(
        "--gpu-count", type=int, default=get_env_or_default_int("GPU_COUNT", 2),
        help="Number of GPUs to allocate (infrastructure-level)",
    )
    serve.add_argument(
        "--cpu-offload-gb", type=int, default=get_env_or_default_int("CPU_OFFLOAD_GB", 0),
        help="CPU offload in GB (infrastructure-level)",
    )
    serve.add_argument(
        "--public-endpoint", default=get_env_or_default("PUBLIC_ENDPOINT", ""),
        help="Public-facing endpoint URL",
    )
    serve.add_argument(
        "--log-output", nargs="?", const=True, type=_parse_bool,
        default=get_env_or_default("LOG_OUTPUT", "false") == "true",
        help="Log response bodies (use with caution, can be verbose)",
    )
    return parser


def _options_from(namespace: argparse.Namespace) -> ServeOptions:
    return ServeOptions(
        namespace=namespace.namespace,
        deployment=namespace.deployment,
        config_map_name=namespace.config_map_name,
        idle_timeout=namespace.idle_timeout,
        port=namespace.port,
        log_output=namespace.log_output,
        model_id=namespace.model_id,
        gpu_count=namespace.gpu_count,
        cpu_offload_gb=namespace.cpu_offload_gb,
        public_endpoint=namespace.public_endpoint,
    )


def parse_serve_options(argv: Sequence[str]) -> ServeOptions:
    """Parse the flags of the serve command."""
    return _options_from(build_parser().parse_args(["serve", *argv]))


def _log_startup(options: ServeOptions) -> None:
    log.info("Starting vLLM AutoScaler on :%s", options.port)
    target_host = get_env_or_default("VLLM_TARGET", "vllm-api")
    target_port = get_env_or_default("VLLM_PORT", "80")
    log.info("   Target: http://%s:%s", target_host, target_port)
    log.info("   Deployment: %s/%s", options.namespace, options.deployment)
    log.info("   ConfigMap: %s/%s", options.namespace, options.config_map_name)
    log.info("   Model ID: %s", options.model_id)
    log.info("   Idle timeout: %s", options.idle_timeout)
    if options.log_output:
        log.info("   Output logging: enabled")


def main(argv: Optional[List[str]] = None) -> int:
    """Run the command line; return the process exit status."""
    if argv is None:
        argv = sys.argv[1:]
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_help()
        return 0

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(message)s")
    options = _options_from(args)
    _log_startup(options)
    print("Error: no autoscaler backend is available to serve requests", file=sys.stderr)
    return 1


if __name__ == "__main__":
    sys.exit(main())