"""HTTP handlers for manual vLLM start and stop operations."""

from __future__ import annotations

import logging
from typing import Protocol

from .responses import TEXT_CONTENT_TYPE, JsonResponse

log = logging.getLogger(__name__)


class OperationManager(Protocol):
    """Operations the handlers need from the vLLM manager."""

    def start(self) -> None:
        ...

    def stop(self) -> None:
        ...

    def update_activity(self) -> None:
        ...


def _success(message: str) -> JsonResponse:
    return JsonResponse(200, {"status": "success", "message": message})


def _failure(message: str, kind: str) -> JsonResponse:
    return JsonResponse(500, {"error": {"message": message, "type": kind}})


def _method_not_allowed() -> JsonResponse:
    return JsonResponse(405, "Method not allowed", content_type=TEXT_CONTENT_TYPE)


class RoutedOperationHandler:
    """Start/stop handlers for a router that has already matched the method."""

    def __init__(self, manager: OperationManager) -> None:
        self.manager = manager

    def start(self) -> JsonResponse:
        """Start vLLM, recording activity first to prevent an immediate scale-down."""
        log.info("Manual start requested")
        self.manager.update_activity()
        try:
            self.manager.start()
        except Exception as exc:
            log.error("Failed to start vLLM: %s", exc)
            return _failure(str(exc), "start_failed")
        return _success("vLLM started successfully")

    def stop(self) -> JsonResponse:
        """Stop vLLM."""
        log.info("Manual stop requested")
        try:
            self.manager.stop()
        except Exception as exc:
            log.error("Failed to stop vLLM: %s", exc)
            return _failure(str(exc), "stop_failed")
        return _success("vLLM stopped successfully")


class OperationHandler:
    """Start/stop handlers that accept only POST requests."""

    def __init__(self, manager: OperationManager) -> None:
        self.manager = manager

    def start(self, method: str) -> JsonResponse:
        """Start vLLM in answer to a request with the given HTTP method."""
        if method.upper() != "POST":
            return _method_not_allowed()
        log.info("Manual start requested")
        self.manager.update_activity()
        try:
            self.manager.start()
        except Exception as exc:
            log.error("Failed to start vLLM: %s", exc)
            return _failure(f"Failed to start vLLM: {exc}", "start_failed")
        return _success("vLLM started successfully")

    def stop(self, method: str) -> JsonResponse:
        """Stop vLLM in answer to a request with the given HTTP method."""
        if method.upper() != "POST":
            return _method_not_allowed()
        log.info("Manual stop requested")
        try:
            self.manager.stop()
        except Exception as exc:
            log.error("Failed to stop vLLM: %s", exc)
            return _failure(f"Failed to stop vLLM: {exc}", "stop_failed")
        return _success("vLLM stopped successfully")