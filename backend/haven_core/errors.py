from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Iterator


class ServiceError(Exception):
    """An error that maps directly onto an HTTP status and JSON body."""

    status_code = 500

    def __init__(self, error: str, message: str | None = None, *, extra: dict[str, Any] | None = None) -> None:
        super().__init__(message or error)
        self.error = error
        self.message = message
        self.extra = dict(extra or {})

    def payload(self) -> dict[str, Any]:
        body: dict[str, Any] = {**self.extra, "error": self.error}
        if self.message is not None:
            body["message"] = self.message
        return body


class ValidationError(ServiceError):
    status_code = 400


class NotFoundError(ServiceError):
    status_code = 404


class UpstreamError(ServiceError):
    status_code = 500


@contextmanager
def failure_boundary(logger: logging.Logger, log_message: str, error_message: str) -> Iterator[None]:
    try:
        yield
    except ServiceError:
        raise
    except Exception as exc:
        logger.exception("%s: %s", log_message, exc)
        raise UpstreamError(error_message, str(exc)) from exc
