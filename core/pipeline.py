"""Request -> envelope -> output plumbing for CLI commands.

A command builds a request object, a processor turns it into a
``ResultEnvelope`` and a producer writes the envelope out. ``run_pipeline``
wires the three together and maps the envelope to an exit code.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Generic, Optional, Protocol, Type, TypeVar

LOG = logging.getLogger(__name__)

PayloadT = TypeVar("PayloadT")
ResultT = TypeVar("ResultT")
RequestT = TypeVar("RequestT")

DEFAULT_ERROR_CODE = 2


@dataclass
class ResultEnvelope(Generic[ResultT]):
    status: str
    payload: Optional[ResultT] = None
    diagnostics: Optional[Dict[str, Any]] = None

    @classmethod
    def success(cls, payload: ResultT) -> "ResultEnvelope[ResultT]":
        return cls(status="success", payload=payload)

    @classmethod
    def failure(cls, message: str, code: int) -> "ResultEnvelope[Any]":
        return cls(status="error", diagnostics={"message": message, "code": int(code)})

    def ok(self) -> bool:
        return self.status.lower() == "success"

    @property
    def message(self) -> Optional[str]:
        return (self.diagnostics or {}).get("message")

    @property
    def exit_code(self) -> int:
        if self.ok():
            return 0
        return int((self.diagnostics or {}).get("code", DEFAULT_ERROR_CODE))

    def unwrap(self) -> ResultT:
        """Payload, or ValueError carrying the diagnostics message."""
        if self.payload is None:
            raise ValueError(self.message or "No payload")
        return self.payload


class Processor(Protocol[PayloadT, ResultT]):
    def process(self, payload: PayloadT) -> ResultT:
        ...


class RequestConsumer(Generic[RequestT]):
    """Hands back the request it was built with."""

    def __init__(self, request: RequestT) -> None:
        self.request = request

    def consume(self) -> RequestT:
        return self.request


class BaseProducer:
    """Writes envelopes out.

    A failed envelope prints its message on stdout, next to where the
    command's output would have gone. Subclasses implement
    ``_produce_success`` for the payload.
    """

    def produce(self, result: ResultEnvelope) -> None:
        if self.print_error(result):
            return
        if result.payload is not None:
            self._produce_success(result.payload, result.diagnostics)

    def _produce_success(self, payload: Any, diagnostics: Optional[Dict[str, Any]]) -> None:
        raise NotImplementedError(f"{type(self).__name__} must implement _produce_success")

    @staticmethod
    def print_error(result: ResultEnvelope) -> bool:
        """Print a failed envelope's message. True when the envelope failed."""
        if result.ok():
            return False
        if result.message:
            print(result.message)
        return True


def run_pipeline(request: Any, processor_cls: Type[Any], producer_cls: Type[BaseProducer]) -> int:
    """Consume, process and produce one request.

    Returns 0 on success, else the envelope's ``code`` (default 2).
    """
    payload = RequestConsumer(request).consume()
    envelope = processor_cls().process(payload)
    producer_cls().produce(envelope)
    LOG.debug("%s finished with status %s", processor_cls.__name__, envelope.status)
    return envelope.exit_code
