"""Calendar rendering pipeline components."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from core.cli_errors import ExitCode
from core.pipeline import BaseProducer, Processor, ResultEnvelope

from .generator import count_months, render_calendar, validate_date_range
from .options import CalendarOptions

LOG = logging.getLogger(__name__)


@dataclass
class CalendarRequest:
    options: CalendarOptions
    out_path: Optional[Path] = None


@dataclass
class CalendarResult:
    text: str
    out_path: Optional[Path]
    months: int


class CalendarProcessor(Processor[CalendarRequest, ResultEnvelope[CalendarResult]]):
    def process(self, payload: CalendarRequest) -> ResultEnvelope[CalendarResult]:
        options = payload.options
        valid, message = validate_date_range(options)
        if not valid:
            return ResultEnvelope.failure(message.rstrip("\n"), ExitCode.ERROR)
        try:
            text = render_calendar(options)
        except Exception as exc:
            LOG.debug("Calendar rendering failed", exc_info=True)
            return ResultEnvelope.failure(f"Calendar generation failed: {exc}", ExitCode.ERROR)
        months = count_months(options)
        LOG.debug("Rendered %d month(s), %d characters", months, len(text))
        return ResultEnvelope.success(CalendarResult(text=text, out_path=payload.out_path, months=months))


class CalendarProducer(BaseProducer):
    def _produce_success(self, payload: CalendarResult, diagnostics: Optional[Dict[str, Any]]) -> None:
        if payload.out_path:
            out_path = payload.out_path
            out_path.parent.mkdir(parents=True, exist_ok=True)
            out_path.write_text(payload.text, encoding="utf-8")
            LOG.info("Wrote %s", out_path)
        print(payload.text, end="")
