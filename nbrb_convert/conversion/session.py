"""Caller-owned state around repeated processing runs."""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Optional, Union

from nbrb_convert.conversion.errors import ConversionError, SessionBusyError
from nbrb_convert.conversion.pipeline import PipelineState, run_conversion
from nbrb_convert.conversion.resolver import RateResolver
from nbrb_convert.ingestion.line_parser import read_input
from nbrb_convert.ingestion.models import ConversionReport
from nbrb_convert.ingestion.strategy import RateSource
from nbrb_convert.utils.logger import get_logger

LOGGER = get_logger(__name__)


class ConversionSession:
    """Holds the input text, busy flag, last error and last report.

    Each successful run replaces the previous report wholesale. A failed run
    leaves an error message and an empty report. Only one run may be in
    flight at a time.
    """

    def __init__(self, source: Union[RateResolver, RateSource], input_text: str = "") -> None:
        self.source = source
        self.input_text = input_text
        self.state = PipelineState.IDLE
        self.error: Optional[str] = None
        self.report = ConversionReport()
        self._lock = threading.Lock()

    @property
    def busy(self) -> bool:
        return self._lock.locked()

    def load_file(self, path: str | Path, *, encoding: str = "utf-8") -> str:
        self.input_text = read_input(path, encoding=encoding)
        return self.input_text

    def _set_state(self, state: PipelineState) -> None:
        self.state = state

    def process(self, text: Optional[str] = None) -> ConversionReport:
        """Run the pipeline over ``text`` (or the stored input).

        Raises :class:`SessionBusyError` if another run has not finished yet.
        """

        if not self._lock.acquire(blocking=False):
            raise SessionBusyError()
        try:
            if text is not None:
                self.input_text = text
            self.error = None
            try:
                self.report = run_conversion(
                    self.input_text, self.source, on_state=self._set_state
                )
            except ConversionError as exc:
                LOGGER.warning("Conversion run failed: %s", exc)
                self.error = exc.message
                self.report = ConversionReport()
            return self.report
        finally:
            self.state = PipelineState.IDLE
            self._lock.release()


__all__ = ["ConversionSession"]
