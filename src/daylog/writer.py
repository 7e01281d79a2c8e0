"""
Fan-out of one rendered line to every enabled sink.
"""

from __future__ import annotations

from datetime import datetime

from . import diagnostics
from .resolver import FileSinkResolver
from .sinks import BaseSink, DailyFileSink, MultiSink, SinkMask, StreamSink


class FanOutWriter:
    """Delivers the same line to the console sinks and the daily file.

    The console sinks (stdout before stderr) share one :class:`MultiSink`;
    the file sink is written separately. A sink that fails never stops the
    others and never raises out of :meth:`write`; each failure is reported
    once on the diagnostics channel.

    The writer is not thread-safe by itself. :class:`daylog.core.Logger`
    serializes calls under its lock.
    """

    def __init__(
        self,
        name: str,
        mask: SinkMask,
        resolver: FileSinkResolver,
        *,
        hold_open: bool = False,
        diagnostic_tag: str | None = None,
    ):
        self._name = name
        self._mask = SinkMask.coerce(mask)
        self._diagnostic_tag = diagnostic_tag

        consoles: list[BaseSink] = []
        if self._mask & SinkMask.CONSOLE_OUT:
            consoles.append(StreamSink("stdout"))
        if self._mask & SinkMask.CONSOLE_ERR:
            consoles.append(StreamSink("stderr"))
        self._console: BaseSink | None = None
        if len(consoles) > 1:
            self._console = MultiSink(consoles, on_error=self._report_failure)
        elif consoles:
            self._console = consoles[0]

        self._file: DailyFileSink | None = None
        if self._mask & SinkMask.FILE:
            self._file = DailyFileSink(name, resolver, hold_open=hold_open)

    @property
    def mask(self) -> SinkMask:
        return self._mask

    @property
    def sinks(self) -> list[BaseSink]:
        return [sink for sink in (self._console, self._file) if sink is not None]

    def write(self, line: str, *, when: datetime | None = None) -> None:
        when = when or datetime.now()
        for sink in self.sinks:
            try:
                sink.emit(line, when)
            except Exception as exc:
                self._report_failure(sink, exc)

    # structlog hands the rendered line to the method named after the level
    msg = debug = info = warning = warn = error = critical = exception = write

    def close(self) -> None:
        for sink in self.sinks:
            sink.close()

    def _report_failure(self, sink: BaseSink, exc: Exception) -> None:
        diagnostics.report(
            f"an error occurred while writing to the {sink.label} sink: {exc}",
            tag=self._diagnostic_tag,
            logger=self._name,
        )
