import logging
import time

logger = logging.getLogger(__name__)


class ConsoleProgress:
    """Progress reporter for step-wise batch operations.

    Writes a log line each time another ``report_every_pct`` percent of the
    work is done, with throughput and ETA.
    """

    def __init__(
        self,
        total: int,
        label: str = 'Progress',
        report_every_pct: int = 10,
    ) -> None:
        self.total = max(1, int(total))
        self.done = 0
        self.start = time.monotonic()
        self.label = label
        self.report_every_pct = max(1, int(report_every_pct))
        self._last_reported_pct = -1

    def _format_eta(self, remaining: float) -> str:
        if remaining == float('inf'):
            return '--:--'
        m, s = divmod(int(remaining), 60)
        h, m = divmod(m, 60)
        if h > 0:
            return f'{h:02d}:{m:02d}:{s:02d}'
        return f'{m:02d}:{s:02d}'

    @property
    def percent(self) -> int:
        return int(100 * self.done / self.total)

    def _render(self) -> None:
        pct = self.percent
        bucket = pct - pct % self.report_every_pct
        if bucket <= self._last_reported_pct:
            return
        self._last_reported_pct = bucket
        elapsed = max(1e-6, time.monotonic() - self.start)
        rps = self.done / elapsed
        remaining = (self.total - self.done) / rps if rps > 0 else float('inf')
        logger.info(
            '%s: %d%% (%d/%d) | %.1f/s | ETA %s',
            self.label,
            pct,
            self.done,
            self.total,
            rps,
            self._format_eta(remaining),
        )

    def step(self, n: int = 1) -> None:
        self.done = min(self.total, self.done + n)
        self._render()

    def close(self) -> None:
        if self.done < self.total:
            logger.debug('%s: stopped at %d/%d', self.label, self.done, self.total)
