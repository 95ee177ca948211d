from __future__ import annotations

"""Final post-processing of the packed bundle: header, path scrub, emit, summary."""

import logging
import sys
from datetime import datetime, timezone
from typing import Optional, TextIO

from packshim.core.models import BundleHeader
from packshim.core.report import DiagnosticsCounters
from packshim.logging.helpers import get_logger


def format_build_timestamp(now: Optional[datetime] = None) -> str:
    """UTC ``YYYY/MM/DD HH:MM:SS``; fractional seconds are dropped."""
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is not None:
        now = now.astimezone(timezone.utc)
    return now.strftime('%Y/%m/%d %H:%M:%S')


def scrub_path(text: str, path: str) -> str:
    """Remove every literal occurrence of *path* from *text*."""
    if not path:
        return text
    return text.replace(path, '')


class BundleFinisher:
    def __init__(
        self,
        *,
        cwd: str,
        version: str,
        user: str,
        bundle_name: str,
        counters: DiagnosticsCounters,
        stdout: Optional[TextIO] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._cwd = cwd
        self._version = version
        self._user = user
        self._bundle_name = bundle_name
        self._counters = counters
        self._stdout = stdout
        self._log = logger or get_logger('finisher')

    def header(self, now: Optional[datetime] = None) -> BundleHeader:
        return BundleHeader(
            version=self._version,
            build_timestamp=format_build_timestamp(now),
            built_by=self._user,
            bundle_name=self._bundle_name,
        )

    def render(self, packed: str, now: Optional[datetime] = None) -> str:
        return self.header(now).render() + scrub_path(packed, self._cwd)

    def finish(self, packed: str, now: Optional[datetime] = None) -> str:
        """Render, write the bundle to stdout once and log the summary."""
        text = self.render(packed, now)
        out = self._stdout or sys.stdout
        out.write(text)
        out.flush()

        self._counters.finish()
        self._log.info(
            'Bundle created with size %d bytes, from %d files with a sum of %d bytes.',
            len(text.encode('utf-8')),
            self._counters.module_count,
            self._counters.total_raw_bytes,
        )
        self._log.info('Process took: %dms', self._counters.elapsed_ms())
        self._log.info(
            'Stage timings: %s',
            ', '.join(f'{stage} {ms}ms' for stage, ms in self._counters.stage_ms().items()),
        )
        return text
