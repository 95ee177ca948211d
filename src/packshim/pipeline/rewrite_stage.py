from __future__ import annotations

"""
Per-module rewrite stage.

One ModuleRewriteStage is created for every module the bundler emits. It
buffers the module's chunks, and on ``finish()`` runs the rule table and the
shrink stage over the whole text:

    CREATED -> ACCUMULATING -> FINALIZING -> EMITTED

Rule errors propagate to the caller; shrink errors never do.
"""

import enum
import logging
from pathlib import Path
from typing import List, Optional, Union

from packshim.core.errors import StageStateError
from packshim.core.models import ModuleRecord
from packshim.core.report import DiagnosticsCounters, StageTimer
from packshim.logging.helpers import get_logger
from packshim.pipeline.shrink_stage import ShrinkStage
from packshim.processing.rewrite_rules import RuleTable


class StageState(enum.Enum):
    CREATED = 'created'
    ACCUMULATING = 'accumulating'
    FINALIZING = 'finalizing'
    EMITTED = 'emitted'


def logical_path_for(filename: Union[str, Path], cwd: str) -> str:
    """Normalise separators and replace the working directory with '..'."""
    path = str(filename).replace('\\', '/')
    if cwd:
        path = path.replace(cwd, '..', 1)
    return path


class ModuleRewriteStage:
    def __init__(
        self,
        record: ModuleRecord,
        *,
        rules: RuleTable,
        counters: DiagnosticsCounters,
        shrinker: Optional[ShrinkStage] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.record = record
        self._rules = rules
        self._counters = counters
        self._shrinker = shrinker
        self._log = logger or get_logger('rewrite')
        self._chunks: List[bytes] = []
        self.state = StageState.CREATED

        self._counters.record_module(record.raw_size)
        self._log.info('Bundling "%s" (%d bytes)', record.logical_path, record.raw_size)

    def write(self, chunk: Union[bytes, str]) -> None:
        if self.state not in (StageState.CREATED, StageState.ACCUMULATING):
            raise StageStateError(f'cannot write to {self.record.logical_path}: stage is {self.state.value}')
        if isinstance(chunk, str):
            chunk = chunk.encode('utf-8')
        self._chunks.append(chunk)
        self.state = StageState.ACCUMULATING

    def finish(self) -> str:
        if self.state in (StageState.FINALIZING, StageState.EMITTED):
            raise StageStateError(f'{self.record.logical_path} was already finalized')
        self.state = StageState.FINALIZING

        text = b''.join(self._chunks).decode('utf-8', errors='replace')
        self._chunks.clear()

        with StageTimer(self._counters, 'rewrite'):
            text = self._rules.apply(self.record.logical_path, text)

        if self._shrinker is not None:
            with StageTimer(self._counters, 'shrink'):
                text = self._shrinker.shrink(text, logical_path=self.record.logical_path)

        self.record.content = text
        self.state = StageState.EMITTED
        return text


class RewriteStageFactory:
    """Builds one ModuleRewriteStage per module; registered with the bundler."""

    def __init__(
        self,
        *,
        cwd: str,
        rules: RuleTable,
        counters: DiagnosticsCounters,
        shrinker: Optional[ShrinkStage] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._cwd = cwd
        self._rules = rules
        self._counters = counters
        self._shrinker = shrinker
        self._log = logger

    def __call__(self, filename: Path, raw_size: int) -> ModuleRewriteStage:
        record = ModuleRecord(logical_path=logical_path_for(filename, self._cwd), raw_size=int(raw_size))
        return ModuleRewriteStage(
            record,
            rules=self._rules,
            counters=self._counters,
            shrinker=self._shrinker,
            logger=self._log,
        )
