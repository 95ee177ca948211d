from __future__ import annotations

"""Wire the rule table, rewrite/shrink stages and bundler for one build."""

import logging
import shlex
from pathlib import Path
from typing import Optional

from packshim.adapters.commonjs import CommonJsBundler
from packshim.adapters.uglify import UglifyMinifier
from packshim.core.interfaces.bundler import BundlerProtocol
from packshim.core.interfaces.minifier import MinifierProtocol
from packshim.core.report import DiagnosticsCounters
from packshim.pipeline.rewrite_stage import RewriteStageFactory
from packshim.pipeline.shrink_stage import ShrinkStage
from packshim.processing.rewrite_rules import RuleTable
from packshim.runtime.config import BuildConfig


def build_bundle(
    config: BuildConfig,
    counters: DiagnosticsCounters,
    *,
    bundler: Optional[BundlerProtocol] = None,
    minifier: Optional[MinifierProtocol] = None,
    logger: Optional[logging.Logger] = None,
) -> str:
    """Resolve, rewrite, shrink and pack; returns the packed (unfinished) text.

    Raises:
        BundleError: the module graph could not be resolved or read.
    """
    rules = RuleTable.default(config.utils_module, extra_specs=config.extra_rules, logger=logger)

    shrinker: Optional[ShrinkStage] = None
    if config.shrink:
        shrinker = ShrinkStage(minifier or UglifyMinifier(shlex.split(config.uglify_cmd)), logger=logger)

    if bundler is None:
        bundler = CommonJsBundler(config.entry, basedir=Path(config.cwd), logger=logger)
    bundler.transform(
        RewriteStageFactory(cwd=config.cwd, rules=rules, counters=counters, shrinker=shrinker, logger=logger)
    )
    return bundler.bundle()
