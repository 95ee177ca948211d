from __future__ import annotations

from packshim.adapters.commonjs import CommonJsBundler
from packshim.adapters.uglify import UglifyMinifier
from packshim.bundling.finisher import BundleFinisher
from packshim.cli import main
from packshim.core.errors import BundleError, StageStateError
from packshim.core.models import BundleHeader, MinifyOptions, MinifyResult, ModuleRecord
from packshim.core.report import DiagnosticsCounters
from packshim.pipeline.rewrite_stage import ModuleRewriteStage, RewriteStageFactory
from packshim.pipeline.shrink_stage import ShrinkStage
from packshim.processing.replacement_blocks import replace_blocks
from packshim.processing.rewrite_rules import RewriteRule, RuleTable
from packshim.runtime.builder import build_bundle
from packshim.runtime.config import BuildConfig

__version__ = '1.0.0'

__all__ = [
    'BuildConfig',
    'BundleError',
    'BundleFinisher',
    'BundleHeader',
    'CommonJsBundler',
    'DiagnosticsCounters',
    'MinifyOptions',
    'MinifyResult',
    'ModuleRecord',
    'ModuleRewriteStage',
    'RewriteRule',
    'RewriteStageFactory',
    'RuleTable',
    'ShrinkStage',
    'StageStateError',
    'UglifyMinifier',
    'build_bundle',
    'main',
    'replace_blocks',
]
