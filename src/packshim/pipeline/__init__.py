"""Per-module rewrite and shrink stages."""
from .rewrite_stage import ModuleRewriteStage, RewriteStageFactory, StageState, logical_path_for
from .shrink_stage import DEFAULT_MINIFY_OPTIONS, ShrinkStage

__all__ = [
    'ModuleRewriteStage',
    'RewriteStageFactory',
    'StageState',
    'logical_path_for',
    'DEFAULT_MINIFY_OPTIONS',
    'ShrinkStage',
]
