from .errors import BundleError, StageStateError
from .models import BundleHeader, MinifyOptions, MinifyResult, ModuleRecord, PackedModule
from .report import DiagnosticsCounters, StageTimer

__all__ = [
    'BundleError',
    'StageStateError',
    'BundleHeader',
    'MinifyOptions',
    'MinifyResult',
    'ModuleRecord',
    'PackedModule',
    'DiagnosticsCounters',
    'StageTimer',
]
