from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple


@dataclass
class ModuleRecord:
    """One module flowing through the pipeline.

    Only ``content`` changes once the record exists; it is replaced as the
    rewrite and shrink stages run.
    """
    logical_path: str
    raw_size: int
    content: str = ''


@dataclass(frozen=True)
class BundleHeader:
    version: str
    build_timestamp: str
    built_by: str
    bundle_name: str = 'bundle.js'

    def render(self) -> str:
        return (
            '/**\n'
            ' * This file is automatically generated. Do not edit it.\n'
            f' * $Id: {self.bundle_name},v {self.version} {self.build_timestamp} {self.built_by} Exp $\n'
            ' */\n'
        )


@dataclass(frozen=True)
class MinifyOptions:
    """Fixed shrink configuration handed to the minifier."""
    passes: int = 2
    keep_fnames: bool = True
    sequences: bool = False
    pure_getters: bool = True
    keep_infinity: bool = True
    beautify: bool = True
    indent_level: int = 2
    ascii_only: bool = True
    comments: str = 'some'


@dataclass(frozen=True)
class MinifyResult:
    code: Optional[str] = None
    warnings: Tuple[str, ...] = field(default_factory=tuple)
    error: Optional[str] = None


@dataclass
class PackedModule:
    """A transformed module ready to be packed, with its resolved dependencies."""
    id: int
    path: str
    source: str
    deps: Dict[str, int] = field(default_factory=dict)
    entry: bool = False
