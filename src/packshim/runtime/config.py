from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional, Sequence, Tuple

from packshim.constants import (
    DEFAULT_BUNDLE_NAME,
    DEFAULT_ENTRY,
    DEFAULT_UGLIFY_CMD,
    UTILS_MODULE_SUBPATH,
)


def _read_package_version(cwd: Path) -> Optional[str]:
    pkg = cwd / 'package.json'
    if not pkg.is_file():
        return None
    try:
        meta = json.loads(pkg.read_text(encoding='utf-8'))
    except (OSError, ValueError):
        return None
    version = meta.get('version') if isinstance(meta, dict) else None
    return str(version) if version else None


def _truthy(value: Optional[str]) -> bool:
    return (value or '').strip().lower() in {'1', 'true', 'yes', 'on'}


@dataclass(frozen=True)
class BuildConfig:
    """Immutable settings for one build run."""
    cwd: str
    entry: str = DEFAULT_ENTRY
    version: str = '0.0.0'
    user: str = 'unknown'
    bundle_name: str = DEFAULT_BUNDLE_NAME
    uglify_cmd: str = DEFAULT_UGLIFY_CMD
    shrink: bool = True
    json_logs: bool = False
    extra_rules: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def utils_module(self) -> str:
        return f'{self.cwd}/{UTILS_MODULE_SUBPATH}'

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        *,
        cwd: Optional[Path] = None,
        entry: Optional[str] = None,
        shrink: Optional[bool] = None,
        json_logs: Optional[bool] = None,
        extra_rules: Sequence[str] = (),
    ) -> 'BuildConfig':
        """Build the config from environment variables; explicit arguments win.

        Environment:
            PACKSHIM_VERSION, PACKSHIM_BUNDLE_NAME, PACKSHIM_UGLIFYJS,
            PACKSHIM_NO_SHRINK, PACKSHIM_JSON_LOGS, USERNAME / USER.
        """
        env = os.environ if environ is None else environ
        root = Path(cwd or Path.cwd())
        version = env.get('PACKSHIM_VERSION') or _read_package_version(root) or '0.0.0'
        user = env.get('USERNAME') or env.get('USER') or 'unknown'
        if shrink is None:
            shrink = not _truthy(env.get('PACKSHIM_NO_SHRINK'))
        if json_logs is None:
            json_logs = _truthy(env.get('PACKSHIM_JSON_LOGS'))

        return cls(
            cwd=str(root).replace('\\', '/'),
            entry=entry or DEFAULT_ENTRY,
            version=version,
            user=user,
            bundle_name=env.get('PACKSHIM_BUNDLE_NAME') or DEFAULT_BUNDLE_NAME,
            uglify_cmd=env.get('PACKSHIM_UGLIFYJS') or DEFAULT_UGLIFY_CMD,
            shrink=bool(shrink),
            json_logs=bool(json_logs),
            extra_rules=tuple(extra_rules),
        )
