"""
adapters.uglify – MinifierProtocol backed by the ``uglifyjs`` executable.

The module text is piped through stdin; a non-zero exit (parse error) or a
missing executable is reported as ``MinifyResult.error`` so the shrink stage
can keep the unminified text.
"""

from __future__ import annotations

import logging
import subprocess
from typing import List, Optional, Sequence

from packshim.constants import DEFAULT_UGLIFY_CMD
from packshim.core.interfaces.minifier import MinifierProtocol
from packshim.core.models import MinifyOptions, MinifyResult
from packshim.logging.helpers import get_logger

_WARN_PREFIX = 'WARN: '


def _flag(value: bool) -> str:
    return 'true' if value else 'false'


def build_cli_args(options: MinifyOptions) -> List[str]:
    """Translate *options* into uglify-js 3 command line flags."""
    args = ['--warn']
    args += ['-m', f'keep_fnames={_flag(options.keep_fnames)}']
    args += [
        '-c',
        ','.join([
            f'passes={options.passes}',
            f'sequences={_flag(options.sequences)}',
            f'pure_getters={_flag(options.pure_getters)}',
            f'keep_infinity={_flag(options.keep_infinity)}',
        ]),
    ]
    output = [f'ascii_only={_flag(options.ascii_only)}']
    if options.beautify:
        args += ['-b', ','.join([f'indent_level={options.indent_level}'] + output)]
    else:
        args += ['-O', ','.join(output)]
    if options.comments:
        args += ['--comments', options.comments]
    return args


class UglifyMinifier(MinifierProtocol):
    def __init__(
        self,
        command: Sequence[str] | str = DEFAULT_UGLIFY_CMD,
        *,
        timeout: Optional[float] = 60.0,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._command = [command] if isinstance(command, str) else list(command)
        self._timeout = timeout
        self._log = logger or get_logger('uglify')

    def minify(self, text: str, options: MinifyOptions) -> MinifyResult:
        cmd = self._command + build_cli_args(options)
        try:
            proc = subprocess.run(
                cmd,
                input=text,
                capture_output=True,
                text=True,
                encoding='utf-8',
                timeout=self._timeout,
            )
        except FileNotFoundError:
            return MinifyResult(error=f'{self._command[0]} not found')
        except (OSError, subprocess.SubprocessError) as exc:
            return MinifyResult(error=f'could not run {self._command[0]}: {exc}')

        stderr_lines = [ln for ln in (proc.stderr or '').splitlines() if ln.strip()]
        if proc.returncode != 0:
            return MinifyResult(error='\n'.join(stderr_lines) or f'exit status {proc.returncode}')

        warnings = tuple(ln[len(_WARN_PREFIX):] for ln in stderr_lines if ln.startswith(_WARN_PREFIX))
        return MinifyResult(code=proc.stdout, warnings=warnings)
