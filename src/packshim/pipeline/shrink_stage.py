from __future__ import annotations

import logging
from typing import Optional

from packshim.core.interfaces.minifier import MinifierProtocol
from packshim.core.models import MinifyOptions
from packshim.logging.helpers import get_logger

DEFAULT_MINIFY_OPTIONS = MinifyOptions()


class ShrinkStage:
    def __init__(
        self,
        minifier: MinifierProtocol,
        *,
        options: MinifyOptions = DEFAULT_MINIFY_OPTIONS,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        """Minify module text, falling back to the input on any failure."""
        self._minifier = minifier
        self._options = options
        self._log = logger or get_logger('shrink')

    @property
    def options(self) -> MinifyOptions:
        return self._options

    def shrink(self, text: str, *, logical_path: str) -> str:
        try:
            result = self._minifier.minify(text, self._options)
        except Exception as exc:
            self._log.error('UglifyJS error: %s (%s)', exc, logical_path)
            return text

        if result.error is not None:
            self._log.error('UglifyJS error: %s (%s)', result.error, logical_path)
            return text
        if result.code is None:
            return text

        if result.warnings:
            tag = f'UglifyJS({logical_path}): '
            for warning in result.warnings:
                self._log.warning('%s%s', tag, warning)
        return result.code
