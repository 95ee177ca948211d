from __future__ import annotations

import logging
import re
from typing import Callable, Optional, Tuple, Union

from packshim.core.interfaces.text import TextTransform, TextTransformerProtocol
from packshim.logging.helpers import get_logger

Replacement = Union[str, Callable[[re.Match[str]], str]]


def literal(target: str, replacement: str) -> TextTransform:
    """Replace every occurrence of *target*; a no-op once *target* is gone.

    *replacement* may not contain *target*, otherwise a second pass would
    patch the already-patched text again.
    """
    if not target:
        raise ValueError('literal target must not be empty')
    if target in replacement:
        raise ValueError(f'replacement for {target!r} re-introduces the target')

    def _apply(text: str) -> str:
        if target not in text:
            return text
        return text.replace(target, replacement)

    return _apply


def pattern(
    regex: Union[str, re.Pattern[str]],
    replacement: Replacement,
    *,
    skip_if: Optional[str] = None,
    count: int = 0,
) -> TextTransform:
    """Regex substitution; skipped entirely when *skip_if* is already present."""
    rx = re.compile(regex) if isinstance(regex, str) else regex

    def _apply(text: str) -> str:
        if skip_if is not None and skip_if in text:
            return text
        return rx.sub(replacement, text, count=count)

    return _apply


def chain(*transforms: TextTransform) -> TextTransform:
    """Compose *transforms* left to right."""

    def _apply(text: str) -> str:
        for fn in transforms:
            text = fn(text)
        return text

    return _apply


class TextTransformer(TextTransformerProtocol):
    def __init__(self, *, logger: Optional[logging.Logger] = None, regex_delim: str = '/') -> None:
        """Sed-like ``/regex/replacement/flags`` specs for user supplied rules."""
        if not isinstance(regex_delim, str) or len(regex_delim) != 1:
            raise ValueError('regex_delim must be a single character string')
        self._log = logger or get_logger('processing.textops')
        self._delim = regex_delim

    def parse_replace_spec(self, spec: str) -> Optional[Tuple[re.Pattern[str], str, bool]]:
        if spec.startswith(("'", '"')) and spec.endswith(spec[0]) and (len(spec) >= 2):
            spec = spec[1:-1]
        if not spec.startswith(self._delim):
            self._log.warning('⚠  invalid replace spec (missing leading %s): %r', self._delim, spec)
            return None

        parts: list[str] = []
        buf: list[str] = []
        escaped = False
        delim = self._delim
        for ch in spec[1:]:
            if escaped:
                # Only the delimiter loses its backslash; regex escapes survive.
                if ch != delim:
                    buf.append('\\')
                buf.append(ch)
                escaped = False
                continue
            if ch == '\\':
                escaped = True
                continue
            if ch == delim:
                parts.append(''.join(buf))
                buf = []
                continue
            buf.append(ch)
        if escaped:
            buf.append('\\')
        parts.append(''.join(buf))

        if len(parts) not in {2, 3}:
            self._log.warning('⚠  invalid replace spec: %r', spec)
            return None

        pattern_src = parts[0]
        replacement = parts[1] if len(parts) == 3 else ''
        flags_src = parts[-1] if len(parts) == 3 else 'g'

        re_flags = 0
        global_sub = 'g' in flags_src
        if 'i' in flags_src:
            re_flags |= re.IGNORECASE
        if 'm' in flags_src:
            re_flags |= re.MULTILINE
        if 's' in flags_src:
            re_flags |= re.DOTALL

        try:
            regex = re.compile(pattern_src, flags=re_flags)
        except re.error as exc:
            self._log.warning('⚠  invalid regex in spec %r: %s', spec, exc)
            return None

        return (regex, replacement, global_sub)

    def to_transform(self, spec: str) -> Optional[TextTransform]:
        parsed = self.parse_replace_spec(spec)
        if parsed is None:
            return None
        regex, replacement, is_global = parsed
        return pattern(regex, replacement, count=0 if is_global else 1)
