from __future__ import annotations
"""Text transformer protocol definitions."""

import re
from typing import Callable, Optional, Protocol, Tuple

# A pure text-to-text function; rule bodies and block filters share this shape.
TextTransform = Callable[[str], str]


class TextTransformerProtocol(Protocol):
    """Protocol for sed-like replacement specs (``/regex/replacement/flags``).

    Methods:
        parse_replace_spec: Parse a textual spec into (regex, replacement, global_flag).
        to_transform: Turn one spec into a text transform.
    """

    def parse_replace_spec(self, spec: str) -> Optional[Tuple[re.Pattern[str], str, bool]]:
        ...

    def to_transform(self, spec: str) -> Optional[TextTransform]:
        ...
