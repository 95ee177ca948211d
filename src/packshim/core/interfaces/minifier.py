from __future__ import annotations
from typing import Protocol, runtime_checkable

from packshim.core.models import MinifyOptions, MinifyResult


@runtime_checkable
class MinifierProtocol(Protocol):
    """Compacts source text.

    Implementations report failures through ``MinifyResult.error`` rather than
    raising; callers still guard against unexpected exceptions.
    """

    def minify(self, text: str, options: MinifyOptions) -> MinifyResult:
        ...
