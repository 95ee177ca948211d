from __future__ import annotations

"""Locate ``/*<replacement>*/ ... /*</replacement>*/`` regions and swap them out."""

import re
from typing import Callable

from packshim.constants import REPLACEMENT_END, REPLACEMENT_START

BlockFilter = Callable[[str], str]

# Non-greedy so adjacent blocks are matched one by one.
_BLOCK_RX = re.compile(re.escape(REPLACEMENT_START) + r'[\s\S]*?' + re.escape(REPLACEMENT_END))


def replace_blocks(text: str, block_filter: BlockFilter) -> str:
    """Replace every replacement block in *text* with ``block_filter(block)``.

    The filter receives the whole region, markers included, and its return
    value is inserted verbatim. Returning the argument leaves the block as is.
    """
    return _BLOCK_RX.sub(lambda m: block_filter(m.group(0)), text)
