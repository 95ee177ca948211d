"""Public API surface for packshim.processing."""
__all__ = [
    "replacement_blocks",
    "rewrite_rules",
    "text_ops",
]
