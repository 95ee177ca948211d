"""Exception types raised by packshim."""


class BundleError(RuntimeError):
    """The module graph could not be resolved or read."""


class StageStateError(RuntimeError):
    """A rewrite stage was driven out of order (e.g. written after finish)."""
