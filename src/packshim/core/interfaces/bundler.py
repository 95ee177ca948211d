from __future__ import annotations
from pathlib import Path
from typing import Callable, Protocol, Union, runtime_checkable

Chunk = Union[bytes, str]


@runtime_checkable
class TransformStageProtocol(Protocol):
    """Per-module content transform, created once per module."""

    def write(self, chunk: Chunk) -> None:
        ...

    def finish(self) -> str:
        ...


# Called with the module's file path and its size on disk.
TransformFactory = Callable[[Path, int], TransformStageProtocol]


@runtime_checkable
class BundlerProtocol(Protocol):
    """Resolves a module graph and packs the transformed modules."""

    def transform(self, factory: TransformFactory) -> None:
        """Register a transform applied to every emitted module."""
        ...

    def bundle(self) -> str:
        """Resolve, transform and pack; raise BundleError on failure."""
        ...
