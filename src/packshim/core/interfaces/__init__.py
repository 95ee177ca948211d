from .bundler import BundlerProtocol, TransformFactory, TransformStageProtocol
from .logging import LoggerFactoryProtocol
from .minifier import MinifierProtocol
from .text import TextTransform, TextTransformerProtocol

__all__ = [
    'BundlerProtocol',
    'TransformFactory',
    'TransformStageProtocol',
    'LoggerFactoryProtocol',
    'MinifierProtocol',
    'TextTransform',
    'TextTransformerProtocol',
]
