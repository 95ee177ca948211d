from .config import BuildConfig
from .builder import build_bundle

__all__ = ['BuildConfig', 'build_bundle']
