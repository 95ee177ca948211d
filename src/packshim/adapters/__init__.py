from .commonjs import CommonJsBundler
from .uglify import UglifyMinifier

__all__ = ['CommonJsBundler', 'UglifyMinifier']
