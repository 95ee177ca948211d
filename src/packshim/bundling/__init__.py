from .finisher import BundleFinisher, format_build_timestamp, scrub_path
from .packer import pack

__all__ = ['BundleFinisher', 'format_build_timestamp', 'scrub_path', 'pack']
