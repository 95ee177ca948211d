from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import NoReturn, Optional, Sequence

from packshim.bundling.finisher import BundleFinisher
from packshim.constants import DEFAULT_ENTRY
from packshim.core.errors import BundleError
from packshim.core.report import DiagnosticsCounters
from packshim.core.interfaces.logging import LoggerFactoryProtocol
from packshim.logging.factory import DefaultLoggerFactory
from packshim.logging.helpers import get_logger
from packshim.runtime.builder import build_bundle
from packshim.runtime.config import BuildConfig

logger = get_logger('packshim')


def _configure_logging(enable_json: bool) -> None:
    """Configure process-wide logging; a later call with the other mode swaps the formatter."""
    prev = getattr(_configure_logging, '_configured_mode', None)
    if prev is not None and prev == bool(enable_json):
        return
    factory: LoggerFactoryProtocol = DefaultLoggerFactory(json_logs=enable_json, level=logging.INFO)
    global logger
    logger = factory.get_logger('packshim')
    setattr(_configure_logging, '_configured_mode', bool(enable_json))


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog='packshim',
        description='Bundle a CommonJS module graph for the browser, patching and shrinking each module.',
    )
    p.add_argument('entry', nargs='?', default=None, help=f'entry module (default: {DEFAULT_ENTRY})')
    p.add_argument('--no-shrink', action='store_true', default=None, help='skip minification')
    p.add_argument(
        '-r', '--replace', dest='replace', action='append', default=[], metavar='SPEC',
        help="extra rewrite rule '[PATH_SUBSTRING::]/regex/replacement/flags' (repeatable)",
    )
    p.add_argument('--json-logs', action='store_true', default=None, help='emit diagnostics as JSON lines')
    return p


def run(argv: Sequence[str], *, environ=None) -> int:
    """Build the bundle described by *argv*; returns the process exit status."""
    ns = _build_parser().parse_args(list(argv))
    config = BuildConfig.from_env(
        environ,
        entry=ns.entry,
        shrink=False if ns.no_shrink else None,
        json_logs=ns.json_logs,
        extra_rules=ns.replace,
    )
    _configure_logging(config.json_logs)

    counters = DiagnosticsCounters()
    try:
        packed = build_bundle(config, counters)
    except BundleError as exc:
        logger.error('%s', exc)
        return 1

    BundleFinisher(
        cwd=config.cwd,
        version=config.version,
        user=config.user,
        bundle_name=config.bundle_name,
        counters=counters,
    ).finish(packed)
    return 0


def main(argv: Optional[Sequence[str]] = None) -> NoReturn:
    """Entry point for `packshim` and `python -m packshim`."""
    if hasattr(sys.stdout, 'reconfigure'):
        sys.stdout.reconfigure(encoding='utf-8')
    try:
        raise SystemExit(run(sys.argv[1:] if argv is None else argv))
    except KeyboardInterrupt:
        logger.error('Interrupted by user.')
        raise SystemExit(130)
    except BrokenPipeError:
        raise SystemExit(0)
    except Exception as exc:
        if os.getenv('DEBUG') == '1':
            raise
        logger.error('Unexpected error: %s', exc)
        raise SystemExit(1)


if __name__ == '__main__':
    main()
