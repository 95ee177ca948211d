from __future__ import annotations
"""CommonJS module graph walker.

This module provides a small bundler that:
- Starts from an entry file and follows literal ``require('...')`` calls.
- Feeds every module through the registered transforms before scanning it,
  so dependencies introduced or removed by a rewrite are honoured.
- Packs the transformed modules, in discovery order, with the loader in
  :mod:`packshim.bundling.packer`.

Resolution is deliberately small: relative and absolute paths, ``.js`` and
``.json`` extensions, ``package.json`` ``browser``/``main`` and ``index.js``,
plus bare names looked up in ``node_modules`` directories walking upwards.
"""

import json
import logging
import re
from collections import deque
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Union

from packshim.core.errors import BundleError
from packshim.core.interfaces.bundler import BundlerProtocol, TransformFactory
from packshim.core.models import PackedModule
from packshim.bundling.packer import pack
from packshim.logging.helpers import get_logger, trace_io

CHUNK_SIZE = 64 * 1024

_REQUIRE_RX = re.compile(r'''\brequire\(\s*(['"])([^'"\n]+)\1\s*\)''')

# Quoted strings are matched first so comment markers inside them survive.
_COMMENT_RX = re.compile(
    r'''("(?:\\.|[^"\\\n])*"|'(?:\\.|[^'\\\n])*'|`(?:\\.|[^`\\])*`)'''
    r'''|//[^\r\n]*|/\*[\s\S]*?\*/'''
)


def strip_comments(source: str) -> str:
    """Drop ``//`` and ``/* */`` comments, keeping string literals intact."""
    return _COMMENT_RX.sub(lambda m: m.group(1) or '', source)


def scan_requires(source: str) -> Iterator[str]:
    """Yield literal require() specifiers outside comments, in order of appearance."""
    for m in _REQUIRE_RX.finditer(strip_comments(source)):
        yield m.group(2)


def _is_path_spec(spec: str) -> bool:
    return spec in ('.', '..') or spec.startswith(('./', '../', '/')) or Path(spec).is_absolute()


class CommonJsBundler(BundlerProtocol):
    def __init__(
        self,
        entry: Union[str, Path],
        *,
        basedir: Optional[Path] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        """Initialize the bundler; *entry* is relative to *basedir* (cwd by default)."""
        self._basedir = Path(basedir or Path.cwd()).resolve()
        self._entry = Path(entry)
        self._transforms: List[TransformFactory] = []
        self._log = logger or get_logger('bundler')

    def transform(self, factory: TransformFactory) -> None:
        self._transforms.append(factory)

    def bundle(self) -> str:
        return pack(self.collect())

    def collect(self) -> List[PackedModule]:
        """Walk the graph breadth-first and return the transformed modules."""
        entry = self._resolve_path(self._entry if self._entry.is_absolute() else self._basedir / self._entry)
        if entry is None:
            raise BundleError(f"Cannot find module '{self._entry}' from '{self._basedir}'")

        ids: Dict[Path, int] = {entry: 1}
        queue = deque([entry])
        modules: List[PackedModule] = []

        while queue:
            path = queue.popleft()
            source = self._load(path)
            deps: Dict[str, int] = {}

            if path.suffix == '.json':
                source = f'module.exports={source.strip()};'
            else:
                for spec in scan_requires(source):
                    if spec in deps:
                        continue
                    target = self.resolve(spec, path.parent)
                    if target not in ids:
                        ids[target] = len(ids) + 1
                        queue.append(target)
                    deps[spec] = ids[target]

            modules.append(PackedModule(id=ids[path], path=str(path), source=source, deps=deps, entry=path == entry))

        return modules

    def _load(self, path: Path) -> str:
        try:
            raw_size = path.stat().st_size
            data = path.read_bytes()
        except OSError as exc:
            raise BundleError(f'could not read {path}: {exc}') from exc
        trace_io(self._log, 'read module', path=str(path), size=raw_size)

        if not self._transforms:
            return data.decode('utf-8', errors='replace')

        text: Union[bytes, str] = data
        for factory in self._transforms:
            stage = factory(path, raw_size)
            if isinstance(text, str):
                stage.write(text)
            else:
                for offset in range(0, len(text), CHUNK_SIZE):
                    stage.write(text[offset:offset + CHUNK_SIZE])
            text = stage.finish()
        return text

    def resolve(self, spec: str, basedir: Path) -> Path:
        """Resolve *spec* as required from a module living in *basedir*."""
        if _is_path_spec(spec):
            candidate = Path(spec) if Path(spec).is_absolute() else basedir / spec
            found = self._resolve_path(candidate)
        else:
            found = self._resolve_node_module(spec, basedir)
        if found is None:
            raise BundleError(f"Cannot find module '{spec}' from '{basedir}'")
        return found

    def _resolve_path(self, base: Path) -> Optional[Path]:
        found = self._resolve_file(base) or self._resolve_dir(base)
        return found.resolve() if found is not None else None

    @staticmethod
    def _resolve_file(base: Path) -> Optional[Path]:
        for cand in (base, base.with_name(base.name + '.js'), base.with_name(base.name + '.json')):
            if cand.is_file():
                return cand
        return None

    def _resolve_dir(self, base: Path) -> Optional[Path]:
        if not base.is_dir():
            return None
        pkg = base / 'package.json'
        if pkg.is_file():
            try:
                meta = json.loads(pkg.read_text(encoding='utf-8'))
            except (OSError, ValueError) as exc:
                raise BundleError(f'invalid package.json at {pkg}: {exc}') from exc
            browser = meta.get('browser')
            main = browser if isinstance(browser, str) else meta.get('main')
            if isinstance(main, str) and main:
                target = base / main
                found = self._resolve_file(target) or self._resolve_index(target)
                if found is not None:
                    return found
        return self._resolve_index(base)

    @staticmethod
    def _resolve_index(base: Path) -> Optional[Path]:
        for name in ('index.js', 'index.json'):
            cand = base / name
            if cand.is_file():
                return cand
        return None

    def _resolve_node_module(self, spec: str, basedir: Path) -> Optional[Path]:
        for d in [basedir, *basedir.parents]:
            if d.name == 'node_modules':
                continue
            found = self._resolve_path(d / 'node_modules' / spec)
            if found is not None:
                return found
        return None
