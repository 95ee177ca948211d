from __future__ import annotations
"""
RuleTable

Path-triggered text patches that make third-party CommonJS modules usable
in the browser. A rule is a ``(trigger, transform)`` pair: the trigger is a
substring (or compiled regex) of the module's logical path, ``None`` for
rules that apply to every module, and the transform is a pure function over
the module text.

Rules run in declared order within a module; later rules may rely on the
text earlier ones produced. Every built-in rule is idempotent, so applying
the table twice yields the same text as applying it once.
"""
import logging
import re
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Union

from packshim.core.interfaces.text import TextTransform, TextTransformerProtocol
from packshim.logging.helpers import get_logger
from packshim.processing.replacement_blocks import BlockFilter, replace_blocks
from packshim.processing.text_ops import TextTransformer, chain, literal, pattern

Trigger = Union[None, str, re.Pattern[str]]

SPEC_TRIGGER_SEP = '::'


@dataclass(frozen=True)
class RewriteRule:
    name: str
    trigger: Trigger
    apply: TextTransform

    def matches(self, logical_path: str) -> bool:
        if self.trigger is None:
            return True
        if isinstance(self.trigger, str):
            return self.trigger in logical_path
        return self.trigger.search(logical_path) is not None


def blocks(block_filter: BlockFilter) -> TextTransform:
    """Wrap *block_filter* as a transform over every replacement block."""
    return lambda text: replace_blocks(text, block_filter)


def utils_require(utils_module: str) -> str:
    return f'require("{utils_module}")'


def readable_stream_block_filter(utils_module: str) -> BlockFilter:
    """Swap readable-stream's node shims for the local utils equivalents."""
    utils = utils_require(utils_module)

    def _filter(block: str) -> str:
        if 'debugUtil' in block:
            return f'var debug = {utils}.debuglog("stream")'
        if 'var asyncWrite =' in block:
            return f'var asyncWrite = {utils}.nextTick'
        if 'internalUtil' in block:
            return f'var deprecate = {utils}.deprecate'
        if 'OurUint8Array' in block:
            return f'var _isUint8Array={utils}.isU8,Buffer=require("buffer").Buffer'
        return block

    return _filter


def default_rules(utils_module: str) -> List[RewriteRule]:
    utils = utils_require(utils_module)
    encode_prelude = f'var nextTick={utils}.nextTick, Buffer = require("buffer").Buffer;\n'

    return [
        RewriteRule(
            name='mp4-box-encoding',
            trigger='/mp4-box-encoding/index.js',
            apply=chain(
                # Expose the box table so it can be extended from outside.
                literal('Box = exports', 'Box=exports;Box.boxes=boxes'),
                literal("'Data too short'", "'Unsupported media format, data too short...'"),
            ),
        ),
        RewriteRule(
            name='pump',
            trigger='/pump/index.js',
            apply=chain(
                literal(
                    'var streams = Array.prototype.slice.call(arguments)',
                    'var i = arguments.length;'
                    'var streams = new Array(i);'
                    'while(i--) streams[i] = arguments[i];',
                ),
                literal("var fs = require('fs')", ''),
                pattern(r'(?<!if\(0\))var isFS = function', r'if(0)\g<0>'),
                literal('isFS(stream)', '0'),
            ),
        ),
        RewriteRule(
            name='readable-stream',
            trigger='readable-stream',
            apply=chain(
                literal("var util = require('core-util-is');", ''),
                literal('util.inherits =', 'var inherits ='),
                # Invoked once per file.
                literal('util.inherits(', 'inherits('),
                literal("require('isarray')", 'Array.isArray'),
                literal("require('process-nextick-args')", f'{utils}.nextTick'),
                literal(' && dest !== process.stdout && dest !== process.stderr', ''),
                blocks(readable_stream_block_filter(utils_module)),
                literal('internalUtil.deprecate(', 'deprecate('),
                literal('_uint8ArrayToBuffer', 'Buffer.from'),
            ),
        ),
        RewriteRule(
            name='mp4-stream-encode',
            trigger='mp4-stream/encode.js',
            apply=chain(
                literal('return process.nextTick', 'return nextTick'),
                pattern(
                    re.escape('function noop () {}'),
                    lambda m: encode_prelude + m.group(0),
                    skip_if=encode_prelude,
                    count=1,
                ),
            ),
        ),
        RewriteRule(
            name='uint64be',
            trigger='/uint64be/index.js',
            # Off-by-one in uint64be v1.0.1.
            apply=literal('UINT_32_MAX = 0xffffffff', 'UINT_32_MAX = Math.pow(2, 32)'),
        ),
        RewriteRule(
            name='safe-buffer',
            trigger=None,
            apply=literal("require('safe-buffer').Buffer", "require('buffer').Buffer"),
        ),
        RewriteRule(
            name='inherits',
            trigger=None,
            apply=literal("require('inherits')", f'{utils}.inherit'),
        ),
    ]


def parse_rule_spec(spec: str, *, transformer: Optional[TextTransformerProtocol] = None) -> Optional[RewriteRule]:
    """Build a rule from ``[SUBSTRING::]/regex/replacement/flags``.

    Returns None (after logging) when the regex part is invalid.
    """
    trigger: Trigger = None
    body = spec
    head, sep, tail = spec.partition(SPEC_TRIGGER_SEP)
    if sep and tail.startswith('/'):
        trigger, body = (head or None), tail
    fn = (transformer or TextTransformer()).to_transform(body)
    if fn is None:
        return None
    return RewriteRule(name=f'extra:{spec}', trigger=trigger, apply=fn)


class RuleTable:
    def __init__(self, rules: Iterable[RewriteRule] = (), *, logger: Optional[logging.Logger] = None) -> None:
        self._rules: List[RewriteRule] = list(rules)
        self._log = logger or get_logger('rules')

    @classmethod
    def default(cls, utils_module: str, *, extra_specs: Sequence[str] = (),
                logger: Optional[logging.Logger] = None) -> 'RuleTable':
        """Built-in rules followed by any user supplied spec rules."""
        table = cls(default_rules(utils_module), logger=logger)
        transformer = TextTransformer(logger=logger)
        for spec in extra_specs:
            rule = parse_rule_spec(spec, transformer=transformer)
            if rule is not None:
                table.register(rule)
        return table

    def register(self, rule: RewriteRule) -> None:
        self._rules.append(rule)

    def matching(self, logical_path: str) -> List[RewriteRule]:
        return [r for r in self._rules if r.matches(logical_path)]

    def apply(self, logical_path: str, text: str) -> str:
        for rule in self.matching(logical_path):
            patched = rule.apply(text)
            if patched != text:
                self._log.debug('rule %s patched %s', rule.name, logical_path)
            text = patched
        return text

    def __len__(self) -> int:
        return len(self._rules)
