from __future__ import annotations

"""Pack transformed modules into one browser-pack style script."""

import json
from typing import Sequence

from packshim.core.models import PackedModule

# browser-pack's module loader: maps ids to wrapped module functions and
# resolves require() through each module's dependency table.
PRELUDE = (
    '(function(){function r(e,n,t){function o(i,f){if(!n[i]){if(!e[i]){'
    'var c="function"==typeof require&&require;if(!f&&c)return c(i,!0);'
    'if(u)return u(i,!0);var a=new Error("Cannot find module \'"+i+"\'");'
    'throw a.code="MODULE_NOT_FOUND",a}var p=n[i]={exports:{}};'
    'e[i][0].call(p.exports,function(r){var n=e[i][1][r];return o(n||r)},'
    'p,p.exports,r,e,n,t)}return n[i].exports}'
    'for(var u="function"==typeof require&&require,i=0;i<t.length;i++)o(t[i]);'
    'return o}return r})()'
)


def wrap_module(module: PackedModule) -> str:
    deps = json.dumps(module.deps, sort_keys=True)
    return f'{module.id}:[function(require,module,exports){{\n{module.source}\n}},{deps}]'


def pack(modules: Sequence[PackedModule]) -> str:
    """Concatenate *modules* in the given order behind the loader prelude."""
    body = ',\n'.join(wrap_module(m) for m in modules)
    entries = json.dumps([m.id for m in modules if m.entry])
    return f'{PRELUDE}({{{body}}},{{}},{entries});\n'
