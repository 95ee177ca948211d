from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from build_fixtures import build_project

from packshim.adapters.commonjs import CommonJsBundler, scan_requires
from packshim.core.errors import BundleError
from packshim.core.models import MinifyResult
from packshim.core.report import DiagnosticsCounters
from packshim.pipeline.rewrite_stage import RewriteStageFactory
from packshim.pipeline.shrink_stage import ShrinkStage
from packshim.processing.rewrite_rules import RuleTable


class FailingMinifier:
    def minify(self, text, options):
        return MinifyResult(error="SyntaxError: Unexpected token")


class ProjectTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self._td = tempfile.TemporaryDirectory()
        self.root = build_project(Path(self._td.name).resolve())
        self.cwd = str(self.root).replace("\\", "/")
        self.counters = DiagnosticsCounters()

    def tearDown(self) -> None:
        self._td.cleanup()

    def _bundler(self, entry: str = "./bundle/main.js", *, shrinker: ShrinkStage | None = None) -> CommonJsBundler:
        bundler = CommonJsBundler(entry, basedir=self.root)
        bundler.transform(
            RewriteStageFactory(
                cwd=self.cwd,
                rules=RuleTable.default(f"{self.cwd}/bundle/utils"),
                counters=self.counters,
                shrinker=shrinker,
            )
        )
        return bundler


class ScanRequiresTests(unittest.TestCase):
    def test_literal_requires_in_order(self) -> None:
        src = "var a = require('./a'); var b = require( \"b/c\" ); var d = require(dyn); notrequire('x')"
        self.assertEqual(list(scan_requires(src)), ["./a", "b/c"])

    def test_commented_requires_are_ignored(self) -> None:
        src = (
            "// var old = require('./old')\n"
            "/* require('./block')\n   require('./block2') */\n"
            "var url = 'http://x/'; var a = require('./a'); // trailing\n"
            "var s = \"/* not a comment */\"; var b = require('./b')\n"
        )
        self.assertEqual(list(scan_requires(src)), ["./a", "./b"])


class CommonJsBundlerTests(ProjectTestCase):
    def test_modules_in_discovery_order(self) -> None:
        modules = self._bundler().collect()
        names = [Path(m.path).relative_to(self.root).as_posix() for m in modules]
        self.assertEqual(
            names,
            ["bundle/main.js", "bundle/a.js", "node_modules/pump/index.js", "bundle/utils.js", "bundle/data.json"],
        )
        self.assertEqual([m.id for m in modules], [1, 2, 3, 4, 5])
        self.assertTrue(modules[0].entry)
        self.assertFalse(any(m.entry for m in modules[1:]))

    def test_dependencies_scanned_after_rewrite(self) -> None:
        modules = {Path(m.path).name: m for m in self._bundler().collect()}
        pump = modules["index.js"]
        self.assertNotIn("require('fs')", pump.source)
        self.assertIn("if(0)var isFS = function", pump.source)
        self.assertEqual(pump.deps, {})
        main = modules["main.js"]
        self.assertEqual(main.deps, {"./a": 2, "pump": 3, f"{self.cwd}/bundle/utils": 4})

    def test_packed_output_preserves_order(self) -> None:
        packed = self._bundler().bundle()
        marks = [packed.index(f"// mod-{name}") for name in ("main", "a", "pump", "utils")]
        self.assertEqual(marks, sorted(marks))
        self.assertLess(packed.index("// mod-utils"), packed.index('module.exports={"n": 1};'))
        self.assertTrue(packed.endswith("},{},[1]);\n"))

    def test_counters_match_file_sizes(self) -> None:
        modules = self._bundler().collect()
        sizes = [Path(m.path).stat().st_size for m in modules]
        self.assertEqual(self.counters.module_count, len(modules))
        self.assertEqual(self.counters.total_raw_bytes, sum(sizes))

    def test_minifier_failure_keeps_rewritten_source(self) -> None:
        with self.assertLogs("packshim.shrink", level="ERROR"):
            modules = self._bundler(shrinker=ShrinkStage(FailingMinifier())).collect()
        self.assertIn("if (0) return stream.close()", modules[2].source)

    def test_commented_require_survives_minifier_failure(self) -> None:
        (self.root / "bundle/legacy.js").write_text(
            "// old: require('./legacy')\nmodule.exports = 1\n", encoding="utf-8"
        )
        with self.assertLogs("packshim.shrink", level="ERROR"):
            modules = self._bundler("./bundle/legacy.js", shrinker=ShrinkStage(FailingMinifier())).collect()
        self.assertEqual(len(modules), 1)
        self.assertEqual(modules[0].deps, {})
        self.assertIn("// old: require('./legacy')", modules[0].source)

    def test_invalid_utf8_without_transforms(self) -> None:
        (self.root / "bundle/latin.js").write_bytes("module.exports = 'caf\xe9'\n".encode("latin-1"))
        modules = CommonJsBundler("bundle/latin.js", basedir=self.root).collect()
        self.assertEqual(modules[0].source, "module.exports = 'caf\ufffd'\n")

    def test_missing_module_is_fatal(self) -> None:
        (self.root / "bundle/broken.js").write_text("require('./nope')\n", encoding="utf-8")
        with self.assertRaises(BundleError) as cm:
            self._bundler("./bundle/broken.js").bundle()
        self.assertIn("Cannot find module './nope'", str(cm.exception))

    def test_missing_entry_is_fatal(self) -> None:
        with self.assertRaises(BundleError):
            self._bundler("./bundle/absent.js").bundle()

    def test_without_transforms_sources_are_raw(self) -> None:
        (self.root / "bundle/solo.js").write_text("module.exports = 1\n", encoding="utf-8")
        modules = CommonJsBundler("bundle/solo", basedir=self.root).collect()
        self.assertEqual([m.source for m in modules], ["module.exports = 1\n"])

    def test_package_browser_field_wins(self) -> None:
        pkg = self.root / "node_modules/dual"
        pkg.mkdir(parents=True)
        (pkg / "package.json").write_text('{"main": "node.js", "browser": "browser.js"}', encoding="utf-8")
        (pkg / "node.js").write_text("// node\n", encoding="utf-8")
        (pkg / "browser.js").write_text("// browser\n", encoding="utf-8")
        found = CommonJsBundler("x", basedir=self.root).resolve("dual", self.root / "bundle")
        self.assertEqual(found, (pkg / "browser.js").resolve())


if __name__ == "__main__":
    unittest.main()
