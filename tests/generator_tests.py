#!/usr/bin/env python3

from __future__ import annotations

import pathlib
import subprocess
import sys
import tempfile
import textwrap
import unittest

REPO_ROOT = pathlib.Path(__file__).resolve().parents[1]
GENERATOR_PATH = REPO_ROOT / "tools" / "variants_struct_gen.py"


class GeneratorBehaviorTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls) -> None:
        cls.generator = GENERATOR_PATH
        cls.repo_root = REPO_ROOT

    def run_gen(self, in_path: pathlib.Path, out_path: pathlib.Path, check: bool = False) -> subprocess.CompletedProcess[str]:
        cmd = [
            sys.executable,
            str(self.generator),
            "--in",
            str(in_path),
            "--out",
            str(out_path),
        ]
        if check:
            cmd.append("--check")
        return subprocess.run(cmd, cwd=self.repo_root, text=True, capture_output=True)

    def gen_source(self, name: str, source: str) -> tuple[subprocess.CompletedProcess[str], pathlib.Path]:
        td = tempfile.TemporaryDirectory()
        self.addCleanup(td.cleanup)
        tmp = pathlib.Path(td.name)
        in_path = tmp / f"{name}.py.variants"
        out_path = tmp / f"{name}.py"
        in_path.write_text(textwrap.dedent(source).strip() + "\n", encoding="utf-8")
        return self.run_gen(in_path, out_path), out_path

    def test_targeted_substitution_and_passthrough(self) -> None:
        source = """
            import enum
            # @variants_struct in a comment should remain untouched
            TOKEN = "@variants_struct in a string"


            class Passthrough:
                k: int


            @variants_struct
            class Demo:
                First
                Second


            @variants_struct
            class Other:
                Only
            """

        result, out_path = self.gen_source("demo", source)
        self.assertEqual(result.returncode, 0, msg=result.stderr)
        self.assertIn("generated:", result.stdout)

        generated = out_path.read_text(encoding="utf-8")
        self.assertTrue(generated.startswith("# variants-struct-generated\n"))
        self.assertIn("class Passthrough:", generated)
        self.assertIn("# @variants_struct in a comment should remain untouched", generated)
        self.assertIn('"@variants_struct in a string"', generated)
        self.assertIn("class DemoStruct(_vs_typing.Generic[_T_DemoStruct]):", generated)
        self.assertIn("class OtherStruct(_vs_typing.Generic[_T_OtherStruct]):", generated)
        self.assertNotIn("\n@variants_struct\n", generated)
        self.assertEqual(generated.count("import variants_struct_runtime as _vs_runtime"), 1)
        self.assertLess(generated.index("import enum"), generated.index("import variants_struct_runtime"))

    def test_check_mode_reports_drift(self) -> None:
        source = textwrap.dedent(
            """
            @variants_struct
            class A:
                X
            """
        ).strip() + "\n"

        with tempfile.TemporaryDirectory() as td:
            tmp = pathlib.Path(td)
            in_path = tmp / "a.py.variants"
            out_path = tmp / "a.py"
            in_path.write_text(source, encoding="utf-8")

            first = self.run_gen(in_path, out_path)
            self.assertEqual(first.returncode, 0, msg=first.stderr)

            again = self.run_gen(in_path, out_path)
            self.assertEqual(again.returncode, 0, msg=again.stderr)
            self.assertIn("unchanged", again.stdout)

            check_ok = self.run_gen(in_path, out_path, check=True)
            self.assertEqual(check_ok.returncode, 0, msg=check_ok.stderr)
            self.assertIn("up-to-date", check_ok.stdout)

            in_path.write_text(source + "# changed\n", encoding="utf-8")
            check_bad = self.run_gen(in_path, out_path, check=True)
            self.assertNotEqual(check_bad.returncode, 0)
            self.assertIn("out of date", check_bad.stderr)

    def test_check_mode_reports_missing_output(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            tmp = pathlib.Path(td)
            in_path = tmp / "m.py.variants"
            out_path = tmp / "m.py"
            in_path.write_text("@variants_struct\nclass M:\n    X\n", encoding="utf-8")

            result = self.run_gen(in_path, out_path, check=True)
            self.assertNotEqual(result.returncode, 0)
            self.assertIn("is missing", result.stderr)

    def test_missing_input_reported(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            tmp = pathlib.Path(td)
            result = self.run_gen(tmp / "nope.py.variants", tmp / "nope.py")
            self.assertNotEqual(result.returncode, 0)
            self.assertIn("input file does not exist", result.stderr)

    def test_multi_value_variant_rejected_with_location(self) -> None:
        source = """
            @variants_struct
            class Bad:
                Fine
                Pair(int, str)
            """

        result, out_path = self.gen_source("bad", source)
        self.assertNotEqual(result.returncode, 0)
        self.assertIn("only variants with exactly one value are supported (found 2)", result.stderr)
        self.assertRegex(result.stderr, r"bad\.py\.variants:4:5: error:")
        self.assertFalse(out_path.exists())

    def test_empty_call_variant_rejected(self) -> None:
        source = """
            @variants_struct
            class Bad:
                Nothing()
            """

        result, _ = self.gen_source("empty_call", source)
        self.assertNotEqual(result.returncode, 0)
        self.assertIn("variant 'Nothing': only variants with exactly one value are supported (found 0)", result.stderr)

    def test_named_payload_rejected(self) -> None:
        source = """
            @variants_struct
            class Bad:
                There(key=int)
            """

        result, out_path = self.gen_source("named", source)
        self.assertNotEqual(result.returncode, 0)
        self.assertIn("named payloads are not supported", result.stderr)
        self.assertFalse(out_path.exists())

    def test_non_variant_statement_rejected(self) -> None:
        source = """
            @variants_struct
            class Bad:
                World
                def helper(self):
                    return 1
            """

        result, _ = self.gen_source("stmt", source)
        self.assertNotEqual(result.returncode, 0)
        self.assertIn("only variant declarations are allowed", result.stderr)
        self.assertRegex(result.stderr, r"stmt\.py\.variants:4:5: error:")

    def test_duplicate_variant_rejected(self) -> None:
        source = """
            @variants_struct
            class Bad:
                World
                World
            """

        result, _ = self.gen_source("dup", source)
        self.assertNotEqual(result.returncode, 0)
        self.assertIn("duplicate variant 'World'", result.stderr)

    def test_base_classes_rejected(self) -> None:
        source = """
            @variants_struct
            class Bad(object):
                World
            """

        result, _ = self.gen_source("bases", source)
        self.assertNotEqual(result.returncode, 0)
        self.assertIn("cannot declare base classes", result.stderr)

    def test_nested_declaration_rejected(self) -> None:
        source = """
            def factory():
                @variants_struct
                class Inner:
                    World
                return Inner
            """

        result, _ = self.gen_source("nested", source)
        self.assertNotEqual(result.returncode, 0)
        self.assertIn("must be declared at module level", result.stderr)

    def test_syntax_error_reported_with_location(self) -> None:
        source = """
            @variants_struct
            class Broken:
                World(
            """

        result, out_path = self.gen_source("broken", source)
        self.assertNotEqual(result.returncode, 0)
        self.assertRegex(result.stderr, r"broken\.py\.variants:\d+:\d+: error:")
        self.assertFalse(out_path.exists())

    def test_non_path_derive_argument_rejected(self) -> None:
        source = """
            @variants_struct
            @struct_derive(dataclasses.dataclass(eq=False))
            class Bad:
                World
            """

        result, _ = self.gen_source("derive", source)
        self.assertNotEqual(result.returncode, 0)
        self.assertIn("struct_derive: only path arguments are accepted", result.stderr)
        self.assertRegex(result.stderr, r"derive\.py\.variants:2:16: error:")

    def test_struct_name_requires_string_literal(self) -> None:
        source = """
            @variants_struct
            @struct_name(Other)
            class Bad:
                World
            """

        result, _ = self.gen_source("rename", source)
        self.assertNotEqual(result.returncode, 0)
        self.assertIn("struct_name: must be a str literal", result.stderr)

    def test_directive_without_arguments_rejected(self) -> None:
        source = """
            @variants_struct
            @struct_bounds
            class Bad:
                World
            """

        result, _ = self.gen_source("bare", source)
        self.assertNotEqual(result.returncode, 0)
        self.assertIn("struct_bounds: arguments are required", result.stderr)

    def test_field_names_unknown_variant_rejected(self) -> None:
        source = """
            @variants_struct
            @field_names(Missing="x")
            class Bad:
                World
            """

        result, _ = self.gen_source("field_names", source)
        self.assertNotEqual(result.returncode, 0)
        self.assertIn("field_names: unknown variant 'Missing'", result.stderr)

    def test_field_names_with_dunder_prefix_rejected(self) -> None:
        source = """
            @variants_struct
            @field_names(World="__w")
            class Bad:
                World
            """

        result, out_path = self.gen_source("dunder_field", source)
        self.assertNotEqual(result.returncode, 0)
        self.assertIn("dunder_field.py.variants:2:20: error:", result.stderr)
        self.assertIn("field_names: field name '__w' must not start with '__'", result.stderr)
        self.assertFalse(out_path.exists())

    def test_conflicting_struct_name_warns_and_keeps_first(self) -> None:
        source = """
            @variants_struct
            @struct_name("First")
            @struct_name("First")
            @struct_name("Second")
            class Named:
                World
            """

        result, out_path = self.gen_source("conflict", source)
        self.assertEqual(result.returncode, 0, msg=result.stderr)
        self.assertRegex(result.stderr, r"conflict\.py\.variants:4:2: warning: struct_name: conflicting value 'Second'")
        self.assertEqual(result.stderr.count("warning:"), 1)

        generated = out_path.read_text(encoding="utf-8")
        self.assertIn("class First(", generated)
        self.assertNotIn("class Second(", generated)

    def test_unrecognized_decorators_are_kept_on_union(self) -> None:
        source = """
            import typing


            @typing.final
            @variants_struct
            @struct_derive(typing.final)
            class Tagged:
                World
            """

        result, out_path = self.gen_source("unknown", source)
        self.assertEqual(result.returncode, 0, msg=result.stderr)

        generated = out_path.read_text(encoding="utf-8")
        self.assertIn("@typing.final\nclass Tagged:", generated)
        self.assertIn("@typing.final\nclass TaggedStruct(", generated)
        self.assertNotIn("struct_derive", generated)


if __name__ == "__main__":
    if len(sys.argv) not in (1, 3):
        raise SystemExit("usage: generator_tests.py [<generator_path> <repo_root>]")
    if len(sys.argv) == 3:
        GENERATOR_PATH = pathlib.Path(sys.argv[1]).resolve()
        REPO_ROOT = pathlib.Path(sys.argv[2]).resolve()
    sys.argv = [sys.argv[0]]
    unittest.main()
