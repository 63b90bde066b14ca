"""
End-to-end compilation tests for tinywat.

Tests the full pipeline from source text to module text, and the command
line wrapper around it.

Author: xwest
"""

import unittest
import sys
import os
import io
import tempfile
from contextlib import redirect_stdout, redirect_stderr

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from tinywat import compile_source, compile_with_diagnostics, CompileError, LexError, ParseError
from tinywat.cli import main, EXIT_OK, EXIT_COMPILE_ERROR, EXIT_IO_ERROR


class TestFullCompilation(unittest.TestCase):
    """Test the full compilation pipeline."""

    def test_simple_function_compilation(self):
        output = compile_source("fn f(a, b) { a + b }")
        self.assertEqual(
            output,
            '(module \n (export "f" $f) (func $f (param $0 i32) (param $1 i32) '
            '(result i32) (i32.add (get_local $0) (get_local $1))))'
        )

    def test_control_flow_compilation(self):
        code = """
        fn fact(n) {
            if n < 2 then 1 else n * fact(n - 1)
        }

        fn main() {
            fact(5)
        }
        """
        output = compile_source(code)

        self.assertTrue(output.startswith("(module \n"))
        self.assertTrue(output.endswith(")"))
        self.assertIn(
            '(export "fact" $fact) (func $fact (param $0 i32) (result i32) '
            '(if i32 (i32.lt (get_local $0) (i32.const 2)) (i32.const 1) '
            '(i32.mul (get_local $0) (call $fact (i32.sub (get_local $0) (i32.const 1))))))',
            output
        )
        self.assertIn('(export "main" $main) (func $main (result i32) (call $fact (i32.const 5)))', output)

    def test_errors_share_a_base_class(self):
        for source, error_type in [("fn f( { 1 }", ParseError), ("fn f() { @ }", LexError)]:
            with self.subTest(source=source):
                with self.assertRaises(error_type) as ctx:
                    compile_source(source)
                self.assertIsInstance(ctx.exception, CompileError)

    def test_diagnostics_do_not_change_output(self):
        source = "fn f() { g() }"
        result = compile_with_diagnostics(source)

        self.assertEqual(result.output, compile_source(source))
        self.assertTrue(result.has_warnings())
        self.assertEqual(len(result.ast), 1)

    def test_long_chain_with_diagnostics(self):
        source = "fn f() { " + " * ".join(["2"] * 300) + " }"
        result = compile_with_diagnostics(source)

        self.assertFalse(result.has_warnings())
        self.assertEqual(result.output.count("(i32.mul "), 299)

    def test_clean_program_has_no_warnings(self):
        result = compile_with_diagnostics("fn f(x) { x * x }")
        self.assertFalse(result.has_warnings())


class TestCommandLine(unittest.TestCase):
    """Test the tinywat command line entry point."""

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()

    def tearDown(self):
        self.tmpdir.cleanup()

    def _write(self, source: str, name: str = "input.tw") -> str:
        path = os.path.join(self.tmpdir.name, name)
        with open(path, 'w', encoding='utf-8') as f:
            f.write(source)
        return path

    def _run(self, *args):
        stdout, stderr = io.StringIO(), io.StringIO()
        with redirect_stdout(stdout), redirect_stderr(stderr):
            status = main(list(args))
        return status, stdout.getvalue(), stderr.getvalue()

    def test_prints_module(self):
        status, out, _ = self._run(self._write("fn f() { 7 }"))

        self.assertEqual(status, EXIT_OK)
        self.assertEqual(out, '(module \n (export "f" $f) (func $f (result i32) (i32.const 7)))\n')

    def test_parse_error(self):
        status, out, _ = self._run(self._write("fn f( { 1 }"))

        self.assertEqual(status, EXIT_COMPILE_ERROR)
        self.assertTrue(out.startswith("Err Expected ')'"))
        self.assertNotIn("(module", out)

    def test_missing_file(self):
        status, _, err = self._run(os.path.join(self.tmpdir.name, "nope.tw"))

        self.assertEqual(status, EXIT_IO_ERROR)
        self.assertIn("nope.tw", err)

    def test_undecodable_file(self):
        path = os.path.join(self.tmpdir.name, "binary.tw")
        with open(path, 'wb') as f:
            f.write(b"fn f() { 1 }\xff")

        status, out, err = self._run(path)

        self.assertEqual(status, EXIT_IO_ERROR)
        self.assertEqual(out, "")
        self.assertIn("Err cannot read", err)
        self.assertIn("binary.tw", err)

    def test_nesting_too_deep(self):
        status, out, _ = self._run(self._write("fn f() { " + " + ".join(["1"] * 5000) + " }"))

        self.assertEqual(status, EXIT_COMPILE_ERROR)
        self.assertTrue(out.startswith("Err Expression nested too deeply"))

    def test_output_file(self):
        target = os.path.join(self.tmpdir.name, "out.wat")
        status, out, _ = self._run(self._write("fn f() { 7 }"), "-o", target)

        self.assertEqual(status, EXIT_OK)
        self.assertEqual(out, "")
        with open(target, encoding='utf-8') as f:
            self.assertIn("(i32.const 7)", f.read())

    def test_token_dump(self):
        status, out, _ = self._run(self._write("fn f() { 7 }"), "--tokens")

        self.assertEqual(status, EXIT_OK)
        self.assertEqual(out.splitlines()[:3], ["FN('fn')", "IDENTIFIER('f')", "LEFT_PAREN('(')"])
        self.assertIn("INTEGER('7' -> 7)", out)

    def test_warnings_go_to_stderr(self):
        status, out, err = self._run(self._write("fn f() { g() }"), "-W")

        self.assertEqual(status, EXIT_OK)
        self.assertIn("(result none)", out)
        self.assertIn("W002", err)
        self.assertIn("W001", err)

    def test_warnings_hidden_by_default(self):
        _, _, err = self._run(self._write("fn f() { g() }"))
        self.assertEqual(err, "")

    def test_verbose(self):
        status, _, err = self._run(self._write("fn a() { 1 } fn b() { 2 }"), "-v")

        self.assertEqual(status, EXIT_OK)
        self.assertIn("Parsed 2 functions", err)


if __name__ == '__main__':
    unittest.main()
