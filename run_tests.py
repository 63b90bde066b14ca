#!/usr/bin/env python3
"""
Main test runner for tinywat compiler tests.

Author: xwest
"""

import sys
import os
import unittest

# Add the project root to the Python path
project_root = os.path.abspath(os.path.dirname(__file__))
sys.path.insert(0, project_root)


def run_pipeline_smoke_test() -> bool:
    """Compile a small program through every stage and show the result."""

    print("Testing simple compilation pipeline...")
    try:
        from tinywat.lexer.lexer import tokenize_string
        from tinywat.parser.parser import parse
        from tinywat.analyzer.type_inference import collect_type_warnings
        from tinywat.codegen.wat_emitter import render
    except ImportError as e:
        print(f"❌ Failed to import compiler modules: {e}")
        return False

    code = """
    fn add(a, b) { a + b }

    fn main() { add(5, 10) }
    """

    print("  🔧 Lexing...")
    tokens = tokenize_string(code)
    print(f"     Generated {len(tokens)} tokens")

    print("  🔧 Parsing...")
    program = parse(code)
    print(f"     Generated AST with {len(program)} functions")

    print("  🔧 Type inference...")
    warnings = collect_type_warnings(program)
    if warnings:
        for warning in warnings:
            print(f"        {warning.message}")
        return False
    print("     ✅ No type warnings")

    print("  🔧 Emitting module...")
    output = render(program)
    print("-" * 40)
    print(output)
    print("-" * 40)
    print()
    return True


def run_all_tests() -> bool:
    """Run all tinywat compiler tests."""

    print("🚀 tinywat Compiler Test Suite")
    print("=" * 60)

    if not run_pipeline_smoke_test():
        print("❌ Compilation pipeline test FAILED")
        return False
    print("✅ Full compilation pipeline test PASSED")
    print()

    suite = unittest.defaultTestLoader.discover(os.path.join(project_root, "tests"))
    result = unittest.TextTestRunner(verbosity=2).run(suite)
    return result.wasSuccessful()


if __name__ == "__main__":
    success = run_all_tests()
    sys.exit(0 if success else 1)
