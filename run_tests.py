#!/usr/bin/env python3
"""
Test runner for LinkHub.
Extra arguments are passed straight to pytest, e.g. `./run_tests.py -k bulk`.
"""

import subprocess
import sys
import os


def run_tests(extra_args):
    """Run the test suite, returning pytest's exit code"""
    print("🧪 Running LinkHub tests")
    print("=" * 40)

    project_dir = os.path.dirname(os.path.abspath(__file__))

    try:
        subprocess.run(
            [sys.executable, "-m", "pytest", "tests/", "-v", "--tb=short", *extra_args],
            cwd=project_dir,
            check=True
        )
    except subprocess.CalledProcessError as e:
        print(f"\n❌ Tests failed with exit code {e.returncode}")
        return e.returncode

    print("\n✅ All tests passed!")
    return 0


if __name__ == "__main__":
    sys.exit(run_tests(sys.argv[1:]))
