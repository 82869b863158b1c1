#!/usr/bin/env python3
"""Run the OrganAIzer test suite without pytest: python tests/run_tests.py [-q]"""
import os
import sys
import unittest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))


def run_tests(verbosity: int = 2) -> bool:
    """Discover test_*.py under tests/ (including tests/unit) and run them."""
    sys.path.insert(0, ROOT)

    loader = unittest.TestLoader()
    start_dir = os.path.dirname(os.path.abspath(__file__))
    suite = loader.discover(start_dir, pattern='test_*.py', top_level_dir=start_dir)

    result = unittest.TextTestRunner(verbosity=verbosity).run(suite)
    return result.wasSuccessful()


if __name__ == "__main__":
    sys.exit(0 if run_tests(1 if "-q" in sys.argv else 2) else 1)
