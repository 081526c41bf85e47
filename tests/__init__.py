#!/usr/bin/env python3
"""
Test suite for SmartScreen.

All tests run offline: the oracle is replaced by ScriptedLLMProvider
(tests/mocks/oracle_mocks.py) and databases are SQLite files in tmp_path.

    # Run all tests
    python -m pytest tests/ -v

    # Only the web API tests
    python -m pytest tests/unit/web -v

    # Using unittest
    python -m unittest discover tests -v
"""
