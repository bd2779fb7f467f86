"""Integration tests.

Purpose
- Exercise real pools, sessions and schema generation.

Guidelines
- Use a SQLite file under ``tmp_path`` (see ``tests/fixtures/sqlite.py``).
- Dispose every pool and close every container the test builds.
"""
