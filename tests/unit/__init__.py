"""Unit tests.

Purpose
- Verify a single module/class/function in isolation.

Guidelines
- No network; files only under ``tmp_path``, in-memory SQLite or mocks otherwise.
- Prefer behavior-centric assertions over implementation details.
"""
