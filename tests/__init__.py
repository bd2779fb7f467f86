"""PERSISTKIT test suite.

Folder taxonomy
- unit/         : Isolated, fast checks of a single module/class/function.
- integration/  : Real pools, sessions and schemas against a SQLite file.
- e2e/          : The ``persistkit`` CLI driven through Click's test runner.
- fixtures/     : Shared fixtures and mapped test models (no tests here).

General guidance
- Keep unit fast and deterministic; no database server, only SQLite.
- Integration uses a SQLite file under ``tmp_path`` so pooled connections
  share one database.
- Markers (unit, integration, e2e) are applied from the folder name.
"""
