"""Entrypoints (inbound adapters) for PERSISTKIT.

Expose the bootstrapper to the outside world. Currently only the CLI.

Dependency rule: import `persistkit.bootstrap` and `persistkit.config`; avoid
reaching into `persistkit.adapters` for wiring.
"""
