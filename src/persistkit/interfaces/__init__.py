"""Interfaces (application boundary) for PERSISTKIT.

Framework-free contracts shared by the adapters and the bootstrap: the vendor
adapter capability and the unit-of-work protocol.

Dependency rule: this package is independent and does not import from other
`persistkit.*` modules.
"""
