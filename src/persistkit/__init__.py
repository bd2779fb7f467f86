"""PERSISTKIT

A persistence bootstrapper. It reads a flat properties file and wires a pooled
SQLAlchemy engine, a session factory and a transaction manager together, in
that order, once at process startup.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
