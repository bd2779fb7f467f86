"""Adapters (infrastructure) for PERSISTKIT.

Concrete SQLAlchemy implementations: the pooled engine, schema generation,
the vendor adapter, the persistence factory and the transaction manager.

Dependency rule: may import `persistkit.interfaces` and `persistkit.config`;
must not import `persistkit.bootstrap` or `persistkit.entrypoints`.
"""
