"""Package imported by the package-scanning tests."""
