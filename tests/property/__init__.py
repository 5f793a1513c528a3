# tests/property/__init__.py
"""Property-based tests for streamsconfig.

Property-based testing validates invariants that must hold for ALL inputs,
not just the specific examples we think of.

Test categories:
- core/: Coercion round-trips, prefix precedence, resolved map isolation
"""
