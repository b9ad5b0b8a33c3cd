"""Test suite for openpronounce.

Test Structure:
- unit/: Unit tests for individual components
- integration/: Full aggregation and search over a fake content source
- fakes.py: In-memory content source and listing builders
- conftest.py: Shared fixtures
"""
