"""
Test suite for matrix-engine

Contains:
- tests/unit/          : Unit tests for individual modules
"""
