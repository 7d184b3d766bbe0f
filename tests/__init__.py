"""
Test suite for ratio-engine

Contains:
- tests/unit/          : Unit tests for individual modules
"""
