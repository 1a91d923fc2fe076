"""
Test suite for valunc

Contains:
- tests/unit/          : Unit and property-based tests for individual modules
"""
