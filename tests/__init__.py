"""
Test suite for Newton-R

Contains:
- tests/unit/          : Unit tests for individual modules
"""
