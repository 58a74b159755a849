"""
Test suite for Tree of Echoes

Contains:
- tests/unit/          : Unit tests for individual modules
"""
