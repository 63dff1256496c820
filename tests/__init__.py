"""
Test suite for the cash dispenser

Contains:
- tests/unit/          : Unit tests for individual modules
"""
