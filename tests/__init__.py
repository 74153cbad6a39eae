"""
Test suite for SmartNumber

Contains:
- tests/unit/          : Unit tests for individual modules
"""
