"""
Core value types, parsing pipeline, and exact numeric primitives.

This package contains the building blocks behind SmartNumber: canonical
number representation, input normalization, literal classification,
fraction reduction, and text rendering.
"""
