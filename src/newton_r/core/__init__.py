"""
Core domain models, numerical primitives, contracts and exceptions.

This module contains the building blocks shared by the evaluator, the engine
and input validation. Nothing here depends on a presentation layer.
"""
