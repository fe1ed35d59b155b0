"""
Core domain models, mathematical primitives, and contracts.

This module contains the foundational building blocks of the matrix engine
that are independent of scheduling: the Matrix and Result value objects,
the linear-algebra kernel, and the JSON contracts of the presentation boundary.
"""
