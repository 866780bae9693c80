"""CLI layer — command-line surface, error policy and the ``bee`` tool.

This package may import from ``core`` and ``infra``; the core never
imports from ``cli``.
"""
