"""Core configuration primitives for actions.

Modules in this package should be framework-agnostic where possible and
focused on configuration, validation, and small reusable helpers.
"""
