"""Helpers: domain-aware convenience.

Contents should:
- Know about the gate's presentation or hosting
- Wrap multiple steps into a higher-level action
- Be opinionated about output shape, formatting, or behavior
"""
