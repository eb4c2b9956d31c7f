"""Services Layer — imperative shell around the pure core.

Invariants:
    - Services orchestrate IO (repositories) around core/ rules
    - Services raise typed errors from core/errors.py, never HTTP exceptions
"""
