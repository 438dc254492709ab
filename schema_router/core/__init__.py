"""Core: framework-free route table types, key parsing, errors and schema parsing.

Invariants:
    - Nothing in core/ imports FastAPI or Starlette
    - All functions are pure; no I/O, no logging side-effects

Design Decisions:
    - Host-framework wiring lives in api/ (ADR: impureim sandwich)
"""
