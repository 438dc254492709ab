"""API Layer: FastAPI wiring: validator chain, error handlers, route compiler.

Invariants:
    - Only this package imports FastAPI/Starlette
    - Compiled routers hold no per-request state; request data lives on request.state

Design Decisions:
    - Thin endpoint closures delegate parsing to core/ (ADR: impureim sandwich)
"""
