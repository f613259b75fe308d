"""
Commerce Scoring — Monitoring package.

Modules:
    health — Static liveness / version report.
"""
