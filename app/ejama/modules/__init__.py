"""
Feature modules: community, progress, questions, period, profile, feedback.

Each module owns its records, repository (key layout), service and routes,
and reuses the platform pieces in ``app.ejama`` (auth, RBAC, record store, errors).
"""
