"""
Wallboard.

- backend/: API, share responder, services, database, configuration
"""
