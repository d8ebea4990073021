"""
Service layer abstraction.

Each service encapsulates business logic for one domain and works on
an explicitly passed ``DataStore``, so API handlers never touch the
stored collections directly and tests can run against a fresh store.
"""
