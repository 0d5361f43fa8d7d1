"""
Service layer abstraction.

``post_store`` persists posts in the key-value backend; ``post_service``
implements the read-side queries and post creation on top of a store.
The store is passed in explicitly, so handlers and tests can swap the
Redis store for the in-memory one.
"""
