"""
Pydantic schema definitions for API payloads.

Posts are the only entity; ``post`` defines the creation payload, the
stored record and the response envelopes.
"""
