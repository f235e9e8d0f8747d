"""Shared utilities — cross-cutting concerns importable by any layer.

Rules
-----
* No business logic.
* Console output is the only side effect allowed here.
"""
