"""Core listing primitives (events and the messages the listing session consumes).

Kept free of FastAPI concerns so it can be reused by API routes, scripts, and tests.
"""
