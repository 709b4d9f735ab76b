"""Bracket-tag color markup (`[red]text[]`, `[#ff00ff]`, `[[`).

Parsing and rendering are pure functions with no state across calls, so
views, the dataset converter and tests can all share them.
"""
