"""Activity log and insights API package.

Ensures the local ``insights_api`` package is resolved as a regular package
instead of falling back to namespace package resolution.
"""
