"""
Utility subpackage for gx.

Helpers for truncating long tool output and for decoding the loosely
typed argument payloads that the model attaches to function calls.
"""
