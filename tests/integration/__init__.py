"""Integration tests for the entity provider stack.

These tests drive DataProvider -> ResourceDispatcher -> providers ->
codec and commit batcher against an in-memory repository (FakeStore), so
they exercise every layer except HTTP.
"""
