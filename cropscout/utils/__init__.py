"""Shared helpers: HTTP envelopes, time handling and locking."""
