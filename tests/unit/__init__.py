"""Offline unit tests: recorded documents and mocked transports."""
