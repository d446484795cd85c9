"""Test configuration and fixtures."""

import os

import logfire

# Settings are read lazily, so this applies to every container built in tests
os.environ.setdefault("ENVIRONMENT", "test")

# Keep events local; nothing is exported from test runs
logfire.configure(send_to_logfire=False, console=False)
