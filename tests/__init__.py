"""stitchcount Test Suite

Test organization:
- unit/: Unit tests for individual modules
  - test_cli.py: CLI subcommands and logging setup
  - voice/: Parser, resolver, router, scheduler, config and session controller

Running tests:
    # All tests
    pytest

    # Voice package only
    pytest tests/unit/voice/
"""
