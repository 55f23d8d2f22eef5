"""Test suite for the pytest-narrate package.

This package contains unit tests of the scenario builder, its errors
and settings, and integration tests of the pytest plugin.
"""
