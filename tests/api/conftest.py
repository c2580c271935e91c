"""Marks every HTTP-level test with the api marker."""

import pytest


def pytest_collection_modifyitems(items):
    for item in items:
        if "/api/" in str(item.fspath):
            item.add_marker(pytest.mark.api)
