"""
Pytest configuration and fixtures
"""
import sys
from pathlib import Path

import pytest

# Add backend directory to path for imports
backend_dir = Path(__file__).parent.parent
if str(backend_dir) not in sys.path:
    sys.path.insert(0, str(backend_dir))


@pytest.fixture(scope="function")
def app():
    """Fresh application built from the current settings"""
    from decision_table.main import create_app
    return create_app()


@pytest.fixture(scope="function")
def client(app):
    """Create test client"""
    from fastapi.testclient import TestClient

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def record_factory():
    """Build an InputRecord from keyword arguments"""
    from decision_table.components.contracts import InputRecord

    def _make(**fields):
        return InputRecord(**fields)

    return _make
