# tests/test_main_app.py
from fastapi.testclient import TestClient
from neurostep.utils.logger import logger

def test_read_root(client: TestClient):
    """Test if the root endpoint returns the welcome message."""
    logger.info("Testing root endpoint...")
    response = client.get("/")
    assert response.status_code == 200
    assert "Welcome to the NeuroStep Quiz API" in response.json()["message"]
