"""
Test health endpoint for ThemeScore.
"""
from themescore import __version__


def test_health_check(test_client):
    """Test health check response."""
    response = test_client.get("/healthz")

    assert response.status_code == 200
    data = response.json()

    assert data["ok"] is True
    assert data["version"] == __version__
    assert data["service"] == "themescore"
