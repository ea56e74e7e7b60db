from src.config.settings import settings


async def test_health_check(client_factory):
    async with client_factory() as client:
        response = await client.get("/healthz/")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["version"] == settings.app_version
    assert data["environment"] == settings.ENVIRONMENT


async def test_root_endpoint(client_factory):
    async with client_factory() as client:
        response = await client.get("/")

    assert response.status_code == 200
    assert response.json()["message"] == "Welcome to the Graduation Invitation API"
