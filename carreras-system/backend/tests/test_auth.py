from app.config import settings


async def _login(client, email=None, password=None):
    return await client.post(
        "/api/v1/auth/login",
        json={"email": email or settings.ADMIN_EMAIL, "password": password or settings.ADMIN_PASSWORD},
    )


class TestAuth:
    async def test_business_routes_require_session(self, auth_client):
        resp = await auth_client.get("/api/v1/carreras")
        assert resp.status_code == 401

    async def test_wrong_password(self, auth_client):
        body = (await _login(auth_client, password="incorrecta")).json()
        assert body["success"] is False

    async def test_login_me_logout(self, auth_client):
        resp = await _login(auth_client, email=settings.ADMIN_EMAIL.upper())
        body = resp.json()
        assert body["success"], body
        assert body["data"]["email"] == settings.ADMIN_EMAIL.lower()

        token = resp.cookies.get(settings.SESSION_COOKIE_NAME)
        assert token
        auth_client.cookies.clear()
        auth_client.cookies.set(settings.SESSION_COOKIE_NAME, token)

        me = (await auth_client.get("/api/v1/auth/me")).json()
        assert me["data"]["email"] == settings.ADMIN_EMAIL.lower()
        assert (await auth_client.get("/api/v1/carreras")).status_code == 200

        await auth_client.post("/api/v1/auth/logout")
        auth_client.cookies.clear()
        auth_client.cookies.set(settings.SESSION_COOKIE_NAME, token)
        assert (await auth_client.get("/api/v1/carreras")).status_code == 401

    async def test_auth_off_bypasses_guard(self, auth_client, monkeypatch):
        monkeypatch.setattr(settings, "AUTH_OFF", True)
        assert (await auth_client.get("/api/v1/carreras")).status_code == 200


class TestHealth:
    async def test_health(self, client):
        body = (await client.get("/health")).json()
        assert body["status"] == "ok"
