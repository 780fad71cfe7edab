import pytest
from datetime import date
from httpx import AsyncClient
from sqlalchemy import select

from taskreport.models import Task


@pytest.fixture
def developer_payload():
    return {
        "name": "Asha Verma",
        "email": "asha.verma@example.com",
        "password": "secret123",
        "phone_number": "9876543210",
        "full_time": True,
        "team": "app",
        "projects": ["Mobile", "Payments"],
        "working_days": ["monday", "Wednesday", "friday"],
    }


@pytest.mark.asyncio
async def test_developer_routes_reject_developers(client: AsyncClient, auth_headers):
    """Admin-only routes answer 403 to a developer"""
    response = await client.get("/api/v1/developers", headers=auth_headers)

    assert response.status_code == 403
    assert response.json() == {"error": {"message": "Access denied. Admins only.", "status": 403}}


@pytest.mark.asyncio
async def test_developer_routes_require_token(client: AsyncClient):
    response = await client.get("/api/v1/developers")

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_list_developers(client: AsyncClient, admin_auth_headers, developer, other_developer):
    response = await client.get("/api/v1/developers", headers=admin_auth_headers)

    assert response.status_code == 200
    emails = {d["email"] for d in response.json()}
    assert emails == {developer.email, other_developer.email}
    assert all("hashed_password" not in d for d in response.json())


@pytest.mark.asyncio
async def test_list_developers_by_team(client: AsyncClient, admin_auth_headers, developer_factory):
    web = await developer_factory(team="web")
    await developer_factory(team="app")

    response = await client.get("/api/v1/developers", params={"team": "web"}, headers=admin_auth_headers)

    assert [d["id"] for d in response.json()] == [web.id]


@pytest.mark.asyncio
async def test_create_developer(client: AsyncClient, admin_auth_headers, developer_payload):
    response = await client.post("/api/v1/developers", json=developer_payload, headers=admin_auth_headers)

    assert response.status_code == 201
    data = response.json()
    assert data["email"] == developer_payload["email"]
    assert data["role"] == "developer"
    assert data["team"] == "app"
    assert data["working_days"] == ["Monday", "Wednesday", "Friday"]
    assert "password" not in data

    login = await client.post(
        "/api/v1/auth/login",
        json={"email": developer_payload["email"], "password": developer_payload["password"]}
    )
    assert login.status_code == 200


@pytest.mark.asyncio
async def test_create_developer_defaults_to_weekdays(client: AsyncClient, admin_auth_headers, developer_payload):
    developer_payload.pop("working_days")

    response = await client.post("/api/v1/developers", json=developer_payload, headers=admin_auth_headers)

    assert response.json()["working_days"] == ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday"]


@pytest.mark.asyncio
async def test_create_developer_rejects_unknown_weekday(client: AsyncClient, admin_auth_headers, developer_payload):
    developer_payload["working_days"] = ["Funday"]

    response = await client.post("/api/v1/developers", json=developer_payload, headers=admin_auth_headers)

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_create_developer_duplicate_email(client: AsyncClient, admin_auth_headers, developer, developer_payload):
    developer_payload["email"] = developer.email

    response = await client.post("/api/v1/developers", json=developer_payload, headers=admin_auth_headers)

    assert response.status_code == 400
    assert "already exists" in response.json()["error"]["message"]


@pytest.mark.asyncio
async def test_create_developer_email_taken_by_admin(client: AsyncClient, admin_user, admin_auth_headers, developer_payload):
    """Emails are unique across admins and developers"""
    developer_payload["email"] = admin_user.email

    response = await client.post("/api/v1/developers", json=developer_payload, headers=admin_auth_headers)

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_get_developer(client: AsyncClient, admin_auth_headers, developer):
    response = await client.get(f"/api/v1/developers/{developer.id}", headers=admin_auth_headers)

    assert response.status_code == 200
    assert response.json()["id"] == developer.id


@pytest.mark.asyncio
async def test_get_developer_not_found(client: AsyncClient, admin_auth_headers):
    response = await client.get("/api/v1/developers/9999", headers=admin_auth_headers)

    assert response.status_code == 404
    assert response.json() == {"error": {"message": "Developer not found", "status": 404}}


@pytest.mark.asyncio
async def test_update_developer(client: AsyncClient, admin_auth_headers, developer, task):
    response = await client.put(
        f"/api/v1/developers/{developer.id}",
        json={"team": "app", "projects": ["Billing"], "password": "newsecret1"},
        headers=admin_auth_headers,
    )

    assert response.status_code == 200
    assert response.json()["team"] == "app"
    assert response.json()["projects"] == ["Billing"]

    # Tasks keep the team they were filed under
    assert task.team == "web"

    login = await client.post(
        "/api/v1/auth/login", json={"email": developer.email, "password": "newsecret1"}
    )
    assert login.status_code == 200


@pytest.mark.asyncio
async def test_update_developer_email_conflict(client: AsyncClient, admin_auth_headers, developer, other_developer):
    response = await client.put(
        f"/api/v1/developers/{developer.id}",
        json={"email": other_developer.email},
        headers=admin_auth_headers,
    )

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_delete_developer_removes_tasks(client: AsyncClient, db_session, admin_auth_headers, developer, task_factory):
    await task_factory(developer, date=date(2024, 1, 2))
    await task_factory(developer, date=date(2024, 1, 3))

    response = await client.delete(f"/api/v1/developers/{developer.id}", headers=admin_auth_headers)

    assert response.status_code == 204
    remaining = await db_session.execute(select(Task).where(Task.developer_id == developer.id))
    assert remaining.scalars().all() == []


@pytest.mark.asyncio
async def test_missing_reports_for_developer(client: AsyncClient, admin_auth_headers, developer, task_factory):
    # 2024-01-01 is a Monday
    await task_factory(developer, date=date(2024, 1, 2))

    response = await client.get(
        f"/api/v1/developers/{developer.id}/missing-reports",
        params={"start_date": "2024-01-01", "end_date": "2024-01-07"},
        headers=admin_auth_headers,
    )

    assert response.status_code == 200
    data = response.json()
    assert data["missing_dates"] == ["2024-01-01", "2024-01-03", "2024-01-04", "2024-01-05"]
    assert data["total"] == 4


@pytest.mark.asyncio
async def test_deleted_developer_token_not_inherited(
    client: AsyncClient, admin_auth_headers, developer_factory, headers_for, developer_payload
):
    """A new developer never takes over a deleted developer's token"""
    old = await developer_factory(email="old@example.com")
    old_headers = headers_for(old)

    response = await client.delete(f"/api/v1/developers/{old.id}", headers=admin_auth_headers)
    assert response.status_code == 204

    developer_payload["email"] = "new@example.com"
    response = await client.post("/api/v1/developers", json=developer_payload, headers=admin_auth_headers)
    assert response.status_code == 201
    assert response.json()["id"] != old.id

    response = await client.get("/api/v1/auth/me", headers=old_headers)

    assert response.status_code == 401
    assert response.json()["error"]["message"] == "Account no longer exists"
