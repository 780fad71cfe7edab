import pytest
from datetime import date
from httpx import AsyncClient


@pytest.mark.asyncio
@pytest.mark.parametrize("report_type", ["daily", "weekly", "monthly"])
async def test_download_report(client: AsyncClient, admin_auth_headers, task, report_type):
    response = await client.get(f"/api/v1/reports/{report_type}", headers=admin_auth_headers)

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert response.headers["content-disposition"] == f'inline; filename="{report_type}_tasks_report.pdf"'
    assert response.content.startswith(b"%PDF")


@pytest.mark.asyncio
async def test_custom_report(client: AsyncClient, admin_auth_headers, developer, task_factory):
    await task_factory(developer, date=date(2024, 2, 10), project="Billing")

    response = await client.get(
        "/api/v1/reports/custom",
        params={"start_date": "2024-02-01", "end_date": "2024-02-29", "project": "Billing"},
        headers=admin_auth_headers,
    )

    assert response.status_code == 200
    assert response.content.startswith(b"%PDF")


@pytest.mark.asyncio
async def test_custom_report_requires_dates(client: AsyncClient, admin_auth_headers):
    response = await client.get(
        "/api/v1/reports/custom", params={"start_date": "2024-02-01"}, headers=admin_auth_headers
    )

    assert response.status_code == 400
    assert response.json()["error"]["message"] == "Custom reports require start_date and end_date"


@pytest.mark.asyncio
async def test_report_rejects_inverted_range(client: AsyncClient, admin_auth_headers):
    response = await client.get(
        "/api/v1/reports/weekly",
        params={"start_date": "2024-02-10", "end_date": "2024-02-01"},
        headers=admin_auth_headers,
    )

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_unknown_report_type(client: AsyncClient, admin_auth_headers):
    response = await client.get("/api/v1/reports/yearly", headers=admin_auth_headers)

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_reports_are_admin_only(client: AsyncClient, auth_headers):
    response = await client.get("/api/v1/reports/daily", headers=auth_headers)

    assert response.status_code == 403
