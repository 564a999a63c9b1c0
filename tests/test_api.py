"""API endpoint tests over an in-memory database."""

from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from payroll_core.api.app import create_app
from payroll_core.api.dependencies import Events, get_db_session
from payroll_core.events import EMPLOYEE_CREATED, PAY_RUN_COMPLETED

EMPLOYEE = {
    "first_name": "Ada",
    "last_name": "Lovelace",
    "ssn": "123-45-6789",
    "hire_date": "2024-01-02",
    "pay_type": "hourly",
    "pay_rate": "50.00",
    "pay_frequency": "biweekly",
    "state": "CA",
}

PAY_RUN = {"period_start": "2025-01-06", "period_end": "2025-01-19", "pay_date": "2025-01-24"}


@pytest_asyncio.fixture
async def client(session_factory, events) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client bound to an app that uses the test database."""
    app = create_app(events=events)

    async def override_session(_events: Events):
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_session

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


async def create_employee(client, **overrides) -> dict:
    response = await client.post("/api/v1/employees", json={**EMPLOYEE, **overrides})
    assert response.status_code == 201, response.text
    return response.json()


async def approved_hours(client, employee_id: str, hours: str = "40") -> dict:
    response = await client.post(
        "/api/v1/time-entries",
        json={"employee_id": employee_id, "work_date": "2025-01-07", "hours": hours},
    )
    assert response.status_code == 201, response.text
    entry_id = response.json()["time_entry_id"]
    response = await client.post(
        f"/api/v1/time-entries/{entry_id}/approve", json={"approved_by": "manager"}
    )
    assert response.status_code == 200, response.text
    return response.json()


class TestHealthEndpoints:
    async def test_health_check(self, client):
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json()["database"] == "healthy"

    async def test_liveness_check(self, client):
        response = await client.get("/live")
        assert response.json()["status"] == "alive"


class TestEmployeeEndpoints:
    async def test_create_and_get(self, client):
        employee = await create_employee(client)

        response = await client.get(f"/api/v1/employees/{employee['employee_id']}")

        assert response.status_code == 200
        assert response.json()["last_name"] == "Lovelace"
        assert "ssn" not in response.json()

    async def test_duplicate_ssn_is_conflict(self, client):
        await create_employee(client)

        response = await client.post("/api/v1/employees", json=EMPLOYEE)

        assert response.status_code == 409
        assert response.json()["code"] == "UNIQUENESS_VIOLATION"

    async def test_invalid_pay_type_is_rejected(self, client):
        response = await client.post("/api/v1/employees", json={**EMPLOYEE, "pay_type": "piece"})

        assert response.status_code == 422

    async def test_missing_employee_is_not_found(self, client):
        response = await client.get("/api/v1/employees/00000000-0000-0000-0000-000000000000")

        assert response.status_code == 404
        assert response.json()["code"] == "NOT_FOUND"

    async def test_update_and_list(self, client):
        employee = await create_employee(client)
        await create_employee(client, ssn="987-65-4321", last_name="Babbage")

        response = await client.patch(
            f"/api/v1/employees/{employee['employee_id']}", json={"department": "Field"}
        )
        assert response.status_code == 200

        listed = (await client.get("/api/v1/employees")).json()
        field = (await client.get("/api/v1/employees", params={"department": "Field"})).json()

        assert [e["last_name"] for e in listed] == ["Babbage", "Lovelace"]
        assert [e["employee_id"] for e in field] == [employee["employee_id"]]

    @pytest.mark.parametrize("field", ["pay_rate", "ssn"])
    async def test_null_for_required_field_is_rejected(self, client, field):
        employee = await create_employee(client)

        response = await client.patch(
            f"/api/v1/employees/{employee['employee_id']}", json={field: None}
        )

        assert response.status_code == 422
        assert field in response.text
        unchanged = (await client.get(f"/api/v1/employees/{employee['employee_id']}")).json()
        assert unchanged["pay_rate"] == "50.00"

    async def test_null_for_optional_field_clears_it(self, client):
        employee = await create_employee(client, department="Field")

        response = await client.patch(
            f"/api/v1/employees/{employee['employee_id']}", json={"department": None}
        )

        assert response.status_code == 200
        assert response.json()["department"] is None

    async def test_failed_request_publishes_no_events(self, client, recorded):
        await create_employee(client)

        response = await client.post("/api/v1/employees", json=EMPLOYEE)

        assert response.status_code == 409
        assert recorded.names == [EMPLOYEE_CREATED]

    async def test_delete(self, client):
        employee = await create_employee(client)

        response = await client.delete(f"/api/v1/employees/{employee['employee_id']}")

        assert response.status_code == 204
        assert (await client.get(f"/api/v1/employees/{employee['employee_id']}")).status_code == 404


class TestTimeEntryEndpoints:
    async def test_double_approval_is_conflict(self, client):
        employee = await create_employee(client)
        entry = await approved_hours(client, employee["employee_id"])

        response = await client.post(
            f"/api/v1/time-entries/{entry['time_entry_id']}/approve",
            json={"approved_by": "manager"},
        )

        assert response.status_code == 409
        assert response.json()["code"] == "INVALID_TRANSITION"

    async def test_date_range_listing(self, client):
        employee = await create_employee(client)
        await approved_hours(client, employee["employee_id"])

        response = await client.get(
            "/api/v1/time-entries", params={"start": "2025-01-01", "end": "2025-01-31"}
        )

        assert response.status_code == 200
        assert len(response.json()) == 1

    async def test_listing_requires_a_filter(self, client):
        response = await client.get("/api/v1/time-entries")

        assert response.status_code == 400


class TestPayRunFlow:
    async def test_end_to_end(self, client, recorded):
        employee = await create_employee(client)
        await approved_hours(client, employee["employee_id"])

        run = (await client.post("/api/v1/pay-runs", json=PAY_RUN)).json()
        run_id = run["pay_run_id"]
        assert run["status"] == "draft"

        response = await client.post(
            f"/api/v1/pay-runs/{run_id}/pay-checks",
            json={"employee_id": employee["employee_id"]},
        )
        assert response.status_code == 201, response.text
        check = response.json()
        assert check["gross_pay"] == "2000.00"
        assert check["net_pay"] == "1221.00"

        assert (await client.post(f"/api/v1/pay-runs/{run_id}/process")).status_code == 200
        completed = await client.post(f"/api/v1/pay-runs/{run_id}/complete")
        assert completed.json()["status"] == "completed"
        assert completed.json()["total_gross"] == "2000.00"
        assert completed.json()["employee_count"] == 1
        assert PAY_RUN_COMPLETED in recorded.names

        register = (await client.get(f"/api/v1/pay-runs/{run_id}/register")).json()
        assert [row["employee_name"] for row in register] == ["Lovelace, Ada"]

        summary = await client.get(
            "/api/v1/reports/quarterly-tax", params={"year": 2025, "quarter": 1}
        )
        assert summary.status_code == 200
        assert summary.json()["total_wages"] == "2000.00"
        assert summary.json()["total_futa"] == "12.00"

        history = await client.get(f"/api/v1/employees/{employee['employee_id']}/earnings-history")
        assert history.json()["total_net"] == "1221.00"
        assert len(history.json()["pay_checks"]) == 1

        delete = await client.delete(f"/api/v1/employees/{employee['employee_id']}")
        assert delete.status_code == 409
        assert delete.json()["code"] == "REFERENTIAL_INTEGRITY"

    async def test_complete_draft_is_conflict(self, client):
        run = (await client.post("/api/v1/pay-runs", json=PAY_RUN)).json()

        response = await client.post(f"/api/v1/pay-runs/{run['pay_run_id']}/complete")

        assert response.status_code == 409

    async def test_inverted_period_is_rejected(self, client):
        response = await client.post(
            "/api/v1/pay-runs",
            json={**PAY_RUN, "period_start": "2025-01-20"},
        )

        assert response.status_code == 422

    async def test_invalid_quarter(self, client):
        response = await client.get(
            "/api/v1/reports/quarterly-tax", params={"year": 2025, "quarter": 7}
        )

        assert response.status_code == 422
        assert response.json()["code"] == "INVALID_VALUE"


class TestConfigurationEndpoints:
    async def test_deduction_crud(self, client):
        payload = {
            "name": "Union dues",
            "code": "UNION",
            "deduction_type": "posttax",
            "method": "flat",
            "amount": "25.005",
        }
        created = await client.post("/api/v1/config/deductions", json=payload)
        assert created.status_code == 201
        assert created.json()["amount"] == "25.01"
        record_id = created.json()["deduction_id"]

        duplicate = await client.post("/api/v1/config/deductions", json=payload)
        assert duplicate.status_code == 409

        updated = await client.patch(
            f"/api/v1/config/deductions/{record_id}", json={"amount": "30"}
        )
        assert updated.json()["amount"] == "30.00"

        listed = (await client.get("/api/v1/config/deductions")).json()
        assert [d["code"] for d in listed] == ["UNION"]

        assert (await client.delete(f"/api/v1/config/deductions/{record_id}")).status_code == 204
        assert (await client.get(f"/api/v1/config/deductions/{record_id}")).status_code == 404

    async def test_deduction_amount_cannot_be_nulled(self, client):
        created = await client.post(
            "/api/v1/config/deductions",
            json={
                "name": "Parking",
                "code": "PARK",
                "deduction_type": "posttax",
                "method": "flat",
                "amount": "15",
            },
        )
        record_id = created.json()["deduction_id"]

        response = await client.patch(
            f"/api/v1/config/deductions/{record_id}", json={"amount": None}
        )

        assert response.status_code == 422
        assert (await client.get(f"/api/v1/config/deductions/{record_id}")).json()[
            "amount"
        ] == "15.00"

    async def test_wc_premium(self, client):
        employee = await create_employee(client, wc_class_code="5403")
        await client.post(
            "/api/v1/config/worker-comps", json={"class_code": "5403", "rate": "8.25"}
        )

        response = await client.get(
            "/api/v1/config/worker-comps/premium",
            params={"employee_id": employee["employee_id"], "gross": "2000"},
        )

        assert response.status_code == 200
        assert response.json()["premium"] == "165.00"
