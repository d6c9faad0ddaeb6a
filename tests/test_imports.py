"""Tests for bulk import validation."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Any

import pytest

from leave_engine.schemas.imports import ImportPayload
from leave_engine.services.imports import validate_import_payload

if TYPE_CHECKING:
    from httpx import AsyncClient


def _employee(employee_id: Any = "1", **overrides: Any) -> dict[str, Any]:
    row = {
        "id": employee_id,
        "firstName": "Ana",
        "lastName": "Pérez",
        "email": "ana@example.cl",
        "position": "Analista",
        "department": "Finanzas",
        "avatarUrl": "",
        "totalVacationDays": 15,
        "usedVacationDays": 0,
        "totalAdminDays": 6,
        "usedAdminDays": 0,
        "totalSickLeaveDays": 30,
        "usedSickLeaveDays": 0,
    }
    row.update(overrides)
    return row


def _request(request_id: Any = "r1", **overrides: Any) -> dict[str, Any]:
    row = {
        "id": request_id,
        "employeeId": "1",
        "type": "Feriado Legal",
        "startDate": "2026-02-09",
        "endDate": "2026-02-13",
        "daysCount": 5,
        "status": "Aprobado",
        "reason": "Solicitud Importada",
        "shift": "Jornada Completa",
    }
    row.update(overrides)
    return row


def test_consistent_payload_is_valid() -> None:
    result = validate_import_payload(
        {
            "employees": [_employee()],
            "requests": [
                _request(),
                _request(
                    "r2",
                    type="Permiso Administrativo",
                    startDate="2026-02-16",
                    endDate="2026-02-16",
                    daysCount=0.5,
                    shift="Jornada Mañana",
                ),
            ],
            "config": {"defaultVacationDays": 15},
        }
    )
    assert result.valid is True
    assert result.errors == []
    assert result.warnings == []


def test_wrong_day_count_is_reported() -> None:
    result = validate_import_payload({"employees": [_employee()], "requests": [_request(daysCount=7)]})
    assert result.valid is False
    assert any("inconsistent day counts" in error for error in result.errors)


def test_day_count_tolerance() -> None:
    result = validate_import_payload({"employees": [_employee()], "requests": [_request(daysCount=5.005)]})
    assert result.valid is True


@pytest.mark.parametrize("payload", [None, [], "data", 42])
def test_non_mapping_payload_is_rejected(payload: object) -> None:
    result = validate_import_payload(payload)
    assert result.valid is False
    assert result.errors == ["The payload does not contain valid data."]


def test_empty_payload_is_rejected() -> None:
    result = validate_import_payload({})
    assert result.valid is False
    assert result.errors == ["The payload contains no employees, requests or configuration."]


def test_none_sections_count_as_absent() -> None:
    result = validate_import_payload({"employees": None, "requests": None, "config": None})
    assert result.errors == ["The payload contains no employees, requests or configuration."]


def test_non_list_sections_are_rejected() -> None:
    result = validate_import_payload({"employees": {"id": "1"}, "requests": "r1"})
    assert "The employee list is not an array." in result.errors
    assert "The request list is not an array." in result.errors


def test_empty_employee_list_is_only_a_warning() -> None:
    result = validate_import_payload({"employees": []})
    assert result.valid is True
    assert result.warnings == ["The employee list is empty."]


def test_config_only_payload() -> None:
    result = validate_import_payload({"config": {"carryoverVacationMaxPeriods": 3}})
    assert result.valid is True


def test_invalid_config_is_rejected() -> None:
    result = validate_import_payload({"config": {"defaultVacationDays": math.inf}})
    assert result.errors == ["The imported configuration does not have a valid structure."]


def test_invalid_employee_rows_are_numbered() -> None:
    result = validate_import_payload(
        {
            "employees": [
                _employee("1"),
                _employee("2", usedAdminDays=7),
                _employee("3", email="no-at-sign"),
                _employee("4", firstName="  "),
                {"firstName": "No id"},
            ]
        }
    )
    assert result.errors == ["Invalid employees in rows: 2, 3, 4, 5."]


@pytest.mark.parametrize(
    "missing",
    [
        "firstName",
        "lastName",
        "email",
        "position",
        "department",
        "avatarUrl",
        "totalVacationDays",
        "usedAdminDays",
    ],
)
def test_employee_rows_missing_a_field_are_invalid(missing: str) -> None:
    row = _employee("1")
    del row[missing]
    result = validate_import_payload({"employees": [_employee("2"), row]})
    assert result.errors == ["Invalid employees in rows: 2."]


def test_employee_profile_fields_may_be_empty() -> None:
    result = validate_import_payload({"employees": [_employee(position="", department="", avatarUrl="")]})
    assert result.valid is True


@pytest.mark.parametrize("missing", ["status", "shift", "reason"])
def test_request_rows_missing_a_field_are_invalid(missing: str) -> None:
    row = _request()
    del row[missing]
    result = validate_import_payload({"requests": [row]})
    assert result.errors == ["Invalid requests in rows: 1."]


def test_request_reason_may_be_empty() -> None:
    result = validate_import_payload({"requests": [_request(reason="")]})
    assert result.valid is True


def test_numeric_ids_are_accepted() -> None:
    result = validate_import_payload({"employees": [_employee(1)], "requests": [_request(100, employeeId=1)]})
    assert result.valid is True


def test_duplicate_ids_are_counted() -> None:
    result = validate_import_payload(
        {
            "employees": [_employee("1"), _employee("1"), _employee("1")],
            "requests": [
                _request("r1", status="Pendiente"),
                _request("r1", status="Pendiente"),
            ],
        }
    )
    assert "Found 2 duplicate employee ID(s)." in result.errors
    assert "Found 1 duplicate request ID(s)." in result.errors


@pytest.mark.parametrize(
    "overrides",
    [
        {"startDate": "2026-02-30"},
        {"startDate": "2026-02-14", "endDate": "2026-02-13"},
        {"daysCount": 0},
        {"type": "Vacaciones"},
        {"status": "Anulado"},
        {"shift": "Jornada Tarde", "endDate": "2026-02-10", "daysCount": 0.5},
        {"shift": "Jornada Tarde", "startDate": "2026-02-09", "endDate": "2026-02-09", "daysCount": 1},
        {"employeeId": ""},
    ],
)
def test_invalid_request_rows(overrides: dict[str, Any]) -> None:
    result = validate_import_payload({"requests": [_request(**overrides)]})
    assert result.valid is False
    assert result.errors[0] == "Invalid requests in rows: 1."


def test_unresolved_employee_references() -> None:
    result = validate_import_payload(
        {
            "employees": [_employee("1")],
            "requests": [
                _request("r1", employeeId="9"),
                _request("r2", employeeId="8", startDate="2026-03-02", endDate="2026-03-02", daysCount=1),
            ],
        }
    )
    assert "Found 2 request(s) referencing a missing employee." in result.errors


def test_references_not_checked_without_employees() -> None:
    result = validate_import_payload({"requests": [_request(employeeId="9")]})
    assert result.valid is True


def test_overlap_on_shared_boundary_is_counted() -> None:
    result = validate_import_payload(
        {
            "requests": [
                _request("r1"),
                _request("r2", startDate="2026-02-13", endDate="2026-02-16", daysCount=2),
            ]
        }
    )
    assert result.errors == ["Found 1 overlap(s) between approved requests of the same employee."]


def test_overlaps_counted_between_adjacent_pairs() -> None:
    result = validate_import_payload(
        {
            "requests": [
                _request("r1", type="Licencia Médica", startDate="2026-02-01", endDate="2026-02-10", daysCount=10),
                _request("r2", startDate="2026-02-02", endDate="2026-02-03", daysCount=2),
                _request("r3", startDate="2026-02-05", endDate="2026-02-06", daysCount=2),
            ]
        }
    )
    assert result.errors == ["Found 1 overlap(s) between approved requests of the same employee."]


def test_non_approved_requests_may_overlap() -> None:
    result = validate_import_payload(
        {
            "requests": [
                _request("r1"),
                _request("r2", status="Rechazado"),
                _request("r3", status="Pendiente"),
                _request("r4", employeeId="2"),
            ]
        }
    )
    assert result.valid is True


def test_all_problems_are_reported_together() -> None:
    result = validate_import_payload(
        {
            "employees": [_employee("1"), _employee("1")],
            "requests": [_request(daysCount=9), _request("r2", employeeId="7")],
            "config": {"defaultAdminDays": -1},
        }
    )
    assert result.errors == [
        "Found 1 duplicate employee ID(s).",
        "The imported configuration does not have a valid structure.",
        "Found 1 request(s) referencing a missing employee.",
        "Found 1 request(s) with inconsistent day counts for their dates, type or shift.",
    ]


def test_accepts_import_payload_model() -> None:
    result = validate_import_payload(ImportPayload(employees=[_employee()]))
    assert result.valid is True


async def test_validate_endpoint_reports_in_body(async_client: AsyncClient) -> None:
    resp = await async_client.post("/imports/validate", json={"employees": "nope"})
    assert resp.status_code == 200
    data = resp.json()
    assert data["valid"] is False
    assert data["errors"] == ["The employee list is not an array."]


async def test_validate_endpoint_empty_body(async_client: AsyncClient) -> None:
    resp = await async_client.post("/imports/validate", json={})
    assert resp.status_code == 200
    assert resp.json()["valid"] is False
