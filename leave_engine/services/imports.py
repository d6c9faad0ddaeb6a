"""Structural and cross-record validation of bulk data sets.

``validate_import_payload`` never raises and never stops at the first
problem: the result lists every defect so an operator can fix the file in
one pass.
"""

from __future__ import annotations

import itertools
import logging
from collections import defaultdict
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, TypeVar

from pydantic import BaseModel, ValidationError

from leave_engine.schemas.imports import (
    ImportedConfig,
    ImportedEmployee,
    ImportedRequest,
    ImportPayload,
    ImportValidationResult,
    nearly_equal,
)
from leave_engine.services.calendar import count_chargeable_days

if TYPE_CHECKING:
    from leave_engine.services.holiday import HolidaySet

logger = logging.getLogger(__name__)

_RowT = TypeVar("_RowT", ImportedEmployee, ImportedRequest)


def _as_mapping(row: object) -> object:
    if isinstance(row, BaseModel):
        return row.model_dump()
    return row


def _validate_rows(rows: list[Any], schema: type[_RowT]) -> tuple[list[_RowT], list[int]]:
    """Validate each row; return the valid ones and 1-based numbers of the rest."""
    valid: list[_RowT] = []
    invalid: list[int] = []
    for index, row in enumerate(rows, start=1):
        try:
            valid.append(schema.model_validate(_as_mapping(row)))
        except ValidationError as exc:
            logger.debug("Import row %d rejected by %s: %s", index, schema.__name__, exc.errors())
            invalid.append(index)
    return valid, invalid


def _count_duplicate_ids(rows: list[ImportedEmployee] | list[ImportedRequest]) -> int:
    seen: set[str] = set()
    duplicates = 0
    for row in rows:
        if row.id in seen:
            duplicates += 1
        else:
            seen.add(row.id)
    return duplicates


def _format_rows(numbers: list[int]) -> str:
    return ", ".join(str(n) for n in numbers)


def count_day_mismatches(requests: list[ImportedRequest], holidays: HolidaySet | None = None) -> int:
    """Requests whose stored day count disagrees with a fresh count."""
    mismatches = 0
    for request in requests:
        expected = count_chargeable_days(request.start_date, request.end_date, request.type, request.shift, holidays)
        if not nearly_equal(expected, request.days_count):
            mismatches += 1
    return mismatches


def count_overlaps(requests: list[ImportedRequest]) -> int:
    """Adjacent pairs of approved requests, per employee and in start order, that share a day."""
    by_employee: dict[str, list[ImportedRequest]] = defaultdict(list)
    for request in requests:
        if request.is_approved:
            by_employee[request.employee_id].append(request)

    overlaps = 0
    for employee_requests in by_employee.values():
        # ISO dates compare chronologically as strings.
        ordered = sorted(employee_requests, key=lambda r: r.start_date)
        for previous, current in itertools.pairwise(ordered):
            if current.start_date <= previous.end_date:
                overlaps += 1
    return overlaps


def validate_import_payload(
    payload: Mapping[str, Any] | ImportPayload | object,
    holidays: HolidaySet | None = None,
) -> ImportValidationResult:
    """Validate an ``{employees?, requests?, config?}`` data set."""
    errors: list[str] = []
    warnings: list[str] = []

    if isinstance(payload, ImportPayload):
        payload = payload.model_dump()
    if not isinstance(payload, Mapping):
        return ImportValidationResult(valid=False, errors=["The payload does not contain valid data."], warnings=[])

    raw_employees = payload.get("employees")
    raw_requests = payload.get("requests")
    raw_config = payload.get("config")

    if raw_employees is None and raw_requests is None and raw_config is None:
        return ImportValidationResult(
            valid=False,
            errors=["The payload contains no employees, requests or configuration."],
            warnings=[],
        )

    employees: list[ImportedEmployee] | None = None
    requests: list[ImportedRequest] | None = None

    # 1. Employees.
    if raw_employees is not None:
        if not isinstance(raw_employees, list):
            errors.append("The employee list is not an array.")
        else:
            employees, invalid_rows = _validate_rows(raw_employees, ImportedEmployee)
            if invalid_rows:
                errors.append(f"Invalid employees in rows: {_format_rows(invalid_rows)}.")
            if not raw_employees:
                warnings.append("The employee list is empty.")
            duplicates = _count_duplicate_ids(employees)
            if duplicates:
                errors.append(f"Found {duplicates} duplicate employee ID(s).")

    # 2. Requests.
    if raw_requests is not None:
        if not isinstance(raw_requests, list):
            errors.append("The request list is not an array.")
        else:
            requests, invalid_rows = _validate_rows(raw_requests, ImportedRequest)
            if invalid_rows:
                errors.append(f"Invalid requests in rows: {_format_rows(invalid_rows)}.")
            duplicates = _count_duplicate_ids(requests)
            if duplicates:
                errors.append(f"Found {duplicates} duplicate request ID(s).")

    # 3. Configuration.
    if raw_config is not None:
        try:
            ImportedConfig.model_validate(_as_mapping(raw_config))
        except ValidationError:
            errors.append("The imported configuration does not have a valid structure.")

    # 4. Cross-record checks on structurally valid rows.
    if requests is not None:
        if employees is not None:
            known_ids = {employee.id for employee in employees}
            unresolved = sum(1 for request in requests if request.employee_id not in known_ids)
            if unresolved:
                errors.append(f"Found {unresolved} request(s) referencing a missing employee.")

        mismatches = count_day_mismatches(requests, holidays)
        if mismatches:
            errors.append(
                f"Found {mismatches} request(s) with inconsistent day counts for their dates, type or shift."
            )

        overlaps = count_overlaps(requests)
        if overlaps:
            errors.append(f"Found {overlaps} overlap(s) between approved requests of the same employee.")

    if errors:
        logger.info("Import rejected with %d error(s)", len(errors))

    return ImportValidationResult(valid=not errors, errors=errors, warnings=warnings)
