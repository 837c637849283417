"""Tests for shared helpers and the Result boundary."""

import json
from datetime import date

from rentconnect_backend.core.exceptions import (
    BusinessRuleError,
    DeliveryError,
    NotFoundError,
)
from rentconnect_backend.core.result import Result, ResultStatus, operation_boundary
from rentconnect_backend.core.utils import (
    add_years,
    calculate_age,
    normalize_email,
    normalize_phone,
)
from rentconnect_backend.modules.commons import result_response
from rentconnect_backend.modules.property_management.models import Property
from rentconnect_backend.modules.tenant_management.group_identity import (
    GROUP_ID_BITS,
    new_group_id,
)


class TestDates:
    """Tests for date helpers."""

    def test_add_years_maps_leap_day(self):
        """Should map Feb 29 to Feb 28 in a non-leap year."""
        assert add_years(date(2024, 2, 29), -18) == date(2006, 2, 28)
        assert add_years(date(2025, 6, 1), -18) == date(2007, 6, 1)

    def test_age_counts_completed_years(self):
        """Should not count a birthday that has not happened yet."""
        on = date(2025, 10, 19)
        assert calculate_age(date(2007, 10, 19), on) == 18
        assert calculate_age(date(2007, 10, 20), on) == 17
        assert calculate_age(None, on) is None


class TestNormalization:
    """Tests for comparison keys."""

    def test_email(self):
        """Should lower-case and strip emails."""
        assert normalize_email("  Asha@RentMail.IN ") == "asha@rentmail.in"
        assert normalize_email(None) == ""

    def test_phone(self):
        """Should drop spaces and dashes only."""
        assert normalize_phone("+91 98123-45670") == "+919812345670"


class TestGroupIdentity:
    """Tests for household id allocation."""

    def test_ids_are_positive_and_json_safe(self):
        """Should stay within the 53-bit integer range."""
        for _ in range(200):
            group_id = new_group_id()
            assert 0 < group_id < 2**GROUP_ID_BITS

    def test_ids_are_distinct(self):
        """Should not repeat across a burst of allocations."""
        ids = {new_group_id() for _ in range(1000)}
        assert len(ids) == 1000


class TestOperationBoundary:
    """Tests for the Result conversion decorator."""

    async def test_success_passes_through(self):
        """Should return the operation's own result."""

        @operation_boundary("Failed to do it")
        async def op():
            return Result.success(5)

        result = await op()
        assert result.is_success
        assert result.entity == 5

    async def test_not_found(self):
        """Should map NotFoundError to a NotFound result."""

        @operation_boundary("Failed to do it")
        async def op():
            raise NotFoundError("Tenant with ID 9 not found")

        result = await op()
        assert result.status == ResultStatus.NOT_FOUND
        assert result.message == "Tenant with ID 9 not found"

    async def test_domain_error_keeps_its_message(self):
        """Should keep the message of a known error."""

        @operation_boundary("Failed to do it")
        async def op():
            raise BusinessRuleError("Agreement has already been accepted")

        result = await op()
        assert result.status == ResultStatus.FAILURE
        assert result.message == "Agreement has already been accepted"

    async def test_unexpected_error_is_prefixed(self):
        """Should prefix unexpected errors with the operation description."""

        @operation_boundary("Failed to do it")
        async def op():
            raise RuntimeError("boom")

        result = await op()
        assert result.status == ResultStatus.FAILURE
        assert result.message == "Failed to do it: boom"

    def test_delivery_error_message(self):
        """Should name the failing collaborator and operation."""
        exc = DeliveryError("notifier", "send agreement email")
        assert exc.status_code == 502
        assert exc.message == "External service 'notifier' failed during 'send agreement email'"


class TestResultResponse:
    """Tests for rendering results as HTTP responses."""

    def test_status_codes(self):
        """Should map Success, Failure and NotFound to 200, 400 and 404."""
        assert result_response(Result.success(1)).status_code == 200
        assert result_response(Result.failure("Validation failed")).status_code == 400
        assert result_response(Result.not_found("Tenant with ID 7 not found")).status_code == 404

    def test_failure_keeps_payload(self):
        """Should keep the payload of a failure so field errors reach the client."""
        response = result_response(
            Result.failure("Validation failed", {"errors": [{"field": "tenants"}]})
        )
        body = json.loads(response.body)

        assert body["success"] is False
        assert body["status"] == "Failure"
        assert body["error"] == "Validation failed"
        assert body["data"] == {"errors": [{"field": "tenants"}]}


class TestReleaseConnection:
    """Tests for UnitOfWork.release_connection."""

    async def test_ends_read_and_keeps_loaded_state(self, uow, seed):
        """Should close the open read without expiring what was loaded."""
        prop = await uow.session.get(Property, seed.property_id)
        assert uow.session.in_transaction()

        await uow.release_connection()

        assert not uow.session.in_transaction()
        assert prop.title == seed.property_title

    async def test_noop_without_transaction(self, uow):
        """Should do nothing when no read is open."""
        await uow.release_connection()
        assert not uow.session.in_transaction()
