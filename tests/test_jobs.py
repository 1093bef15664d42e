"""Tests for ShareJob request building and outcome resolution."""

from __future__ import annotations

import asyncio
from datetime import date

import pytest

from sharesync.config import SharingConfig
from sharesync.exceptions import JobAlreadyIssuedError
from sharesync.permissions import SharePermission, ShareType
from sharesync.sharing.jobs import ShareJob
from sharesync.sharing.types import JobFailure, JobKind, JobSuccess, get_json_return_code

SHARES = "ocs/v1.php/apps/files_sharing/api/v1/shares"


# ---------------------------------------------------------------------------
# Request building
# ---------------------------------------------------------------------------


class TestRequests:
    async def test_get_shares(self, transport):
        transport.reply([])
        await ShareJob(transport).get_shares("/Photos")
        request = transport.requests[0]
        assert request.kind is JobKind.GET_SHARES
        assert request.verb == "GET"
        assert request.path == SHARES
        assert request.params == {"path": "/Photos", "reshares": "true"}

    async def test_get_shares_without_reshares(self, transport):
        transport.reply([])
        await ShareJob(transport, SharingConfig(fetch_reshares=False)).get_shares("/a")
        assert transport.requests[0].params == {"path": "/a"}

    async def test_get_shared_with_me(self, transport):
        transport.reply([])
        await ShareJob(transport).get_shared_with_me()
        assert transport.requests[0].params == {"shared_with_me": "true"}

    async def test_create_link_share(self, transport):
        transport.reply({})
        await ShareJob(transport).create_link_share("/a", "n", "pw")
        request = transport.requests[0]
        assert request.verb == "POST"
        assert request.params == {"path": "/a", "shareType": "3", "name": "n", "password": "pw"}

    async def test_create_link_share_omits_empty_name_and_password(self, transport):
        transport.reply({})
        await ShareJob(transport).create_link_share("/a")
        assert transport.requests[0].params == {"path": "/a", "shareType": "3"}

    async def test_create_share_with_permissions(self, transport):
        transport.reply({})
        await ShareJob(transport).create_share(
            "/a", ShareType.GROUP, "staff", SharePermission.READ | SharePermission.SHARE
        )
        assert transport.requests[0].params == {
            "path": "/a",
            "shareType": "1",
            "shareWith": "staff",
            "permissions": "17",
        }

    async def test_create_share_default_permissions_not_sent(self, transport):
        transport.reply({})
        await ShareJob(transport).create_share("/a", ShareType.USER, "bob")
        assert "permissions" not in transport.requests[0].params

    async def test_delete_share(self, transport):
        transport.reply()
        await ShareJob(transport).delete_share("12")
        request = transport.requests[0]
        assert request.verb == "DELETE"
        assert request.path == f"{SHARES}/12"

    async def test_set_permissions_carries_value(self, transport):
        transport.reply()
        result = await ShareJob(transport).set_permissions("12", SharePermission.READ)
        assert transport.requests[0].params == {"permissions": "1"}
        assert transport.requests[0].verb == "PUT"
        assert result.value == SharePermission.READ

    async def test_set_expire_date(self, transport):
        transport.reply()
        result = await ShareJob(transport).set_expire_date("12", date(2027, 1, 2))
        assert transport.requests[0].params == {"expireDate": "2027-01-02"}
        assert result.value == date(2027, 1, 2)

    async def test_clear_expire_date(self, transport):
        transport.reply()
        await ShareJob(transport).set_expire_date("12", None)
        assert transport.requests[0].params == {"expireDate": ""}

    async def test_custom_api_path(self, transport):
        transport.reply()
        config = SharingConfig(ocs_api_path="/ocs/v2.php/shares/")
        await ShareJob(transport, config).delete_share("4")
        assert transport.requests[0].path == "ocs/v2.php/shares/4"


# ---------------------------------------------------------------------------
# Outcomes
# ---------------------------------------------------------------------------


class TestOutcomes:
    async def test_v1_success(self, transport):
        transport.reply({"id": 1})
        result = await ShareJob(transport).get_shares("/a")
        assert isinstance(result, JobSuccess)
        assert result.data == {"id": 1}
        assert result.status_code == 100

    async def test_v2_success(self, transport):
        transport.reply([], status=200)
        assert isinstance(await ShareJob(transport).get_shares("/a"), JobSuccess)

    async def test_envelope_error(self, transport):
        transport.reply(None, status=404, message="Wrong share ID, share doesn't exist")
        result = await ShareJob(transport).delete_share("9")
        assert result == JobFailure(404, "Wrong share ID, share doesn't exist")

    async def test_transport_error(self, transport):
        transport.fail(500, "Internal Server Error")
        result = await ShareJob(transport).get_shares("/a")
        assert result == JobFailure(500, "Internal Server Error")

    async def test_invalid_envelope(self, transport):
        transport.reply_raw({"unexpected": True})
        result = await ShareJob(transport).get_shares("/a")
        assert isinstance(result, JobFailure)
        assert result.status_code == 0

    @pytest.mark.parametrize("reply", [None, [], "ok"])
    async def test_reply_that_is_not_an_envelope(self, transport, reply):
        transport.reply_raw(reply)
        result = await ShareJob(transport).get_shares("/a")
        assert result == JobFailure(0, "Reply is not a valid OCS envelope")

    async def test_403_passes_through_on_link_creation(self, transport):
        transport.reply(None, status=403, message="Password required")
        result = await ShareJob(transport).create_link_share("/a")
        assert isinstance(result, JobSuccess)
        assert result.status_code == 403

    async def test_403_is_failure_elsewhere(self, transport):
        transport.reply(None, status=403, message="Forbidden")
        result = await ShareJob(transport).create_share("/a", ShareType.USER, "bob")
        assert result == JobFailure(403, "Forbidden")

    async def test_result_recorded(self, transport):
        transport.reply([])
        job = ShareJob(transport)
        assert job.result is None
        assert job.request is None
        result = await job.get_shares("/a")
        assert job.result is result
        assert job.request.kind is JobKind.GET_SHARES


# ---------------------------------------------------------------------------
# Single use and pending requests
# ---------------------------------------------------------------------------


class TestLifecycle:
    async def test_job_cannot_be_reused(self, transport):
        transport.reply([])
        job = ShareJob(transport)
        await job.get_shares("/a")
        with pytest.raises(JobAlreadyIssuedError):
            await job.delete_share("1")
        assert len(transport.requests) == 1

    async def test_unanswered_request_stays_pending(self, transport):
        transport.hang()
        job = ShareJob(transport)
        task = asyncio.create_task(job.get_shares("/a"))
        done, _ = await asyncio.wait({task}, timeout=0.05)
        assert not done
        assert job.result is None
        assert job.request is not None

        transport.pending[0].set_result({"ocs": {"meta": {"statuscode": 100}, "data": []}})
        result = await task
        assert isinstance(result, JobSuccess)
        assert job.result is result


class TestGetJsonReturnCode:
    def test_reads_meta(self):
        assert get_json_return_code({"ocs": {"meta": {"statuscode": "403", "message": "no"}}}) == (
            403,
            "no",
        )

    def test_missing_meta(self):
        assert get_json_return_code({}) == (None, "")

    def test_not_a_mapping(self):
        assert get_json_return_code(None) == (None, "")
        assert get_json_return_code([1]) == (None, "")
