"""
Tests for the reslyp box state machine and optimistic toggles.

The API client is replaced by FakeApi, which records calls and can be told
to fail.
"""

from typing import Optional

import httpx
import pytest

from slyp.client.api_client import ApiError, SlypApiClient
from slyp.client.item import SlypItem
from slyp.client.optimistic import OptimisticToggle, TransactionState
from slyp.client.share_controller import ShareEvent, ShareInteractionController, ShareState


def item_data(**overrides) -> dict:
    data = {
        "id": "us-1",
        "slyp_id": "slyp-1",
        "archived": False,
        "favourite": False,
        "deleted": False,
        "unseen": False,
        "friends": [{"email": "Bob@example.com"}],
        "reslyps": [],
        "reslyps_count": 0,
    }
    data.update(overrides)
    return data


class FakeApi:
    def __init__(self) -> None:
        self.reslyp_calls: list[tuple] = []
        self.update_calls: list[tuple] = []
        self.reslyp_error: Optional[ApiError] = None
        self.update_error: Optional[ApiError] = None
        self.refresh_error: Optional[ApiError] = None
        self.server_item = item_data()

    async def reslyp(self, slyp_id, emails, comment):
        self.reslyp_calls.append((slyp_id, list(emails), comment))
        if self.reslyp_error:
            raise self.reslyp_error
        return [{"id": f"r-{index}"} for index, _ in enumerate(emails)]

    async def get_user_slyp(self, user_slyp_id):
        if self.refresh_error:
            raise self.refresh_error
        return dict(self.server_item)

    async def update_user_slyp(self, user_slyp_id, **flags):
        self.update_calls.append((user_slyp_id, flags))
        if self.update_error:
            raise self.update_error
        self.server_item.update(flags)
        return dict(self.server_item)


@pytest.fixture
def api() -> FakeApi:
    return FakeApi()


@pytest.fixture
def item() -> SlypItem:
    return SlypItem(item_data())


@pytest.fixture
def toasts() -> list[str]:
    return []


@pytest.fixture
def box(item, api, toasts) -> ShareInteractionController:
    return ShareInteractionController(item, api, notify=toasts.append)


def record_events(box: ShareInteractionController) -> list[ShareEvent]:
    events: list[ShareEvent] = []
    box.subscribe(lambda controller, event: events.append(event))
    return events


class TestRecipients:
    def test_first_recipient_arms_the_box(self, box):
        events = record_events(box)

        assert box.add_recipient("cat@example.com") is True

        assert box.state == ShareState.ARMED
        assert box.can_reslyp
        assert events == [ShareEvent.ARMED]

    def test_existing_friend_is_rejected_with_a_toast(self, box, toasts):
        events = record_events(box)

        assert box.add_recipient(" bob@EXAMPLE.com") is False

        assert box.state == ShareState.IDLE
        assert box.recipients == []
        assert events == [ShareEvent.RECIPIENT_REJECTED]
        assert toasts == ["You already shared this with bob@example.com"]

    def test_removing_last_recipient_disarms(self, box):
        box.add_recipient("cat@example.com")
        box.add_recipient("dan@example.com")
        events = record_events(box)

        box.remove_recipient("cat@example.com")
        assert box.state == ShareState.ARMED

        box.remove_recipient("dan@example.com")
        assert box.state == ShareState.IDLE
        assert events == [ShareEvent.DISARMED]

    @pytest.mark.parametrize("email", ["not-an-email", "", "a@"])
    def test_malformed_address_does_not_arm(self, box, toasts, email):
        events = record_events(box)

        assert box.add_recipient(email) is False

        assert box.state == ShareState.IDLE
        assert box.recipients == []
        assert events == [ShareEvent.RECIPIENT_REJECTED]
        assert toasts[-1].endswith("is not a valid email address")

    def test_recipients_are_not_duplicated(self, box):
        box.add_recipient("cat@example.com")
        box.add_recipient("CAT@example.com")

        assert box.recipients == ["cat@example.com"]


class TestAttention:
    def test_leaving_an_idle_item_clears_attention(self, box):
        box.give_attention()

        assert box.take_attention() is True
        assert box.attention is False

    def test_armed_box_keeps_attention(self, box):
        box.give_attention()
        box.add_recipient("cat@example.com")

        assert box.take_attention() is False
        assert box.attention is True


class TestSubmit:
    async def test_submit_requires_an_armed_box(self, box, api):
        assert await box.submit("hi") is False
        assert api.reslyp_calls == []

    async def test_successful_send(self, box, api, item, toasts):
        api.server_item = item_data(friends=[{"email": "bob@example.com"}, {"email": "cat@example.com"}])
        box.add_recipient("cat@example.com")
        events = record_events(box)

        assert await box.submit("hi") is True

        assert api.reslyp_calls == [("slyp-1", ["cat@example.com"], "hi")]
        assert box.state == ShareState.DONE
        assert box.recipients == []
        assert events == [ShareEvent.SENDING, ShareEvent.SENT]
        assert "cat@example.com" in item.friend_emails
        assert toasts[-1] == "Reslyp sent to 1 person"

    async def test_done_box_can_be_armed_again(self, box):
        box.add_recipient("cat@example.com")
        await box.submit("")

        assert box.add_recipient("dan@example.com") is True
        assert box.state == ShareState.ARMED

    async def test_unexpected_error_still_leaves_sending(self, box, api, toasts):
        async def broken_reslyp(slyp_id, emails, comment):
            raise RuntimeError("socket closed")

        api.reslyp = broken_reslyp
        box.add_recipient("cat@example.com")
        events = record_events(box)

        with pytest.raises(RuntimeError):
            await box.submit("")

        assert box.state == ShareState.IDLE
        assert box.recipients == []
        assert events == [ShareEvent.SENDING, ShareEvent.FAILED]
        assert toasts[-1] == "Reslyp failed, please try again"
        assert box.add_recipient("cat@example.com") is True

    async def test_unreadable_response_resets_the_box(self, item, toasts):
        api = SlypApiClient(
            token="tok",
            base_url="https://api.slyp.test",
            transport=httpx.MockTransport(lambda request: httpx.Response(201, text="<html>created</html>")),
        )
        box = ShareInteractionController(item, api, notify=toasts.append)
        box.add_recipient("cat@example.com")

        async with api:
            assert await box.submit("") is False

        assert box.state == ShareState.IDLE
        assert box.recipients == []
        assert box.last_error.error_code == "INVALID_RESPONSE"
        assert box.can_reslyp is False

    async def test_failed_send_returns_to_idle_and_refreshes(self, box, api, item, toasts):
        api.reslyp_error = ApiError(
            "cat@example.com has already been sent this slyp",
            status_code=422,
            error_code="RESLYP_FAILED",
        )
        api.server_item = item_data(reslyps_count=3)
        box.add_recipient("cat@example.com")
        events = record_events(box)

        assert await box.submit("") is False

        assert box.state == ShareState.IDLE
        assert box.recipients == []
        assert box.last_error is api.reslyp_error
        assert item.data["reslyps_count"] == 3
        assert events == [ShareEvent.SENDING, ShareEvent.FAILED]
        assert toasts[-1] == "cat@example.com has already been sent this slyp"

    async def test_refresh_failure_does_not_mask_the_send_result(self, box, api):
        api.refresh_error = ApiError("Could not reach Slyp", status_code=503, error_code="UNREACHABLE")
        box.add_recipient("cat@example.com")

        assert await box.submit("") is True
        assert box.state == ShareState.DONE

    async def test_no_second_send_while_sending(self, box, api):
        box.add_recipient("cat@example.com")
        box.state = ShareState.SENDING

        assert box.add_recipient("dan@example.com") is False
        assert await box.submit("") is False
        assert api.reslyp_calls == []


class TestOptimisticToggle:
    async def test_committed_toggle_adopts_server_rendering(self, item, api):
        renders = []
        item.subscribe(lambda changed: renders.append(changed.get_flag("favourite")))

        transaction = await OptimisticToggle(item, api).favourite()

        assert transaction.state == TransactionState.COMMITTED
        assert item.get_flag("favourite") is True
        # optimistic flip, then the server rendering
        assert renders == [True, True]

    async def test_rejected_toggle_rolls_back(self, item, api, toasts):
        api.update_error = ApiError("Not found", status_code=404, error_code="NOT_FOUND")
        renders = []
        item.subscribe(lambda changed: renders.append(changed.get_flag("archived")))

        transaction = await OptimisticToggle(item, api, notify=toasts.append).archive()

        assert transaction.state == TransactionState.ROLLED_BACK
        assert transaction.error is api.update_error
        assert item.get_flag("archived") is False
        assert renders == [True, False]
        assert toasts == ["Not found"]

    async def test_archive_can_be_undone_once(self, item, api):
        toggle = OptimisticToggle(item, api)

        await toggle.archive()
        assert toggle.can_undo

        transaction = await toggle.undo()

        assert transaction.state == TransactionState.COMMITTED
        assert item.get_flag("archived") is False
        assert api.update_calls == [("us-1", {"archived": True}), ("us-1", {"archived": False})]
        assert not toggle.can_undo
        assert await toggle.undo() is None

    async def test_rolled_back_archive_is_not_undoable(self, item, api):
        api.update_error = ApiError("boom", status_code=500)
        toggle = OptimisticToggle(item, api)

        await toggle.archive()

        assert not toggle.can_undo

    async def test_delete_sets_tombstone(self, item, api):
        await OptimisticToggle(item, api).delete()

        assert item.get_flag("deleted") is True

    def test_unknown_flag_is_refused_locally(self, item):
        with pytest.raises(ValueError):
            item.set_flag("title", True)
