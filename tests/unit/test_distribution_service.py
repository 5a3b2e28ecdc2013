"""
Tests for reslyp fan-out.
"""

import uuid

import pytest
from sqlalchemy import func, select

from slyp.shared.core.exceptions import UnprocessableError, UserSlypNotFoundError
from slyp.shared.models import Reslyp, User, UserSlyp
from slyp.shared.models.enums import FailureReason, UserStatus
from slyp.shared.repositories import SlypRepository, UserSlypRepository
from slyp.shared.services.distribution_service import DistributionService
from slyp.shared.services.slyp_service import SlypService
from slyp.shared.services.user_slyp_service import UserSlypService


@pytest.fixture
def distribution(db_session, extractor) -> DistributionService:
    user_slyps = UserSlypService(db_session, slyp_service=SlypService(db_session, extractor=extractor))
    return DistributionService(db_session, user_slyp_service=user_slyps)


@pytest.fixture
async def sender(make_user, make_slyp, make_user_slyp):
    ada = await make_user("ada@example.com")
    return await make_user_slyp(ada, await make_slyp())


async def count_edges(session_factory) -> int:
    async with session_factory() as session:
        return (await session.execute(select(func.count()).select_from(Reslyp))).scalar()


async def membership_of(session, user_id, slyp_id):
    stmt = select(UserSlyp).where(UserSlyp.user_id == user_id, UserSlyp.slyp_id == slyp_id)
    return (await session.execute(stmt)).scalar_one_or_none()


async def test_creates_one_edge_per_recipient_in_order(distribution, sender, make_user, session_factory):
    bob = await make_user("bob@example.com")
    cat = await make_user("cat@example.com")

    result = await distribution.fan_out(sender.id, ["bob@example.com", "cat@example.com"], "hi")

    assert result.succeeded
    assert [reslyp.recipient.id for reslyp in result.reslyps] == [bob.id, cat.id]
    assert all(reslyp.comment == "hi" for reslyp in result.reslyps)
    assert all(reslyp.sender_user_slyp_id == sender.id for reslyp in result.reslyps)
    assert await count_edges(session_factory) == 2


async def test_recipients_get_an_unseen_membership(distribution, sender, make_user, session_factory):
    bob = await make_user("bob@example.com")

    await distribution.fan_out(sender.id, ["bob@example.com"], "")

    async with session_factory() as session:
        membership = await membership_of(session, bob.id, sender.slyp_id)
    assert membership is not None
    assert membership.unseen is True
    assert membership.archived is False


async def test_existing_recipient_membership_is_left_alone(
    distribution, sender, make_user, make_user_slyp, db_session
):
    bob = await make_user("bob@example.com")
    slyp = await SlypRepository(db_session).get(sender.slyp_id)
    bob_membership = await make_user_slyp(bob, slyp, favourite=True)

    await distribution.fan_out(sender.id, ["bob@example.com"], "")

    reloaded = await UserSlypRepository(db_session).get_with_slyp(bob_membership.id)
    assert reloaded.unseen is False
    assert reloaded.favourite is True


async def test_unknown_email_is_invited(distribution, sender, session_factory):
    result = await distribution.fan_out(sender.id, ["New.Person@Example.com"], "")

    assert result.succeeded
    async with session_factory() as session:
        invited = (
            await session.execute(select(User).where(User.email == "new.person@example.com"))
        ).scalar_one_or_none()
    assert invited is not None
    assert invited.status == UserStatus.INVITED
    assert result.reslyps[0].recipient.id == invited.id


async def test_halts_at_first_duplicate_and_keeps_earlier_edges(
    distribution, sender, make_user, session_factory
):
    bob = await make_user("bob@example.com")
    await make_user("cat@example.com")
    await make_user("dan@example.com")
    await distribution.fan_out(sender.id, ["cat@example.com"], "first")

    result = await distribution.fan_out(
        sender.id,
        ["bob@example.com", "cat@example.com", "dan@example.com"],
        "second",
    )

    assert not result.succeeded
    assert result.failure.email == "cat@example.com"
    assert result.failure.reason == FailureReason.DUPLICATE
    assert [reslyp.recipient.id for reslyp in result.reslyps] == [bob.id]
    # cat from the first call and bob from the second; dan was never reached
    assert await count_edges(session_factory) == 2


async def test_repeated_email_in_one_request_is_a_duplicate(distribution, sender, make_user):
    await make_user("bob@example.com")

    result = await distribution.fan_out(sender.id, ["bob@example.com", "BOB@example.com"], "")

    assert len(result.reslyps) == 1
    assert result.failure.reason == FailureReason.DUPLICATE
    assert result.failure.email == "BOB@example.com"


async def test_sharing_back_to_the_original_sender_is_a_duplicate(
    distribution, sender, make_user, db_session
):
    bob = await make_user("bob@example.com")
    await distribution.fan_out(sender.id, ["bob@example.com"], "")
    bob_membership = await membership_of(db_session, bob.id, sender.slyp_id)

    result = await distribution.fan_out(bob_membership.id, ["ada@example.com"], "")

    assert result.failure.reason == FailureReason.DUPLICATE
    assert result.reslyps == []


async def test_self_share_is_rejected(distribution, sender):
    result = await distribution.fan_out(sender.id, ["ADA@example.com"], "")

    assert result.failure.reason == FailureReason.SELF
    assert result.reslyps == []


async def test_failure_serializes_for_the_error_envelope(distribution, sender):
    result = await distribution.fan_out(sender.id, ["ada@example.com"], "")

    assert result.failure.to_dict() == {
        "email": "ada@example.com",
        "reason": "self",
        "message": "You cannot reslyp to yourself",
    }


async def test_empty_recipient_list_is_unprocessable(distribution, sender):
    with pytest.raises(UnprocessableError):
        await distribution.fan_out(sender.id, [], "")


async def test_unknown_sender_membership(distribution):
    with pytest.raises(UserSlypNotFoundError):
        await distribution.fan_out(uuid.uuid4(), ["bob@example.com"], "")


async def test_sender_never_appears_among_their_own_friends(distribution, sender, make_user, db_session):
    await make_user("bob@example.com")
    await distribution.fan_out(sender.id, ["bob@example.com"], "")

    friends = await distribution.user_slyps.friends_of(sender)

    assert [friend.email for friend in friends] == ["bob@example.com"]
    assert all(isinstance(friend, User) for friend in friends)
