"""
Tests for canonical slyp creation.
"""

import pytest
from sqlalchemy import func, select

from slyp.shared.core.exceptions import FetchError, SlypNotFoundError, UnprocessableError
from slyp.shared.models import Slyp
from slyp.shared.models.enums import SlypType
from slyp.shared.repositories import SlypRepository
from slyp.shared.services.slyp_service import SlypService
from slyp.shared.services.url_service import URLService


async def count_slyps(session_factory) -> int:
    async with session_factory() as session:
        return (await session.execute(select(func.count()).select_from(Slyp))).scalar()


async def test_first_sight_extracts_and_stores(db_session, extractor, session_factory):
    service = SlypService(db_session, extractor=extractor)

    slyp = await service.ensure_canonical("http://www.example.com/post/?utm_source=feed")
    await db_session.commit()

    assert extractor.calls == ["http://www.example.com/post/?utm_source=feed"]
    assert slyp.url == "http://www.example.com/post/?utm_source=feed"
    assert slyp.normalized_url == "https://example.com/post"
    assert slyp.title.startswith("Page at")
    assert slyp.slyp_type == SlypType.ARTICLE
    assert await count_slyps(session_factory) == 1


async def test_equivalent_urls_resolve_to_one_slyp(db_session, extractor, session_factory):
    service = SlypService(db_session, extractor=extractor)

    first = await service.ensure_canonical("https://example.com/post")
    second = await service.ensure_canonical("http://www.example.com/post/#comments")
    await db_session.commit()

    assert first.id == second.id
    assert len(extractor.calls) == 1
    assert await count_slyps(session_factory) == 1


async def test_lost_race_returns_the_winning_row(db_session, extractor, session_factory):
    url = "https://example.com/contended"
    _, normalized, url_hash = URLService.validate_and_process(url)
    winner = {}

    async def competing_request(_url):
        # Another request commits the same page while this one is extracting
        async with session_factory() as other:
            slyp = await SlypRepository(other).create(
                url=url,
                normalized_url=normalized,
                url_hash=url_hash,
                title="Winner",
                slyp_type=SlypType.ARTICLE,
            )
            await other.commit()
            winner["id"] = slyp.id

    extractor.before_return = competing_request
    service = SlypService(db_session, extractor=extractor)

    slyp = await service.ensure_canonical(url)
    await db_session.commit()

    assert slyp.id == winner["id"]
    assert slyp.title == "Winner"
    assert await count_slyps(session_factory) == 1


async def test_fetch_failure_stores_nothing(db_session, extractor, session_factory):
    extractor.error = FetchError(FetchError.UNREACHABLE, url="https://example.com/down")
    service = SlypService(db_session, extractor=extractor)

    with pytest.raises(FetchError):
        await service.ensure_canonical("https://example.com/down")

    assert await count_slyps(session_factory) == 0


async def test_invalid_url_is_rejected_before_extraction(db_session, extractor):
    service = SlypService(db_session, extractor=extractor)

    with pytest.raises(UnprocessableError):
        await service.ensure_canonical("not a url")

    assert extractor.calls == []


async def test_get_unknown_slyp_raises_not_found(db_session, extractor):
    import uuid

    with pytest.raises(SlypNotFoundError):
        await SlypService(db_session, extractor=extractor).get(uuid.uuid4())
