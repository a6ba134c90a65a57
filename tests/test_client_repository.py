"""
ClientRepository tests against SQLite.
Every operation must be confined to the calling user's rows.
"""

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import delete, func, select, update

from app.db.repositories.client_repository import ClientRepository
from app.models.client import Client
from app.models.user import User

from conftest import USER_1, USER_2


async def _create(repo, user_id, /, name="Acme", email="a@acme.com", **kwargs):
    client = await repo.create(user_id, name=name, email=email, **kwargs)
    await repo.session.commit()
    return client


@pytest.mark.asyncio
async def test_create_sets_owner_and_defaults(test_db_session):
    repo = ClientRepository(test_db_session)

    client = await _create(repo, USER_1, user_id=USER_2, id="forged-id")

    assert client.user_id == USER_1
    assert client.id != "forged-id"
    assert client.is_active is True
    assert client.created_at is not None
    assert client.updated_at is not None


@pytest.mark.asyncio
async def test_find_by_id_hides_other_users_clients(test_db_session):
    repo = ClientRepository(test_db_session)
    client = await _create(repo, USER_1)

    assert (await repo.find_by_id(USER_1, client.id)).id == client.id
    assert await repo.find_by_id(USER_2, client.id) is None
    assert await repo.find_by_id(USER_1, "missing") is None


@pytest.mark.asyncio
async def test_update_is_owner_scoped(test_db_session):
    repo = ClientRepository(test_db_session)
    client = await _create(repo, USER_1)

    assert await repo.update(USER_2, client.id, name="Hijacked") is None

    unchanged = await repo.find_by_id(USER_1, client.id)
    assert unchanged.name == "Acme"


@pytest.mark.asyncio
async def test_update_never_changes_identity_or_owner(test_db_session):
    repo = ClientRepository(test_db_session)
    client = await _create(repo, USER_1)
    client_id = client.id
    created_at = client.created_at
    updated_at = client.updated_at

    updated = await repo.update(
        USER_1,
        client_id,
        name="Acme Ltd",
        id="other",
        user_id=USER_2,
        created_at=datetime(2000, 1, 1, tzinfo=timezone.utc),
    )
    await test_db_session.commit()

    assert updated.id == client_id
    assert updated.user_id == USER_1
    assert updated.name == "Acme Ltd"
    assert updated.created_at == created_at
    assert updated.updated_at > updated_at


@pytest.mark.asyncio
async def test_soft_delete_keeps_row_retrievable(test_db_session):
    repo = ClientRepository(test_db_session)
    client = await _create(repo, USER_1)

    assert await repo.soft_delete(USER_2, client.id) is False
    assert await repo.soft_delete(USER_1, client.id) is True
    await test_db_session.commit()

    found = await repo.find_by_id(USER_1, client.id)
    assert found is not None
    assert found.is_active is False
    assert await repo.exists(USER_1, client.id) is True


@pytest.mark.asyncio
async def test_hard_delete_removes_row(test_db_session):
    repo = ClientRepository(test_db_session)
    client = await _create(repo, USER_1)

    assert await repo.hard_delete(USER_2, client.id) is False
    assert await repo.exists(USER_1, client.id) is True

    assert await repo.hard_delete(USER_1, client.id) is True
    await test_db_session.commit()

    assert await repo.find_by_id(USER_1, client.id) is None
    assert await repo.exists(USER_1, client.id) is False
    assert await repo.hard_delete(USER_1, client.id) is False


@pytest.mark.asyncio
async def test_exists_is_owner_scoped(test_db_session):
    repo = ClientRepository(test_db_session)
    client = await _create(repo, USER_1)

    assert await repo.exists(USER_1, client.id) is True
    assert await repo.exists(USER_2, client.id) is False


@pytest.mark.asyncio
async def test_find_all_paginates_newest_first(test_db_session):
    repo = ClientRepository(test_db_session)
    base = datetime(2024, 1, 1, tzinfo=timezone.utc)
    ids = []
    for i in range(15):
        client = await _create(repo, USER_1, name=f"Client {i:02d}", email=f"c{i}@example.com")
        await test_db_session.execute(
            update(Client).where(Client.id == client.id).values(created_at=base + timedelta(minutes=i))
        )
        ids.append(client.id)
    await _create(repo, USER_2, name="Other", email="other@example.com")
    await test_db_session.commit()

    first_page, total = await repo.find_all(USER_1, page=1, page_size=10)
    assert total == 15
    assert [c.id for c in first_page] == list(reversed(ids))[:10]

    second_page, total = await repo.find_all(USER_1, page=2, page_size=10)
    assert total == 15
    assert [c.id for c in second_page] == list(reversed(ids))[10:]

    beyond, total = await repo.find_all(USER_1, page=5, page_size=10)
    assert beyond == []
    assert total == 15


@pytest.mark.asyncio
async def test_find_all_search_is_case_insensitive_across_fields(test_db_session):
    repo = ClientRepository(test_db_session)
    await _create(repo, USER_1, name="Acme", email="hello@acme.com")
    await _create(repo, USER_1, name="Bolt", email="info@bolt.io", company="ACME Holdings")
    await _create(repo, USER_1, name="Zephyr", email="z@zephyr.dev")
    await _create(repo, USER_2, name="Acme Clone", email="x@acme.com")

    clients, total = await repo.find_all(USER_1, search="acme")
    assert total == 2
    assert {c.name for c in clients} == {"Acme", "Bolt"}

    clients, total = await repo.find_all(USER_1, search="ZEPHYR.DEV")
    assert [c.name for c in clients] == ["Zephyr"]

    clients, total = await repo.find_all(USER_1, search="zzz")
    assert clients == []
    assert total == 0


@pytest.mark.asyncio
async def test_find_all_search_matches_wildcards_literally(test_db_session):
    repo = ClientRepository(test_db_session)
    await _create(repo, USER_1, name="100% Design", email="d@design.com")
    await _create(repo, USER_1, name="snake_case Ltd", email="s@snake.com")
    await _create(repo, USER_1, name="Plain", email="p@plain.com")

    clients, _ = await repo.find_all(USER_1, search="%")
    assert [c.name for c in clients] == ["100% Design"]

    clients, _ = await repo.find_all(USER_1, search="_")
    assert [c.name for c in clients] == ["snake_case Ltd"]


@pytest.mark.asyncio
async def test_find_all_filters_on_active_flag(test_db_session):
    repo = ClientRepository(test_db_session)
    active = await _create(repo, USER_1, name="Active")
    inactive = await _create(repo, USER_1, name="Inactive")
    await repo.soft_delete(USER_1, inactive.id)
    await test_db_session.commit()

    clients, total = await repo.find_all(USER_1)
    assert total == 2

    clients, total = await repo.find_all(USER_1, is_active=True)
    assert [c.id for c in clients] == [active.id]

    clients, total = await repo.find_all(USER_1, is_active=False)
    assert [c.id for c in clients] == [inactive.id]


@pytest.mark.asyncio
async def test_deleting_user_cascades_to_clients(test_db_session):
    repo = ClientRepository(test_db_session)
    await _create(repo, USER_1)
    await _create(repo, USER_1, name="Second", email="b@acme.com")
    await _create(repo, USER_2, name="Kept", email="k@kept.com")

    await test_db_session.execute(delete(User).where(User.id == USER_1))
    await test_db_session.commit()

    count = await test_db_session.execute(select(func.count()).select_from(Client))
    assert count.scalar() == 1
    _, total = await repo.find_all(USER_2)
    assert total == 1


@pytest.mark.asyncio
async def test_find_all_far_past_last_page_is_empty(test_db_session):
    repo = ClientRepository(test_db_session)
    await _create(repo, USER_1)

    clients, total = await repo.find_all(USER_1, page=10**17, page_size=100)

    assert clients == []
    assert total == 1


@pytest.mark.asyncio
async def test_every_mutation_moves_updated_at_forward(test_db_session):
    repo = ClientRepository(test_db_session)
    client = await _create(repo, USER_1)
    client_id, created_at = client.id, client.created_at
    stamps = [client.updated_at]

    await repo.update(USER_1, client_id, city="Porto")
    await test_db_session.commit()
    stamps.append((await repo.find_by_id(USER_1, client_id)).updated_at)

    await repo.soft_delete(USER_1, client_id)
    await test_db_session.commit()
    final = await repo.find_by_id(USER_1, client_id)
    stamps.append(final.updated_at)

    assert stamps[0] < stamps[1] < stamps[2]
    assert final.id == client_id
    assert final.user_id == USER_1
    assert final.created_at == created_at
