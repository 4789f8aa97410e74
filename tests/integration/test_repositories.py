from datetime import date

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from employee_service.db import repositories as repo
from employee_service.db.models import Employee
from employee_service.db.seed import SAMPLE_EMPLOYEES, seed_employees


async def _add(db: AsyncSession, name: str, **fields) -> Employee:
    employee = await repo.create_employee(db, Employee(name=name, **fields))
    await db.commit()
    return employee


async def test_ids_start_at_101_and_increase(db_session):
    first = await _add(db_session, "John Doe")
    second = await _add(db_session, "Mark Lee")
    third = await _add(db_session, "Joanna Smith")

    assert first.id == 101
    assert second.id == 102
    assert third.id == 103


async def test_ids_are_not_reused_after_delete(db_session):
    first = await _add(db_session, "John Doe")
    await repo.delete_employee(db_session, first)
    await db_session.commit()

    second = await _add(db_session, "Mark Lee")

    assert second.id > first.id


async def test_get_by_id_and_missing_id(db_session):
    created = await _add(db_session, "John Doe")

    assert await repo.get_employee_by_id(db_session, created.id) == created
    assert await repo.get_employee_by_id(db_session, 9999) is None


async def test_search_by_name_is_case_insensitive_substring(db_session):
    for name in ("John", "Joanna", "Mark"):
        await _add(db_session, name)

    found = await repo.search_by_name(db_session, "jo")

    assert {e.name for e in found} == {"John", "Joanna"}


@pytest.mark.parametrize("fragment", ["_", "%", "J_hn", "Jo%"])
async def test_search_by_name_treats_like_wildcards_literally(db_session, fragment):
    for name in ("John", "Joanna", "Mark"):
        await _add(db_session, name)

    assert await repo.search_by_name(db_session, fragment) == []


async def test_search_by_name_matches_literal_hyphen(db_session):
    for name in ("Jo-Ann Lee", "Joann Lee"):
        await _add(db_session, name)

    found = await repo.search_by_name(db_session, "o-a")

    assert [e.name for e in found] == ["Jo-Ann Lee"]


async def test_count_by_designation_is_exact_match(db_session):
    await _add(db_session, "John Doe", designation="Developer")
    await _add(db_session, "Mark Lee", designation="Developer")
    await _add(db_session, "Priya Nair", designation="Senior Developer")
    await _add(db_session, "Jane Roe", designation="developer")

    assert await repo.count_by_designation(db_session, "Developer") == 2
    assert await repo.count_by_designation(db_session, "Tester") == 0


async def test_find_by_designation_and_company(db_session):
    await _add(db_session, "John Doe", designation="Developer", company="Tech Corp")
    await _add(db_session, "Mark Lee", designation="Developer", company="Data Systems")
    await _add(db_session, "Jane Roe", designation="Manager", company="Tech Corp")

    found = await repo.find_by_designation_and_company(db_session, "Developer", "Tech Corp")

    assert [e.name for e in found] == ["John Doe"]
    assert [e.name for e in await repo.find_by_company(db_session, "Tech Corp")] == [
        "John Doe",
        "Jane Roe",
    ]


async def test_find_born_after_is_strict(db_session):
    await _add(db_session, "John Doe", date_of_birth=date(1990, 1, 1))
    await _add(db_session, "Mark Lee", date_of_birth=date(1995, 6, 1))
    await _add(db_session, "Jane Roe")

    found = await repo.find_born_after(db_session, date(1990, 1, 1))

    assert [e.name for e in found] == ["Mark Lee"]


async def test_exists_by_name_is_exact(db_session):
    await _add(db_session, "John Doe")

    assert await repo.exists_by_name(db_session, "John Doe") is True
    assert await repo.exists_by_name(db_session, "john doe") is False
    assert await repo.exists_by_name(db_session, "John") is False


async def test_delete_by_designation_removes_all_matches(db_session):
    await _add(db_session, "John Doe", designation="Intern")
    await _add(db_session, "Mark Lee", designation="Intern")
    await _add(db_session, "Jane Roe", designation="Manager")

    deleted = await repo.delete_by_designation(db_session, "Intern")
    await db_session.commit()

    assert deleted == 2
    assert [e.name for e in await repo.list_employees(db_session)] == ["Jane Roe"]
    assert await repo.delete_by_designation(db_session, "Intern") == 0


async def test_loaded_rows_get_creation_time(db_session):
    created = await _add(db_session, "John Doe")
    db_session.expunge_all()

    loaded = await repo.get_employee_by_id(db_session, created.id)

    assert loaded is not created
    assert loaded.creation_time is not None


@pytest.mark.parametrize("runs", [1, 2])
async def test_seed_inserts_once(db_session, runs):
    inserted = [await seed_employees(db_session) for _ in range(runs)]

    assert inserted[0] == len(SAMPLE_EMPLOYEES)
    assert sum(inserted) == len(SAMPLE_EMPLOYEES)
    assert len(await repo.list_employees(db_session)) == len(SAMPLE_EMPLOYEES)
