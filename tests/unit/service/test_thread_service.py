"""ThreadService against in-memory repositories."""
import uuid
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest

from threadline.core.errors import ErrorKind
from threadline.services.thread import ThreadService
from threadline.schemas.thread import ThreadDetail, ThreadListItem


def _user(username="alice"):
    return SimpleNamespace(id=uuid.uuid4(), username=username, fullname=username.title(), profile_picture=None)


class FakeUsers:
    def __init__(self, *users):
        self.rows = {u.id: u for u in users}
        self.calls = 0

    async def get_by_id(self, user_id):
        self.calls += 1
        return self.rows.get(user_id)


class FakeThreads:
    def __init__(self, users: FakeUsers):
        self.users = users
        self.rows: dict[uuid.UUID, SimpleNamespace] = {}
        self.reply_counts: dict[uuid.UUID, int] = {}
        self.calls = 0
        self._clock = datetime(2024, 1, 1, tzinfo=timezone.utc)

    async def create(self, *, id, user_id, content, image=None):
        self.calls += 1
        self._clock += timedelta(seconds=1)
        row = SimpleNamespace(
            id=id, content=content, image=image, user_id=user_id,
            user=self.users.rows[user_id], likes=[], replies=[],
            created_at=self._clock, updated_at=self._clock,
        )
        self.rows[id] = row
        return row

    async def list_page(self, *, offset, limit):
        self.calls += 1
        ordered = sorted(self.rows.values(), key=lambda t: t.created_at, reverse=True)
        return [(t, self.reply_counts.get(t.id, len(t.replies))) for t in ordered[offset:offset + limit]]

    async def get_detail(self, thread_id):
        self.calls += 1
        return self.rows.get(thread_id)

    async def update_content(self, thread_id, content):
        self.calls += 1
        row = self.rows.get(thread_id)
        if row is None:
            return 0
        row.content = content
        return 1

    async def delete(self, thread_id):
        self.calls += 1
        return 1 if self.rows.pop(thread_id, None) is not None else 0


class FakeUploads:
    def __init__(self, *ids, fail=False):
        self.rows = set(ids)
        self.fail = fail
        self.deleted: list[uuid.UUID] = []

    async def delete(self, upload_id):
        if self.fail:
            raise RuntimeError("upload store unavailable")
        self.deleted.append(upload_id)
        if upload_id in self.rows:
            self.rows.remove(upload_id)
            return 1
        return 0


@pytest.fixture()
def author():
    return _user()


@pytest.fixture()
def users(author):
    return FakeUsers(author)


@pytest.fixture()
def threads(users):
    return FakeThreads(users)


@pytest.fixture()
def uploads():
    return FakeUploads()


@pytest.fixture()
def service(threads, users, uploads):
    return ThreadService(threads, users, uploads)


@pytest.mark.asyncio
@pytest.mark.unit
async def test_add_assigns_uuid4_and_owner(service, threads, author):
    result = await service.add(author.id, content="hello", image="https://img/1.png")
    assert result.ok
    thread_id = result.value
    assert thread_id.version == 4
    stored = threads.rows[thread_id]
    assert stored.user_id == author.id
    assert stored.content == "hello"
    assert stored.image == "https://img/1.png"


@pytest.mark.asyncio
@pytest.mark.unit
async def test_add_unknown_user_is_not_found_and_writes_nothing(service, threads):
    missing = uuid.uuid4()
    result = await service.add(missing, content="hello")
    assert not result.ok
    assert result.error.kind is ErrorKind.NOT_FOUND
    assert result.error.title == "User Not Found"
    assert str(missing) in result.error.message
    assert threads.rows == {}


@pytest.mark.asyncio
@pytest.mark.unit
async def test_add_consumes_upload(threads, users, author):
    upload_id = uuid.uuid4()
    uploads = FakeUploads(upload_id)
    service = ThreadService(threads, users, uploads)
    result = await service.add(author.id, content="with picture", upload_id=upload_id)
    assert result.ok
    assert upload_id not in uploads.rows
    assert uploads.deleted == [upload_id]


@pytest.mark.asyncio
@pytest.mark.unit
async def test_add_without_upload_does_not_touch_uploads(service, uploads, author):
    await service.add(author.id, content="plain")
    assert uploads.deleted == []


@pytest.mark.asyncio
@pytest.mark.unit
async def test_add_survives_upload_delete_failure(threads, users, author, caplog):
    service = ThreadService(threads, users, FakeUploads(fail=True))
    with caplog.at_level("WARNING", logger="threadline.services.thread"):
        result = await service.add(author.id, content="kept", upload_id=uuid.uuid4())
    assert result.ok
    assert result.value in threads.rows
    assert any(r.message == "upload cleanup failed" for r in caplog.records)


@pytest.mark.asyncio
@pytest.mark.unit
async def test_find_all_pages_newest_first(service, threads, author):
    for i in range(23):
        await service.add(author.id, content=f"t{i}")

    first = (await service.find_all(1)).value
    assert len(first) == 10
    assert all(isinstance(item, ThreadListItem) for item in first)
    assert [t.content for t in first] == [f"t{i}" for i in range(22, 12, -1)]

    third = (await service.find_all(3)).value
    assert [t.content for t in third] == ["t2", "t1", "t0"]

    assert (await service.find_all(4)).value == []


@pytest.mark.asyncio
@pytest.mark.unit
@pytest.mark.parametrize("page", [0, -3, 1])
async def test_find_all_clamps_low_pages(service, author, page):
    for i in range(12):
        await service.add(author.id, content=f"t{i}")
    clamped = (await service.find_all(page)).value
    first = (await service.find_all(1)).value
    assert [t.id for t in clamped] == [t.id for t in first]


@pytest.mark.asyncio
@pytest.mark.unit
async def test_find_all_honours_page_size(threads, users, uploads, author):
    service = ThreadService(threads, users, uploads, page_size=3)
    for i in range(5):
        await service.add(author.id, content=f"t{i}")
    assert len((await service.find_all(1)).value) == 3
    assert len((await service.find_all(2)).value) == 2


@pytest.mark.asyncio
@pytest.mark.unit
async def test_find_all_reports_reply_count(service, threads, author):
    thread_id = (await service.add(author.id, content="popular")).value
    threads.reply_counts[thread_id] = 4
    [item] = (await service.find_all()).value
    assert item.replies == 4
    assert item.user.username == author.username


@pytest.mark.asyncio
@pytest.mark.unit
@pytest.mark.parametrize("method", ["find_one", "delete_one"])
async def test_malformed_id_is_rejected_before_store_access(service, threads, method):
    result = await getattr(service, method)("not-a-uuid")
    assert result.error.kind is ErrorKind.BAD_REQUEST
    assert result.error.title == "UUID Error"
    assert result.error.message == "The sent ID is not a valid UUID format"
    assert threads.calls == 0


@pytest.mark.asyncio
@pytest.mark.unit
async def test_update_malformed_id_is_rejected_before_store_access(service, threads):
    result = await service.update_one("1234", content="x")
    assert result.error.kind is ErrorKind.BAD_REQUEST
    assert threads.calls == 0


@pytest.mark.asyncio
@pytest.mark.unit
async def test_find_one_round_trip(service, author):
    thread_id = (await service.add(author.id, content="round", image="https://img/r.png")).value
    result = await service.find_one(str(thread_id))
    assert result.ok
    assert isinstance(result.value, ThreadDetail)
    assert result.value.content == "round"
    assert result.value.image == "https://img/r.png"
    assert result.value.replies == []


@pytest.mark.asyncio
@pytest.mark.unit
async def test_unknown_id_is_not_found(service):
    missing = str(uuid.uuid4())
    for result in (
        await service.find_one(missing),
        await service.update_one(missing, content="x"),
        await service.delete_one(missing),
    ):
        assert result.error.kind is ErrorKind.NOT_FOUND
        assert result.error.title == "Thread Not Found"
        assert missing in result.error.message


@pytest.mark.asyncio
@pytest.mark.unit
async def test_update_overwrites_content_only(service, threads, author):
    thread_id = (await service.add(author.id, content="before", image="https://img/k.png")).value
    result = await service.update_one(str(thread_id), content="after")
    assert result.ok and result.value is None
    stored = threads.rows[thread_id]
    assert stored.content == "after"
    assert stored.image == "https://img/k.png"
    assert stored.user_id == author.id


@pytest.mark.asyncio
@pytest.mark.unit
async def test_delete_twice(service, author):
    thread_id = str((await service.add(author.id, content="bye")).value)
    assert (await service.delete_one(thread_id)).ok
    second = await service.delete_one(thread_id)
    assert second.error.kind is ErrorKind.NOT_FOUND


@pytest.mark.asyncio
@pytest.mark.unit
async def test_find_all_far_past_the_end_is_empty_without_store_access(service, threads, author):
    await service.add(author.id, content="only")
    threads.calls = 0
    result = await service.find_all(99999999999999999999999)
    assert result.ok
    assert result.value == []
    assert threads.calls == 0
