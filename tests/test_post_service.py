import json

import pytest

from conftest import make_post, run
from social_posts_api.app.core.errors import NotFound
from social_posts_api.app.schemas.post import PostCreate, parse_timestamp
from social_posts_api.app.services.post_service import PostService, is_post_id
from social_posts_api.app.services.post_store import POST_IDS_KEY, InMemoryPostStore, RedisPostStore


def seeded_service(*posts):
    store = InMemoryPostStore()
    for post in posts:
        run(store.save(post))
    return PostService(store)


@pytest.mark.parametrize("param", ["1", "123", "007"])
def test_digits_are_post_ids(param):
    assert is_post_id(param)


@pytest.mark.parametrize("param", ["abc", "12a", "", "-1", "1.5", " 1", "١٢"])
def test_everything_else_is_a_search(param):
    assert not is_post_id(param)


def test_create_assigns_id_and_utc_timestamp(memory_store):
    service = PostService(memory_store)
    post = run(service.create(PostCreate(quem="Ana", comentario="hello world", publico=True)))

    assert post.id == "1"
    assert post.data_hora.endswith("Z")
    assert parse_timestamp(post.data_hora).utcoffset().total_seconds() == 0
    assert run(memory_store.get("1")) == post
    assert memory_store.ids == {"1"}


def test_get_missing_raises_not_found(memory_store):
    with pytest.raises(NotFound) as excinfo:
        run(PostService(memory_store).get("42"))
    assert excinfo.value.to_body() == {"error": "Post não encontrado", "id": "42"}


def test_list_all_newest_first():
    service = seeded_service(
        make_post(1, data_hora="2024-05-01T10:00:00.000Z"),
        make_post(2, data_hora="2024-05-03T10:00:00.000Z"),
        make_post(3, data_hora="2024-05-02T10:00:00.000Z"),
    )
    assert [p.id for p in run(service.list_all())] == ["2", "3", "1"]


def test_list_all_compares_instants_not_strings():
    service = seeded_service(
        make_post(1, data_hora="2024-05-01T12:00:00.000+02:00"),
        make_post(2, data_hora="2024-05-01T11:00:00.000Z"),
    )
    assert [p.id for p in run(service.list_all())] == ["2", "1"]


def test_list_all_ties_put_higher_id_first():
    same = "2024-05-01T10:00:00.000Z"
    service = seeded_service(make_post(9, data_hora=same), make_post(10, data_hora=same), make_post(2, data_hora=same))
    assert [p.id for p in run(service.list_all())] == ["10", "9", "2"]


def test_list_all_ignores_records_with_non_numeric_ids():
    service = seeded_service(make_post(2, data_hora="2024-05-02T10:00:00.000Z"))
    service.store.records["post:1"] = json.dumps(
        {"id": "abc", "quem": "Ana", "data_hora": "2024-05-01T10:00:00.000Z", "comentario": "hello", "publico": True}
    )
    service.store.ids.add("1")

    assert [p.id for p in run(service.list_all())] == ["2"]
    assert [p.id for p in run(service.search("hello"))] == ["2"]


def test_list_all_skips_orphaned_index_entries(store_factory):
    async def scenario():
        store = store_factory()
        await store.save(make_post(1))
        # Index entry whose record was never written.
        if isinstance(store, RedisPostStore):
            await store.client.sadd(POST_IDS_KEY, "2")
        else:
            store.ids.add("2")
        service = PostService(store)
        return await service.list_all(), await service.count(), await store.get("2")

    posts, count, orphan = run(scenario())
    assert [p.id for p in posts] == ["1"]
    assert count == 2
    assert orphan is None


def test_search_is_case_insensitive_substring():
    service = seeded_service(
        make_post(1, comentario="hello world", data_hora="2024-05-01T10:00:00.000Z"),
        make_post(2, comentario="Hello again", data_hora="2024-05-02T10:00:00.000Z"),
        make_post(3, comentario="bom dia", data_hora="2024-05-03T10:00:00.000Z"),
    )
    assert [p.id for p in run(service.search("HELLO"))] == ["2", "1"]
    assert [p.id for p in run(service.search("lo wor"))] == ["1"]
    assert run(service.search("nada")) == []


def test_empty_search_matches_everything():
    service = seeded_service(make_post(1), make_post(2, data_hora="2024-06-01T00:00:00.000Z"))
    assert run(service.search("")) == run(service.list_all())


def test_count_matches_list_all(memory_store):
    service = PostService(memory_store)
    for text in ("a", "b", "c"):
        run(service.create(PostCreate(quem="Ana", comentario=text, publico=False)))
    assert run(service.count()) == len(run(service.list_all())) == 3


def test_ana_and_bo_scenario(memory_store):
    service = PostService(memory_store)
    a = run(service.create(PostCreate(quem="Ana", comentario="hello world", publico=True)))
    b = run(service.create(PostCreate(quem="Bo", comentario="Hello again", publico=False)))

    assert {p.id for p in run(service.search("hello"))} == {a.id, b.id}
    assert run(service.list_all()) == [b, a]
