import pytest

from app.ejama.db import create_db_engine, make_sessionmaker
from app.ejama.models import Base
from app.ejama.modules.community.models import Category
from app.ejama.store import MemoryRecordStore, RecordValidationError, SqlRecordStore


@pytest.fixture(params=["memory", "sql"])
def store(request, tmp_path):
    if request.param == "memory":
        yield MemoryRecordStore()
        return
    engine = create_db_engine(f"sqlite:///{tmp_path/'store.db'}")
    Base.metadata.create_all(bind=engine)
    yield SqlRecordStore(sessions=make_sessionmaker(engine))
    engine.dispose()


class TestRecordStoreContract:
    def test_missing_key_is_none(self, store):
        assert store.get("nope") is None
        assert store.get_record("nope", Category) is None

    def test_set_then_get(self, store):
        store.set("k1", {"a": 1, "b": [1, 2]})
        assert store.get("k1") == {"a": 1, "b": [1, 2]}

    def test_overwrite_replaces_value(self, store):
        store.set("k1", ["x"])
        store.set("k1", ["y", "z"])
        assert store.get("k1") == ["y", "z"]

    def test_returned_value_is_a_copy(self, store):
        store.set("k1", ["x"])
        store.get("k1").append("mutated")
        assert store.get("k1") == ["x"]

    def test_scan_matches_prefix_only(self, store):
        store.set("community_thread_t-1", {"n": 1})
        store.set("community_thread_t-2", {"n": 2})
        store.set("community_post_p-1", {"n": 3})
        values = store.scan_by_prefix("community_thread_")
        assert sorted(v["n"] for v in values) == [1, 2]

    def test_scan_treats_wildcards_literally(self, store):
        store.set("a_c", 1)
        store.set("abc", 2)
        store.set("50%off", 3)
        store.set("50xoff", 4)
        assert store.scan_by_prefix("a_") == [1]
        assert store.scan_by_prefix("50%") == [3]

    def test_scan_is_case_sensitive(self, store):
        store.set("period_user_2024-01-01", 1)
        store.set("PERIOD_user_2024-01-01", 2)
        assert store.scan_by_prefix("period_") == [1]

    def test_typed_round_trip(self, store):
        store.set_record("community_category_c-9", Category(id="c-9", title="Nutrition", members_count=3))
        got = store.get_record("community_category_c-9", Category)
        assert got.title == "Nutrition"
        assert got.members_count == 3
        assert store.get("community_category_c-9")["membersCount"] == 3

    def test_malformed_value_raises(self, store):
        store.set("community_category_bad", {"title": "no id"})
        with pytest.raises(RecordValidationError):
            store.get_record("community_category_bad", Category)
        with pytest.raises(RecordValidationError):
            store.scan_records("community_category_", Category)

    def test_scan_returns_every_record_under_prefix(self, store):
        for n in range(25):
            store.set(f"ask_expert_question_q-{n}", {"n": n})
            store.set(f"ask_expert_user_questions_u-{n}", ["q-{n}"])
        values = store.scan_by_prefix("ask_expert_question_")
        assert sorted(v["n"] for v in values) == list(range(25))
