"""
Tests for bulk operations with per-item failure isolation.
"""
from linkhub_app.models.url import ClickRecord
from linkhub_app.services.bulk_operations import BulkOperationExecutor


def make(store, url, owner_id=None, alias=None):
    return store.create(url, owner_id=owner_id, custom_alias=alias)[0].short_code


class TestBulkOperationExecutor:

    def test_delete_with_missing_item(self, store):
        make(store, "https://a.example.com", alias="AAA")
        make(store, "https://b.example.com", alias="BBB")
        for code in ("AAA", "BBB"):
            store.click_log.append(ClickRecord(id=store.click_log.next_id(), short_code=code))

        report = BulkOperationExecutor(store).apply(["AAA", "BBB", "ghost"], "delete")

        assert report.success_count == 2
        assert report.failure_count == 1
        assert report.failed_items == ["ghost"]
        assert report.success is False
        assert report.message == "Bulk operation completed with 1 failures"
        assert store.get("AAA") is None
        assert store.get("BBB") is None
        assert len(store.click_log) == 0

    def test_deactivate_then_activate(self, store):
        codes = [make(store, f"https://example.com/{i}") for i in range(3)]
        executor = BulkOperationExecutor(store)

        report = executor.apply(codes, "deactivate")
        assert report.success is True
        assert report.message == "Bulk operation completed"
        assert all(store.get(c).is_active is False for c in codes)

        report = executor.apply(codes, "ACTIVATE")
        assert report.success_count == 3
        assert all(store.get(c).is_active is True for c in codes)

    def test_unknown_operation_fails_every_item_without_raising(self, store):
        codes = [make(store, f"https://example.com/{i}") for i in range(2)]

        report = BulkOperationExecutor(store).apply(codes, "archive")

        assert report.success is False
        assert report.success_count == 0
        assert report.failure_count == 2
        assert report.failed_items == codes
        assert all(store.get(c) is not None for c in codes)

    def test_owner_scoping(self, store):
        mine = make(store, "https://a.example.com", owner_id=1)
        theirs = make(store, "https://b.example.com", owner_id=2)

        report = BulkOperationExecutor(store).apply([mine, theirs], "deactivate", owner_id=1)

        assert report.failed_items == [theirs]
        assert store.get(mine).is_active is False
        assert store.get(theirs).is_active is True

    def test_every_item_failing_still_returns_report(self, store):
        report = BulkOperationExecutor(store).apply(["x1", "x2"], "delete")

        assert report.failure_count == 2
        assert report.success_count == 0
