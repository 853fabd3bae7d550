import json
from datetime import date

import pytest

from todostore.entity.dto import Status
from todostore.exceptions import BackendUnavailable, ImportAborted, ImportIncomplete, ValidationFailed
from todostore.gateway.local import LocalGateway
from todostore.service import tag as tag_service
from todostore.service import todo as todo_service
from todostore.service import transfer
from todostore.util import get_utc_iso8601_timestamp


def _seed(gateway):
    todo_service.create_todo(gateway, "plan buy milk", tag="home")
    ongoing = todo_service.create_todo(gateway, "going write docs", tags=["work"])
    todo_service.create_todo(gateway, "done file taxes", image="data:image/png;base64,AAAA")
    tag_service.create_tag(gateway, "unused")
    return ongoing


def _state(gateway):
    return (
        sorted((t.to_dict() for t in gateway.list_all()), key=lambda d: d["id"]),
        [t.name for t in gateway.list_tags()],
    )


def test_export_shape(gateway):
    _seed(gateway)
    snapshot = transfer.export_snapshot(gateway)
    assert snapshot["version"] == "1.0"
    assert snapshot["exportDate"].endswith("Z")
    assert len(snapshot["todos"]) == 3
    assert snapshot["tags"] == ["home", "unused", "work"]
    assert json.loads(transfer.dump_snapshot(snapshot)) == snapshot


def test_export_is_a_pure_read(gateway):
    _seed(gateway)
    before = _state(gateway)
    transfer.export_snapshot(gateway)
    assert _state(gateway) == before


def test_export_then_import_restores_same_collection(gateway):
    _seed(gateway)
    before = _state(gateway)
    text = transfer.dump_snapshot(transfer.export_snapshot(gateway))

    todo_service.create_todo(gateway, "added after export")
    result = transfer.import_snapshot(gateway, text)

    assert result.success
    assert result.message == "Imported 3 todos"
    assert result.imported == 3
    assert _state(gateway) == before


def test_import_replaces_rather_than_merges(gateway):
    _seed(gateway)
    transfer.import_snapshot(gateway, {"todos": [{"text": "only one"}]})
    todos = gateway.list_all()
    assert [t.text for t in todos] == ["only one"]
    assert todos[0].status == Status.TODO
    assert todos[0].created_at is not None


@pytest.mark.parametrize("payload", [
    {"todos": "not-an-array"},
    {"items": []},
    "[]",
    "{not json",
    {"todos": [], "tags": "home"},
    {"todos": [{"text": "fine"}, {"text": ""}]},
    {"todos": [{"text": "x", "status": "archived"}]},
    {"todos": [{"id": "65f1c0ffee0000000000abcd", "text": "a"},
               {"id": "65f1c0ffee0000000000abcd", "text": "b"}]},
])
def test_malformed_snapshot_leaves_collection_untouched(gateway, payload):
    _seed(gateway)
    before = _state(gateway)
    with pytest.raises(ValidationFailed) as excinfo:
        transfer.import_snapshot(gateway, payload)
    assert isinstance(excinfo.value, ImportAborted)
    assert _state(gateway) == before


def test_import_data_reports_failure_instead_of_raising(gateway):
    result = transfer.import_data(gateway, '{"todos": "not-an-array"}')
    assert not result.success
    assert result.message == "Import failed: Invalid data format: todos array is missing"


def test_tags_required_when_configured(gateway):
    with pytest.raises(ImportAborted):
        transfer.import_snapshot(gateway, {"todos": []}, require_tags=True)
    assert transfer.import_snapshot(gateway, {"todos": [], "tags": []}, require_tags=True).success


def test_import_registers_referenced_tags(gateway):
    transfer.import_snapshot(gateway, {"todos": [{"text": "a", "tag": "legacy"}], "tags": ["kept"]})
    assert [t.name for t in gateway.list_tags()] == ["kept", "legacy"]


def test_import_repairs_timestamp_invariants(gateway):
    transfer.import_snapshot(gateway, {"todos": [
        {"text": "a", "status": "todo", "completedAt": "2024-01-01T00:00:00Z"},
        {"text": "b", "status": "ongoing"},
    ]})
    todos = {t.text: t for t in gateway.list_all()}
    assert todos["a"].completed_at is None
    assert todos["b"].ongoing_start_time is not None


class _FailingInsertGateway(LocalGateway):
    def insert_many(self, todos):
        raise BackendUnavailable("disk full")


def test_failure_after_clear_is_reported(local_gateway):
    _seed(local_gateway)
    gateway = _FailingInsertGateway()
    with pytest.raises(ImportIncomplete) as excinfo:
        transfer.import_snapshot(gateway, {"todos": [{"text": "a"}, {"text": "b"}]})
    assert excinfo.value.total == 2
    assert excinfo.value.written == 0

    result = transfer.import_data(gateway, {"todos": [{"text": "a"}]})
    assert not result.success
    assert "disk full" in result.message


def test_backup_filename():
    assert transfer.backup_filename(date(2024, 5, 1)) == "todo-backup-2024-05-01.json"


def test_future_created_at_is_clamped_on_import(gateway):
    transfer.import_snapshot(gateway, {"todos": [
        {"id": "a" * 24, "text": "from the future", "createdAt": "2999-01-01T00:00:00.000Z"},
    ]})
    stored = gateway.get("a" * 24)
    assert stored.created_at <= get_utc_iso8601_timestamp()
