import httpx
import pytest

from todostore import lifecycle
from todostore.entity.dto import Status, Todo
from todostore.exceptions import BackendUnavailable, NotFound, ValidationFailed
from todostore.gateway import LocalGateway, RemoteGateway, create_gateway
from todostore.service import tag as tag_service
from todostore.service import todo as todo_service
from todostore.util import generate_id, is_native_id


def test_upsert_with_client_id_creates_then_updates_in_place(gateway):
    draft = lifecycle.new_todo("plan buy milk")
    created = gateway.upsert(draft)
    assert is_native_id(created.id)
    assert created.id != draft.id
    assert created.status == Status.PLANNED
    assert len(gateway.list_all()) == 1

    moved = gateway.upsert(lifecycle.transition(created, Status.ONGOING))
    assert moved.id == created.id
    assert moved.ongoing_start_time is not None
    assert len(gateway.list_all()) == 1
    assert gateway.get(created.id).status == Status.ONGOING


def test_update_keeps_created_at(gateway):
    created = gateway.upsert(lifecycle.new_todo("x", now="2024-01-01T00:00:00.000Z"))
    updated = gateway.upsert(created.copy(text="y", created_at="2030-01-01T00:00:00.000Z"))
    assert updated.text == "y"
    assert updated.created_at == "2024-01-01T00:00:00.000Z"


def test_update_of_missing_native_id_is_not_found(gateway):
    with pytest.raises(NotFound):
        gateway.upsert(Todo(id=generate_id(), text="ghost", created_at="2024-01-01T00:00:00.000Z"))
    assert gateway.list_all() == []


def test_upsert_rejects_empty_text(gateway):
    with pytest.raises(ValidationFailed):
        gateway.upsert(Todo(id="tmp", text="  "))


def test_get_unknown_is_not_found(gateway):
    with pytest.raises(NotFound):
        gateway.get(generate_id())
    with pytest.raises(NotFound):
        gateway.get("not-an-id")


def test_remove_then_remove_again_is_not_found(gateway):
    created = gateway.upsert(lifecycle.new_todo("x"))
    gateway.remove(created.id)
    assert gateway.list_all() == []
    with pytest.raises(NotFound):
        gateway.remove(created.id)


def test_clear_all(gateway):
    for text in ("a", "b", "c"):
        gateway.upsert(lifecycle.new_todo(text))
    gateway.clear_all()
    assert gateway.list_all() == []


def test_insert_many_keeps_native_ids(gateway):
    kept = generate_id()
    records = [
        Todo(id=kept, text="kept", status=Status.DONE, created_at="2024-01-01T00:00:00.000Z",
             completed_at="2024-01-02T00:00:00.000Z", tags=["a"]),
        Todo(id="1714554000000", text="legacy", created_at="2024-01-03T00:00:00.000Z"),
    ]
    assert gateway.insert_many(records) == 2

    stored = {t.text: t for t in gateway.list_all()}
    assert stored["kept"].id == kept
    assert stored["kept"].completed_at == "2024-01-02T00:00:00.000Z"
    assert stored["kept"].tags == ["a"]
    assert is_native_id(stored["legacy"].id)


def test_list_all_is_newest_first(gateway):
    gateway.upsert(lifecycle.new_todo("old", now="2024-01-01T00:00:00.000Z"))
    gateway.upsert(lifecycle.new_todo("new", now="2024-06-01T00:00:00.000Z"))
    assert [t.text for t in gateway.list_all()] == ["new", "old"]


def test_tag_registry_and_cascade(gateway):
    gateway.add_tag("home")
    gateway.add_tag("home")
    gateway.add_tag("work")
    assert [t.name for t in gateway.list_tags()] == ["home", "work"]

    a = gateway.upsert(lifecycle.new_todo("a", tags=["home", "work"]))
    gateway.upsert(lifecycle.new_todo("b", tags=["home"]))
    assert gateway.tag_usage("home") == 2

    assert gateway.remove_tag("home") == 2
    assert [t.name for t in gateway.list_tags()] == ["work"]
    assert all("home" not in t.tags for t in gateway.list_all())
    assert gateway.get(a.id).tags == ["work"]
    assert gateway.tag_usage("home") == 0


def test_remove_unknown_tag_is_not_found(gateway):
    with pytest.raises(NotFound):
        gateway.remove_tag("nope")


def test_get_tag(gateway):
    gateway.add_tag("x")
    assert gateway.get_tag("x").name == "x"
    assert gateway.get_tag("X") is None


def _remote(handler) -> RemoteGateway:
    client = httpx.Client(base_url="http://todo.test", transport=httpx.MockTransport(handler))
    return RemoteGateway(client=client)


def test_remote_transport_failure_is_backend_unavailable():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(BackendUnavailable):
        _remote(handler).list_all()


def test_remote_server_error_is_backend_unavailable():
    gateway = _remote(lambda request: httpx.Response(500, json={"message": "boom"}))
    with pytest.raises(BackendUnavailable, match="boom"):
        gateway.list_all()


def test_remote_routes_by_id_format():
    seen = []

    def handler(request):
        seen.append((request.method, request.url.path))
        body = {"id": "65f1c0ffee0000000000abcd", "text": "x", "status": "todo",
                "createdAt": "2024-01-01T00:00:00.000Z"}
        return httpx.Response(201 if request.method == "POST" else 200, json=body)

    gateway = _remote(handler)
    created = gateway.upsert(Todo(id="1714554000000", text="x"))
    gateway.upsert(created)
    assert seen == [("POST", "/api/todos"), ("PUT", "/api/todos/65f1c0ffee0000000000abcd")]


def test_remote_skips_request_for_non_native_ids():
    def handler(request):
        raise AssertionError("no request expected")

    gateway = _remote(handler)
    with pytest.raises(NotFound):
        gateway.remove("1714554000000")


def test_create_gateway_selects_backend():
    gateway = create_gateway({"backend": "local", "database_url": "sqlite://"})
    assert isinstance(gateway, LocalGateway)
    gateway.close()

    remote = create_gateway({"backend": "remote", "api_url": "http://localhost:9"})
    assert isinstance(remote, RemoteGateway)
    remote.close()

    with pytest.raises(ValidationFailed):
        create_gateway({"backend": "carrier-pigeon"})


def test_tag_names_with_slashes(gateway):
    tag_service.create_tag(gateway, "work/urgent")
    todo_service.create_todo(gateway, "x", tag="work/urgent")
    assert tag_service.usage_count(gateway, "work/urgent") == 1

    assert tag_service.delete_tag(gateway, "work/urgent") == 1
    assert gateway.list_tags() == []
    assert gateway.list_all()[0].tags == []


def test_upper_case_native_id_is_the_same_record(gateway):
    created = gateway.upsert(lifecycle.new_todo("x"))
    assert gateway.get(created.id.upper()).id == created.id
    gateway.remove(created.id.upper())
    assert gateway.list_all() == []


@pytest.mark.parametrize("body", [
    {"text": "<html>maintenance</html>", "headers": {"content-type": "text/html"}},
    {"json": {"unexpected": "shape"}},
])
def test_remote_unreadable_success_body_is_backend_unavailable(body):
    gateway = _remote(lambda request: httpx.Response(200, **body))
    with pytest.raises(BackendUnavailable):
        gateway.list_all()
    with pytest.raises(BackendUnavailable):
        gateway.list_tags()


def test_remote_malformed_tag_is_backend_unavailable():
    gateway = _remote(lambda request: httpx.Response(200, json=[{"label": "home"}]))
    with pytest.raises(BackendUnavailable):
        gateway.list_tags()


def test_remote_non_json_write_response_is_backend_unavailable():
    gateway = _remote(lambda request: httpx.Response(201, text="created"))
    with pytest.raises(BackendUnavailable):
        gateway.upsert(Todo(id="1714554000000", text="x"))
