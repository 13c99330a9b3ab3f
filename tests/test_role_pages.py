import copy

import pytest
from fastapi.testclient import TestClient
from postgrest.exceptions import APIError

from paymirror.core.errors import InvalidArgumentError
from paymirror.main import app
from paymirror.modules.rbac.schemas import RolePagePatch, RolePagePatchItem
from paymirror.modules.rbac.service import RolePageService

API = "/api/v1/rbac/role-pages"


@pytest.fixture
def assignments(db, pages):
    db.seed("rback_roles_pages", [
        {"id": 3, "role_id": 2, "userid": 7, "page_id": 1, "isview": False, "isadd": False,
         "isedit": False, "isdelete": False, "isupdate": False, "filters": None},
        {"id": 4, "role_id": 2, "userid": 7, "page_id": 2, "isview": False, "isadd": False,
         "isedit": False, "isdelete": False, "isupdate": False, "filters": None},
        {"id": 5, "role_id": 2, "userid": None, "page_id": 3, "isview": False, "isadd": False,
         "isedit": False, "isdelete": False, "isupdate": False, "filters": None},
        {"id": 6, "role_id": 1, "userid": 1, "page_id": 1, "isview": True, "isadd": True,
         "isedit": True, "isdelete": True, "isupdate": True, "filters": None},
    ])
    return db.rows("rback_roles_pages")


def by_id(db, row_id):
    return next(r for r in db.rows("rback_roles_pages") if r["id"] == row_id)


def test_assign_single_defaults_flags_false(client, admin_headers, pages):
    resp = client.post(API, json={"roleId": 2, "pageId": 2, "userid": 7, "isView": True}, headers=admin_headers)
    assert resp.status_code == 201, resp.text
    body = resp.json()
    assert body["roleId"] == 2
    assert body["pageId"] == 2
    assert body["userid"] == 7
    assert body["isView"] is True
    assert body["isAdd"] is False and body["isDelete"] is False


def test_assign_array_body_returns_array(client, admin_headers, pages):
    resp = client.post(API, json=[
        {"roleId": 2, "pageId": 1},
        {"roleId": 2, "pageId": 2, "filters": {"region": "EU"}},
    ], headers=admin_headers)
    assert resp.status_code == 201, resp.text
    body = resp.json()
    assert len(body) == 2
    assert body[0]["userid"] is None
    assert body[1]["filters"] == {"region": "EU"}


def test_duplicate_assignments_are_allowed(client, admin_headers, pages, db):
    payload = {"roleId": 2, "pageId": 1, "userid": 7}
    assert client.post(API, json=payload, headers=admin_headers).status_code == 201
    assert client.post(API, json=payload, headers=admin_headers).status_code == 201
    assert len(db.rows("rback_roles_pages")) == 2


def test_assign_requires_role_and_page(client, admin_headers, pages):
    resp = client.post(API, json={"pageId": 1}, headers=admin_headers)
    assert resp.status_code == 400
    assert "error" in resp.json()


def test_list_assignments_filters(client, editor_headers, assignments):
    resp = client.get(API, params={"roleId": 2}, headers=editor_headers)
    assert [a["id"] for a in resp.json()] == [3, 4, 5]

    resp = client.get(API, params={"roleId": 2, "pageId": 2}, headers=editor_headers)
    assert [a["id"] for a in resp.json()] == [4]

    resp = client.get(API, headers=editor_headers)
    assert [a["id"] for a in resp.json()] == [3, 4, 5, 6]


def test_update_single_assignment(client, admin_headers, assignments, db):
    resp = client.put(f"{API}/3", json={"isView": True}, headers=admin_headers)
    assert resp.status_code == 200
    assert resp.json()["isView"] is True
    assert by_id(db, 3)["isview"] is True
    assert by_id(db, 3)["isadd"] is False


def test_update_missing_assignment_is_404(client, admin_headers, assignments):
    resp = client.put(f"{API}/99", json={"isView": True}, headers=admin_headers)
    assert resp.status_code == 404
    assert resp.json() == {"error": "Assignment not found"}


def test_update_comma_ids_share_one_body(client, admin_headers, assignments, db):
    resp = client.put(f"{API}/3,4,5", json={"isEdit": True}, headers=admin_headers)
    assert resp.status_code == 200
    body = resp.json()
    assert [a["id"] for a in body] == [3, 4, 5]
    assert all(a["isEdit"] for a in body)
    assert by_id(db, 5)["isedit"] is True
    assert by_id(db, 3)["isview"] is False


def test_update_array_body_ignores_path_id(client, admin_headers, assignments, db):
    resp = client.put(f"{API}/0", json=[
        {"id": 3, "isView": True},
        {"id": 4, "isAdd": True, "filters": {"amountMax": 500}},
    ], headers=admin_headers)
    assert resp.status_code == 200
    body = resp.json()
    assert [a["id"] for a in body] == [3, 4]
    assert by_id(db, 3)["isview"] is True
    assert by_id(db, 4)["isadd"] is True
    assert by_id(db, 4)["filters"] == {"amountMax": 500}


def test_bulk_update_skips_missing_rows(client, admin_headers, assignments):
    resp = client.put(f"{API}/3,99", json={"isView": True}, headers=admin_headers)
    assert resp.status_code == 200
    assert [a["id"] for a in resp.json()] == [3]


def test_bulk_update_is_not_rolled_back(client, admin_headers, assignments, db):
    real_update = db.update

    def failing_update(table, matched, patch):
        if matched and matched[0]["id"] == 4:
            raise RuntimeError("store went away")
        return real_update(table, matched, patch)

    db.update = failing_update
    with TestClient(app, raise_server_exceptions=False) as raw_client:
        resp = raw_client.put(f"{API}/3,4,5", json={"isView": True}, headers=admin_headers)
    assert resp.status_code == 500
    assert by_id(db, 3)["isview"] is True
    assert by_id(db, 5)["isview"] is False


def test_update_with_bad_path_id_is_400(client, admin_headers, assignments):
    resp = client.put(f"{API}/abc", json={"isView": True}, headers=admin_headers)
    assert resp.status_code == 400


def test_delete_assignment(client, admin_headers, assignments, db):
    resp = client.delete(f"{API}/5", headers=admin_headers)
    assert resp.json() == {"id": 5, "deleted": True}
    assert 5 not in [r["id"] for r in db.rows("rback_roles_pages")]

    resp = client.delete(f"{API}/5", headers=admin_headers)
    assert resp.status_code == 200
    assert resp.json() == {"id": 5, "deleted": True}


def test_default_assignments_cover_every_page(client, admin_headers, pages, db):
    resp = client.post(f"{API}/defaults", json={"userid": 12, "roleId": 2}, headers=admin_headers)
    assert resp.status_code == 201, resp.text
    body = resp.json()
    assert sorted(a["pageId"] for a in body) == [1, 2, 3]
    assert all(a["userid"] == 12 and a["roleId"] == 2 for a in body)
    assert not any(a["isView"] or a["isAdd"] or a["isEdit"] or a["isDelete"] or a["isUpdate"] for a in body)


def test_default_assignments_without_pages(client, admin_headers):
    resp = client.post(f"{API}/defaults", json={"userid": 12, "roleId": 2}, headers=admin_headers)
    assert resp.status_code == 201
    assert resp.json() == []


def test_mismatched_update_shapes_leave_assignments_untouched(db, assignments):
    before = copy.deepcopy(db.rows("rback_roles_pages"))
    service = RolePageService(db)
    with pytest.raises(InvalidArgumentError):
        service.update_role_page_assignment([3, 4], RolePagePatch(isView=True))
    with pytest.raises(InvalidArgumentError):
        service.update_role_page_assignment(3, [RolePagePatchItem(id=3, isView=True)])
    assert db.rows("rback_roles_pages") == before
    assert ("rback_roles_pages", "update") not in db.calls


def test_constraint_violation_on_update_is_mapped(client, admin_headers, assignments, db):
    def rejecting_update(table, matched, patch):
        raise APIError({
            "code": "23502",
            "message": 'null value in column "isview" violates not-null constraint',
            "details": None,
            "hint": None,
        })

    db.update = rejecting_update
    resp = client.put(f"{API}/3", json={"isView": None}, headers=admin_headers)
    assert resp.status_code == 400
    assert resp.json()["error"].startswith("Assignment is missing a required field")
