# tests/api/test_roles.py
import pytest
from fastapi import status


def auth(token):
    return {"x-access-token": token}


def test_create_role(client, admin):
    _, token = admin
    response = client.post("/roles", json={"title": "editor"}, headers=auth(token))

    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["message"] == "Role created successfully"
    assert data["role"]["title"] == "editor"
    assert data["role"]["id"] > 2


def test_create_duplicate_role(client, admin):
    _, token = admin
    client.post("/roles", json={"title": "editor"}, headers=auth(token))

    response = client.post("/roles", json={"title": "Editor"}, headers=auth(token))

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["errorArray"][0] == {"path": "title", "message": "role already exist"}


@pytest.mark.parametrize("payload", [{"title": ""}, {"title": "   "}, {}])
def test_create_role_without_title(client, admin, payload):
    _, token = admin
    response = client.post("/roles", json=payload, headers=auth(token))

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    errors = response.json()["errorArray"]
    assert errors[0]["message"] == "Input a valid title"
    assert errors[1]["message"] == "This field cannot be empty"


def test_non_admin_cannot_create_role(client, regular):
    _, token = regular
    response = client.post("/roles", json={"title": "editor"}, headers=auth(token))
    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert response.json()["message"] == "You are not permitted to perform this action"


def test_list_roles(client, admin, guest_role):
    _, token = admin
    response = client.get("/roles", headers=auth(token))

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["message"] == "You have successfully retrived all roles"
    assert [role["title"] for role in data["roles"]] == ["admin", "regular", "guest"]


def test_non_admin_cannot_list_roles(client, regular):
    _, token = regular
    response = client.get("/roles", headers=auth(token))
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_get_role(client, admin, guest_role):
    _, token = admin
    response = client.get(f"/roles/{guest_role.id}", headers=auth(token))

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["message"] == "This role has been retrieved successfully"
    assert response.json()["role"]["title"] == "guest"


def test_get_unknown_role(client, admin):
    _, token = admin
    response = client.get("/roles/999", headers=auth(token))
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["message"] == "This role does not exist"


def test_update_role(client, admin, guest_role):
    _, token = admin
    response = client.put(f"/roles/{guest_role.id}", json={"title": "visitor"}, headers=auth(token))

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["message"] == "This role has been updated"
    assert response.json()["updatedRole"]["title"] == "visitor"


def test_update_role_to_existing_title(client, admin, guest_role):
    _, token = admin
    response = client.put(f"/roles/{guest_role.id}", json={"title": "regular"}, headers=auth(token))
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["errorArray"][0]["message"] == "role already exist"


def test_update_unknown_role(client, admin):
    _, token = admin
    response = client.put("/roles/999", json={"title": "ghost"}, headers=auth(token))
    assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.parametrize("role_id", [1, 2])
def test_system_roles_cannot_be_updated(client, admin, role_id):
    _, token = admin
    response = client.put(f"/roles/{role_id}", json={"title": "renamed"}, headers=auth(token))
    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert response.json()["message"] == "You are not permitted to modify this role"


@pytest.mark.parametrize("role_id", [1, 2])
def test_system_roles_cannot_be_deleted(client, admin, role_id):
    _, token = admin
    response = client.delete(f"/roles/{role_id}", headers=auth(token))
    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert response.json()["message"] == "You are not permitted to modify this role"


def test_delete_role(client, admin, guest_role):
    _, token = admin
    response = client.delete(f"/roles/{guest_role.id}", headers=auth(token))

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["message"] == "This role has been deleted"
    assert client.get(f"/roles/{guest_role.id}", headers=auth(token)).status_code == \
        status.HTTP_404_NOT_FOUND


def test_delete_role_in_use(client, admin, guest):
    _, token = admin
    guest_user, _ = guest
    response = client.delete(f"/roles/{guest_user.role_id}", headers=auth(token))
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["message"] == "This role is assigned to existing users"


def test_delete_unknown_role(client, admin):
    _, token = admin
    response = client.delete("/roles/999", headers=auth(token))
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["message"] == "This role does not exist"
