# tests/test_main.py
from fastapi.testclient import TestClient
from docvault.main import app

def test_root():
    with TestClient(app) as client:
        response = client.get("/")
        assert response.status_code == 200
        assert response.json() == {"message": "DocVault API is running"}

def test_protected_route_without_token(client):
    response = client.get("/documents")
    assert response.status_code == 400
    assert response.json() == {
        "success": False,
        "message": "Please sign in or register to get a token"
    }

def test_protected_route_with_garbage_token(client):
    response = client.get("/documents", headers={"x-access-token": "not-a-jwt"})
    assert response.status_code == 400
    assert response.json()["message"] == "Invalid token, please sign in again"

def test_token_of_inactive_user_is_rejected(client, make_user):
    _, token = make_user(active=False)
    response = client.get("/documents", headers={"x-access-token": token})
    assert response.status_code == 400
    assert response.json()["success"] is False
