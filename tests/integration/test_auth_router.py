from datetime import date

import pytest
from httpx import AsyncClient
from unittest.mock import AsyncMock

from conftest import USER_ID
from moviewave.clients.brevo import BrevoClient
from moviewave.clients.supabase_auth import AuthErrorKind, AuthPlatformError
from moviewave.core.security import create_reset_token
from moviewave.dependencies import get_brevo_client
from moviewave.main import app

PROFILE = {
    "id_usuario": USER_ID,
    "nombre": "Ana",
    "apellido": "Ruiz",
    "correo": "ana@example.com",
    "edad": date(1990, 6, 15),
}


@pytest.fixture
def mock_brevo(client):
    brevo = AsyncMock(spec=BrevoClient)
    brevo.send_transactional_email.return_value = {"messageId": "<msg@brevo>"}
    app.dependency_overrides[get_brevo_client] = lambda: brevo
    return brevo


@pytest.mark.asyncio
async def test_register_and_login_flow(client: AsyncClient, mock_db_pool: AsyncMock, mock_auth_client: AsyncMock):
    # Setup Mock Responses
    mock_auth_client.sign_up.return_value = {
        "user": {"id": USER_ID, "email": "ana@example.com"},
        "session": None,
    }
    mock_auth_client.sign_in_with_password.return_value = {
        "user": {"id": USER_ID, "email": "ana@example.com"},
        "session": {"access_token": "at", "refresh_token": "rt"},
    }
    mock_db_pool.fetchrow.return_value = PROFILE

    # 1. Register
    reg_response = await client.post("/api/register", json={
        "email": "ana@example.com",
        "password": "secret1",
        "name": "Ana",
        "lastname": "Ruiz",
        "birthdate": "1990-06-15",
    })
    assert reg_response.status_code == 201
    data = reg_response.json()
    assert data["message"] == "User registered successfully"
    assert data["user"]["id"] == USER_ID
    assert data["token"] is None

    # 2. Login
    login_response = await client.post("/api/login", json={
        "email": "ana@example.com",
        "password": "secret1",
    })
    assert login_response.status_code == 200
    token_data = login_response.json()
    assert token_data["token"] == "at"
    assert token_data["refresh_token"] == "rt"
    assert token_data["user"]["birthdate"] == "1990-06-15"


@pytest.mark.asyncio
async def test_register_existing_email(client: AsyncClient, mock_auth_client: AsyncMock, mock_db_pool: AsyncMock):
    mock_auth_client.sign_up.side_effect = AuthPlatformError(AuthErrorKind.USER_EXISTS, "already registered", 422)

    response = await client.post("/api/register", json={
        "email": "ana@example.com",
        "password": "secret1",
        "name": "Ana",
        "lastname": "Ruiz",
    })
    assert response.status_code == 400
    assert response.json()["error"] == "Email already registered"
    mock_db_pool.fetchrow.assert_not_called()


@pytest.mark.asyncio
async def test_login_invalid_credentials(client: AsyncClient, mock_auth_client: AsyncMock):
    mock_auth_client.sign_in_with_password.side_effect = AuthPlatformError(
        AuthErrorKind.INVALID_CREDENTIALS, "Invalid login credentials", 400
    )

    login_response = await client.post("/api/login", json={
        "email": "nobody@example.com",
        "password": "wrongpassword"
    })
    assert login_response.status_code == 401
    assert login_response.json()["error"] == "Invalid credentials"


@pytest.mark.asyncio
async def test_user_profile(client: AsyncClient, mock_db_pool: AsyncMock, auth_headers):
    mock_db_pool.fetchrow.return_value = PROFILE

    response = await client.get("/api/user-profile", headers=auth_headers)

    assert response.status_code == 200
    body = response.json()
    assert body["name"] == "Ana"
    assert isinstance(body["age"], int)
    assert mock_db_pool.fetchrow.call_args.args[1] == USER_ID


@pytest.mark.asyncio
async def test_user_profile_requires_token(client: AsyncClient, mock_db_pool: AsyncMock):
    response = await client.get("/api/user-profile")

    assert response.status_code == 401
    mock_db_pool.fetchrow.assert_not_called()


@pytest.mark.asyncio
async def test_update_user(client: AsyncClient, mock_db_pool: AsyncMock, mock_auth_client: AsyncMock, auth_headers):
    mock_db_pool.fetchrow.return_value = dict(PROFILE, nombre="Anita")

    response = await client.put("/api/update-user", json={"name": "Anita"}, headers=auth_headers)

    assert response.status_code == 200
    assert response.json()["message"] == "User updated successfully"
    mock_auth_client.admin_update_user_by_id.assert_called_once()


@pytest.mark.asyncio
async def test_update_user_empty_body(client: AsyncClient, auth_headers):
    response = await client.put("/api/update-user", json={}, headers=auth_headers)
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_delete_account(client: AsyncClient, mock_db_pool: AsyncMock, mock_auth_client: AsyncMock, auth_headers):
    response = await client.delete("/api/delete-account", headers=auth_headers)

    assert response.status_code == 200
    assert response.json() == {"message": "Account deleted successfully", "original_email": "ana@example.com"}
    mock_db_pool.execute.assert_called_once()
    user_id, attributes = mock_auth_client.admin_update_user_by_id.call_args.args
    assert user_id == USER_ID
    assert attributes["email"].endswith("@deleted.account")


@pytest.mark.asyncio
async def test_forgot_password(client: AsyncClient, mock_brevo: AsyncMock):
    response = await client.post("/api/forgot-password", json={"email": "ana@example.com"})

    assert response.status_code == 200
    assert response.json()["message"] == "Recovery email sent"
    assert "token" not in response.json()
    kwargs = mock_brevo.send_transactional_email.call_args.kwargs
    assert kwargs["to_email"] == "ana@example.com"
    assert "/resetpassword?token=" in kwargs["html_content"]


@pytest.mark.asyncio
async def test_forgot_password_without_email_provider(client: AsyncClient):
    app.dependency_overrides[get_brevo_client] = lambda: None

    response = await client.post("/api/forgot-password", json={"email": "ana@example.com"})
    assert response.status_code == 500


@pytest.mark.asyncio
async def test_reset_password(client: AsyncClient, mock_auth_client: AsyncMock):
    mock_auth_client.admin_find_user_by_email.return_value = {"id": USER_ID, "email": "ana@example.com"}
    token = create_reset_token("ana@example.com", "test-secret")

    response = await client.post("/api/reset-password", json={"token": token, "newPassword": "newsecret"})

    assert response.status_code == 200
    assert response.json() == {"message": "Password updated successfully"}
    mock_auth_client.admin_update_user_by_id.assert_called_once_with(USER_ID, {"password": "newsecret"})


@pytest.mark.asyncio
async def test_reset_password_bad_token(client: AsyncClient, mock_auth_client: AsyncMock):
    response = await client.post("/api/reset-password", json={"token": "forged", "newPassword": "newsecret"})

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid or expired token"
    mock_auth_client.admin_update_user_by_id.assert_not_called()
