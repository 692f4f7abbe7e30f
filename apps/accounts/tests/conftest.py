import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def shopper(db):
    """Active account with an email on file."""
    return User.objects.create_user(
        username='testuser',
        password='TestPass123!',
        email='testuser@example.com',
    )


@pytest.fixture
def idle_shopper(db):
    """Account that has been deactivated."""
    return User.objects.create_user(
        username='inactive',
        password='TestPass123!',
        is_active=False,
    )


@pytest.fixture
def shopper_client(shopper):
    """Separate API client carrying the shopper's access token."""
    client = APIClient()
    token = RefreshToken.for_user(shopper).access_token
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {token}')
    return client
