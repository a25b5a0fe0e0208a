"""Pytest configuration and shared fixtures."""

import pytest
from django.contrib.auth import get_user_model
from django.test import Client


@pytest.fixture(autouse=True)
def fast_password_hasher(settings):
    """Salted PBKDF2 is slow by design; tests do not need it."""
    settings.PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']


@pytest.fixture(autouse=True)
def media_root(settings, tmp_path):
    settings.MEDIA_ROOT = tmp_path / 'media'


@pytest.fixture
def make_user(db):
    """Factory creating users through the manager, like registration does."""
    User = get_user_model()

    def _make(username, email=None, password='pw123456'):
        return User.objects.create_user(
            username=username,
            email=email or f'{username}@x.com',
            password=password,
        )

    return _make


@pytest.fixture
def alice(make_user):
    return make_user('alice', 'alice@x.com')


@pytest.fixture
def bob(make_user):
    return make_user('bob', 'bob@x.com')


@pytest.fixture
def alice_client(alice):
    """Client logged in as alice with its session already tracked."""
    client = Client(HTTP_USER_AGENT='pytest-alice')
    client.force_login(alice)
    client.get('/dashboard/')
    return client


@pytest.fixture
def bob_client(bob):
    client = Client(HTTP_USER_AGENT='pytest-bob')
    client.force_login(bob)
    client.get('/dashboard/')
    return client
