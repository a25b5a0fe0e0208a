"""Registration, login auditing and account deletion."""

import pytest
from django.contrib.auth import get_user_model

from profiles.models import Profile, UserRoute, Link, LinkClick
from profiles import ordering
from profiles.click_utils import record_link_visit
from users.models import LoginLog, UserSession

User = get_user_model()


def register(client, **overrides):
    data = {
        'username': 'alice',
        'email': 'alice@x.com',
        'password': 'pw123456',
        'confirm_password': 'pw123456',
    }
    data.update(overrides)
    return client.post('/auth/register/', data)


@pytest.mark.django_db
class TestRegistration:

    def test_register_creates_user_with_empty_profile_and_route(self, client):
        response = register(client, username='  Alice ', email='ALICE@X.com')

        assert response.status_code == 302
        assert response.url == '/auth/login/'

        user = User.objects.get(username='alice')
        assert user.email == 'alice@x.com'
        assert user.check_password('pw123456')

        profiles = Profile.objects.filter(user=user)
        assert profiles.count() == 1
        profile = profiles.get()
        for field in ('full_name', 'birthday', 'city', 'workplace', 'bio', 'theme', 'custom_css', 'avatar_path'):
            assert getattr(profile, field) is None

        route = UserRoute.objects.get(user=user)
        assert route.vanity_path is None
        assert route.custom_domain is None

    def test_duplicate_username_or_email_is_rejected(self, client, alice):
        response = register(client, email='other@x.com')
        assert response.status_code == 200
        assert 'Username or email already taken' in response.content.decode()

        response = register(client, username='alice2', email='ALICE@x.com')
        assert 'Username or email already taken' in response.content.decode()
        assert User.objects.count() == 1

    def test_password_mismatch(self, client):
        response = register(client, confirm_password='different1')
        assert 'Passwords do not match' in response.content.decode()
        assert not User.objects.exists()

    def test_reserved_username_is_rejected(self, client):
        response = register(client, username='dashboard', email='d@x.com')
        assert response.status_code == 200
        assert not User.objects.filter(username='dashboard').exists()

    def test_honeypot_rejects_bots(self, client):
        response = register(client, website='http://spam.example')
        assert response.status_code == 400
        assert not User.objects.exists()


@pytest.mark.django_db
class TestLogin:

    def test_login_success_is_logged_and_session_tracked(self, client, alice):
        response = client.post('/auth/login/', {'username': 'ALICE', 'password': 'pw123456'},
                               HTTP_USER_AGENT='Firefox')

        assert response.status_code == 302
        assert response.url == '/dashboard/'

        log = LoginLog.objects.get(user=alice)
        assert log.success is True
        assert log.ip == '127.0.0.1'
        assert log.user_agent == 'Firefox'

        session = UserSession.objects.get(user=alice)
        assert session.session_key == client.session.session_key
        assert session.active is True

    def test_failed_login_for_known_user_is_logged(self, client, alice):
        response = client.post('/auth/login/', {'username': 'alice', 'password': 'wrong-pass'})

        assert response.status_code == 200
        assert 'Invalid username or password' in response.content.decode()
        assert LoginLog.objects.filter(user=alice, success=False).count() == 1
        assert not UserSession.objects.exists()

    def test_failed_login_for_unknown_user_writes_nothing(self, client, db):
        response = client.post('/auth/login/', {'username': 'ghost', 'password': 'whatever1'})
        assert response.status_code == 200
        assert not LoginLog.objects.exists()

    def test_logout_marks_session_inactive(self, alice_client, alice):
        session_key = alice_client.session.session_key

        response = alice_client.post('/auth/logout/')

        assert response.status_code == 302
        assert UserSession.objects.get(session_key=session_key).active is False
        assert alice_client.get('/dashboard/').status_code == 302


@pytest.mark.django_db
def test_deleting_user_cascades_owned_rows(alice_client, alice):
    link = ordering.append(Link, alice, label='GitHub', url='https://github.com/alice')
    record_link_visit(link.pk, ip='10.0.0.1', user_agent='test')
    LoginLog.objects.create(user=alice, success=True)

    alice.delete()

    assert not Profile.objects.exists()
    assert not UserRoute.objects.exists()
    assert not Link.objects.exists()
    assert not LinkClick.objects.exists()
    assert not UserSession.objects.exists()
    assert not LoginLog.objects.exists()
