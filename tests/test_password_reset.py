"""Password reset tokens."""

from datetime import timedelta

import pytest
from django.utils import timezone

from core.exceptions import AuthError
from users.models import PasswordResetToken
from users.reset_utils import check_reset_token, consume_reset_token, issue_reset_token


@pytest.mark.django_db
class TestResetTokens:

    def test_issue_sends_link(self, alice, mailoutbox):
        token = issue_reset_token(' ALICE@x.com ', base_url='http://testserver')

        assert token.user == alice
        assert len(token.token) == 64
        assert len(mailoutbox) == 1
        assert mailoutbox[0].to == ['alice@x.com']
        assert f'http://testserver/auth/reset/{token.token}/' in mailoutbox[0].body

    def test_unknown_email_is_silent(self, db, mailoutbox):
        assert issue_reset_token('nobody@x.com') is None
        assert not PasswordResetToken.objects.exists()
        assert mailoutbox == []

    def test_consume_sets_password_once(self, alice):
        token = issue_reset_token('alice@x.com')

        consume_reset_token(token.token, 'brand-new-pass')

        alice.refresh_from_db()
        assert alice.check_password('brand-new-pass')
        with pytest.raises(AuthError):
            consume_reset_token(token.token, 'another-pass1')
        with pytest.raises(AuthError):
            check_reset_token(token.token)

    def test_expired_token_is_rejected(self, alice):
        token = issue_reset_token('alice@x.com')
        PasswordResetToken.objects.filter(pk=token.pk).update(expires_at=timezone.now() - timedelta(minutes=1))

        with pytest.raises(AuthError) as excinfo:
            consume_reset_token(token.token, 'brand-new-pass')
        assert excinfo.value.message == 'Invalid or expired reset link'
        alice.refresh_from_db()
        assert alice.check_password('pw123456')


@pytest.mark.django_db
class TestResetViews:

    def test_forgot_password_message_is_generic(self, client, alice, mailoutbox):
        known = client.post('/auth/forgot/', {'email': 'alice@x.com'}, follow=True)
        unknown = client.post('/auth/forgot/', {'email': 'ghost@x.com'}, follow=True)

        message = 'If that email exists, a reset link has been sent.'
        assert message in known.content.decode()
        assert message in unknown.content.decode()
        assert len(mailoutbox) == 1

    def test_reset_flow(self, client, alice):
        token = issue_reset_token('alice@x.com')
        url = f'/auth/reset/{token.token}/'

        assert client.get(url).status_code == 200
        response = client.post(url, {'password': 'brand-new-pass', 'confirm_password': 'brand-new-pass'})

        assert response.status_code == 302
        assert response.url == '/auth/login/'
        assert client.login(username='alice', password='brand-new-pass')

    def test_bad_token_redirects_to_forgot(self, client, db):
        response = client.get('/auth/reset/not-a-token/')
        assert response.status_code == 302
        assert response.url == '/auth/forgot/'
