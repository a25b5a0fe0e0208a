import logging
from django.conf import settings
from django.contrib.auth import get_user_model
from django.core.mail import send_mail
from django.db import transaction
from django.template.loader import render_to_string
from django.urls import reverse
from core.exceptions import AuthError
from .models import PasswordResetToken

User = get_user_model()
logger = logging.getLogger(__name__)

INVALID_TOKEN_MESSAGE = 'Invalid or expired reset link'


def issue_reset_token(email, base_url=''):
    """
    Create a reset token for the account with this email and mail the link.

    Unknown emails are ignored so the response never reveals whether an
    account exists. Returns the token or None.
    """
    normalized = str(email or '').strip().lower()
    user = User.objects.filter(email=normalized).first()
    if user is None:
        return None

    reset_token = PasswordResetToken.objects.create(
        token=PasswordResetToken.generate_token(),
        user=user,
    )
    reset_url = base_url + reverse('reset_password', kwargs={'token': reset_token.token})

    context = {
        'user': user,
        'reset_url': reset_url,
        'expiry_minutes': settings.PASSWORD_RESET_TOKEN_MINUTES,
    }
    message = render_to_string('auth/emails/password-reset-email.txt', context)

    send_mail(
        subject='Reset your Who.Me password',
        message=message,
        from_email=settings.DEFAULT_FROM_EMAIL,
        recipient_list=[user.email],
        fail_silently=False,
    )
    logger.info(f"Password reset token issued for user {user.pk}")
    return reset_token


def check_reset_token(token):
    """Return the token row if it can still be used, else raise AuthError."""
    reset_token = PasswordResetToken.objects.filter(token=token).first()
    if reset_token is None or not reset_token.is_valid:
        raise AuthError(INVALID_TOKEN_MESSAGE)
    return reset_token


def consume_reset_token(token, password):
    """Set a new password and burn the token in one transaction."""
    with transaction.atomic():
        reset_token = PasswordResetToken.objects.select_for_update().filter(token=token).first()
        if reset_token is None or not reset_token.is_valid:
            raise AuthError(INVALID_TOKEN_MESSAGE)

        user = reset_token.user
        user.set_password(password)
        user.save(update_fields=['password'])

        reset_token.used = True
        reset_token.save(update_fields=['used'])

    logger.info(f"Password reset completed for user {user.pk}")
    return user
