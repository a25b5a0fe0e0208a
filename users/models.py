import uuid
import secrets
from datetime import timedelta
from django.conf import settings
from django.db import models
from django.contrib.auth.models import AbstractBaseUser, PermissionsMixin
from django.core.validators import RegexValidator
from django.utils import timezone
from .managers import CustomUserManager


username_validator = RegexValidator(
    regex=r'^[a-z0-9_]+$',
    message='Username may only contain lowercase letters, numbers, and underscores.',
)


class CustomUser(AbstractBaseUser, PermissionsMixin):
    """User identified by a lowercase username, with a unique lowercase email."""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    username = models.CharField(
        max_length=30,
        unique=True,
        validators=[username_validator],
        help_text='Lowercase letters, numbers, and underscores only. 3-30 characters.',
    )
    email = models.EmailField(unique=True)
    is_active = models.BooleanField(default=True)
    is_staff = models.BooleanField(default=False)
    created_at = models.DateTimeField(default=timezone.now)

    USERNAME_FIELD = 'username'
    EMAIL_FIELD = 'email'
    REQUIRED_FIELDS = ['email']

    objects = CustomUserManager()

    def __str__(self):
        return self.username

    def get_full_name(self):
        profile = getattr(self, 'profile', None)
        return (profile and profile.full_name) or self.username

    def get_short_name(self):
        return self.username


def default_reset_expiry():
    return timezone.now() + timedelta(minutes=settings.PASSWORD_RESET_TOKEN_MINUTES)


class PasswordResetToken(models.Model):
    """Single-use password reset token"""
    token = models.CharField(max_length=64, primary_key=True)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='reset_tokens'
    )
    expires_at = models.DateTimeField(default=default_reset_expiry)
    used = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return f"Reset token for {self.user.username}"

    @property
    def is_expired(self):
        return timezone.now() > self.expires_at

    @property
    def is_valid(self):
        return not self.is_expired and not self.used

    @classmethod
    def generate_token(cls):
        return secrets.token_hex(32)

    class Meta:
        ordering = ['-created_at']


class LoginLog(models.Model):
    """Append-only record of login attempts against an existing account."""
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='login_logs'
    )
    ts = models.DateTimeField(auto_now_add=True)
    ip = models.GenericIPAddressField(null=True, blank=True)
    user_agent = models.CharField(max_length=300, null=True, blank=True)
    success = models.BooleanField()

    def __str__(self):
        outcome = 'ok' if self.success else 'failed'
        return f"Login {outcome}: {self.user.username} at {self.ts}"

    class Meta:
        ordering = ['-ts']


class UserSession(models.Model):
    """Queryable view of a session held in the session store."""
    session_key = models.CharField(max_length=40, primary_key=True)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='tracked_sessions'
    )
    user_agent = models.CharField(max_length=300, null=True, blank=True)
    ip = models.GenericIPAddressField(null=True, blank=True)
    created_at = models.DateTimeField(default=timezone.now)
    last_seen = models.DateTimeField(default=timezone.now)
    active = models.BooleanField(default=True)

    def __str__(self):
        return f"Session {self.session_key[:8]}... ({self.user.username})"

    class Meta:
        ordering = ['-last_seen']
        indexes = [
            models.Index(fields=['user', 'active'], name='users_sess_user_active_idx'),
        ]
