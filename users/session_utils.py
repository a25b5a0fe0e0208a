"""
Tracking of authenticated sessions on top of Django's session store.

The store owns session state; UserSession rows are the queryable view used
by the dashboard to list and revoke sessions.
"""
import logging
from importlib import import_module
from django.conf import settings
from django.contrib.auth import logout
from django.utils import timezone
from core.exceptions import ExternalServiceError
from core.utils import get_client_ip, get_user_agent
from .models import UserSession

logger = logging.getLogger(__name__)


def get_session_store():
    engine = import_module(settings.SESSION_ENGINE)
    return engine.SessionStore()


def touch_session(request):
    """
    Record or refresh the tracked session for an authenticated request.

    Returns False when the session key was revoked before. Revoked keys are
    never reactivated; the caller is expected to log the request out.
    """
    session_key = request.session.session_key
    if not session_key:
        return True

    now = timezone.now()
    record, created = UserSession.objects.get_or_create(
        session_key=session_key,
        defaults={
            'user': request.user,
            'user_agent': get_user_agent(request),
            'ip': get_client_ip(request),
            'created_at': now,
            'last_seen': now,
            'active': True,
        },
    )
    if created:
        return True
    if not record.active or record.user_id != request.user.pk:
        return False

    UserSession.objects.filter(session_key=session_key).update(last_seen=now)
    return True


def list_active_sessions(user):
    """Active sessions for a user, most recently seen first."""
    return UserSession.objects.filter(user=user, active=True).order_by('-last_seen')


def destroy_stored_session(session_key):
    """Delete a session's persisted state from the session store."""
    try:
        get_session_store().delete(session_key)
    except Exception as exc:
        raise ExternalServiceError(f'Session store could not destroy session {session_key[:8]}...') from exc


def revoke_session(request, session_key):
    """
    Revoke one of the caller's sessions.

    The local flag is cleared first and stays cleared even if the session
    store fails; store failures are logged. Revoking the current session
    logs the caller out, which issues a fresh anonymous session key.
    Returns False when the key does not belong to the caller.
    """
    updated = UserSession.objects.filter(
        session_key=session_key,
        user=request.user,
    ).update(active=False)
    if not updated:
        return False

    try:
        destroy_stored_session(session_key)
    except ExternalServiceError as exc:
        logger.exception(exc.message)

    logger.info(f"Session {session_key[:8]}... revoked by user {request.user.pk}")

    if session_key == request.session.session_key:
        logout(request)
    return True


def end_current_session(request):
    """Mark the caller's current session inactive and log out."""
    session_key = request.session.session_key
    if session_key and request.user.is_authenticated:
        UserSession.objects.filter(session_key=session_key, user=request.user).update(active=False)
    logout(request)
