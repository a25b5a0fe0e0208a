import logging
from django.contrib.auth import logout
from .session_utils import touch_session

logger = logging.getLogger(__name__)


class SessionTrackingMiddleware:
    """Refresh the tracked session on every authenticated request."""

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        user = getattr(request, 'user', None)
        if user is not None and user.is_authenticated:
            if not touch_session(request):
                # Revoked earlier but still present in the store
                logger.info(f"Rejecting revoked session for user {user.pk}")
                logout(request)

        return self.get_response(request)
