import ipaddress
import logging

logger = logging.getLogger(__name__)

# Hidden form field that real users never fill in
HONEYPOT_FIELD = 'website'


def get_client_ip(request):
    """Extract client IP from request, handling proxies."""
    x_forwarded_for = request.META.get('HTTP_X_FORWARDED_FOR')
    if x_forwarded_for:
        ip = x_forwarded_for.split(',')[0].strip()
    else:
        ip = request.META.get('REMOTE_ADDR')
    try:
        return str(ipaddress.ip_address((ip or '').strip()))
    except ValueError:
        return None


def get_user_agent(request):
    """User agent header trimmed to the stored column size, or None."""
    return request.META.get('HTTP_USER_AGENT', '')[:300] or None


def honeypot_tripped(request):
    """True when a bot filled in the hidden honeypot field."""
    if request.POST.get(HONEYPOT_FIELD):
        logger.warning(f"Honeypot tripped on {request.path} from {get_client_ip(request)}")
        return True
    return False
