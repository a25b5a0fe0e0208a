"""
Tenant resolution by host or first path segment, and the write-side guard
for vanity paths and custom domains.

Both sides use core.constants.RESERVED_SEGMENTS, so a segment the resolver
hands to the application can never be stored as a vanity path.
"""
import logging
import re
from collections import namedtuple
from django.conf import settings
from django.db import IntegrityError, transaction
from django.http.request import split_domain_port
from core.constants import RESERVED_SEGMENTS
from core.exceptions import ConflictError, ValidationError
from .models import UserRoute

logger = logging.getLogger(__name__)

PUBLIC_PROFILE = 'public_profile'
RESERVED = 'reserved'
APPLICATION = 'application'

Resolution = namedtuple('Resolution', ['kind', 'user'])

VANITY_RE = re.compile(r'^[a-z0-9-]+$')
VANITY_MAX_LENGTH = 64
DOMAIN_RE = re.compile(
    r'^(?=.{1,253}$)[a-z0-9](?:[a-z0-9-]{0,61}[a-z0-9])?(?:\.[a-z0-9](?:[a-z0-9-]{0,61}[a-z0-9])?)+$'
)


def path_segments(path):
    return [s for s in (path or '').split('/') if s]


def first_segment(path):
    segments = path_segments(path)
    return segments[0].lower() if segments else ''


def normalize_host(host):
    """Lowercase host without port; '' when the header is unusable."""
    domain, _ = split_domain_port(host or '')
    return domain.rstrip('.')


def is_platform_host(domain):
    return domain in {normalize_host(h) for h in settings.PLATFORM_HOSTS}


def resolve(host, path):
    """
    Decide whether a request targets a tenant's public profile.

    1. A custom domain match on the host serves the profile at any path
       whose first segment is not reserved. Platform hosts never match.
    2. A reserved first segment goes to the application.
    3. A single-segment path matching a vanity path serves that profile.
    4. Everything else falls through to the application.
    """
    segment = first_segment(path)

    domain = normalize_host(host)
    if domain and not is_platform_host(domain):
        route = UserRoute.objects.select_related('user').filter(custom_domain=domain).first()
        if route is not None and segment not in RESERVED_SEGMENTS:
            return Resolution(PUBLIC_PROFILE, route.user)

    if segment in RESERVED_SEGMENTS:
        return Resolution(RESERVED, None)

    if segment and len(path_segments(path)) == 1:
        route = UserRoute.objects.select_related('user').filter(vanity_path=segment).first()
        if route is not None:
            return Resolution(PUBLIC_PROFILE, route.user)

    return Resolution(APPLICATION, None)


def clean_vanity_path(value):
    """Normalize a submitted vanity path. Returns None for blank input."""
    vanity = str(value or '').strip().lower()
    if not vanity:
        return None
    if not VANITY_RE.match(vanity):
        raise ValidationError('Vanity path can only contain a-z, 0-9, and hyphen')
    if len(vanity) > VANITY_MAX_LENGTH:
        raise ValidationError(f'Vanity path must be {VANITY_MAX_LENGTH} characters or fewer')
    if vanity in RESERVED_SEGMENTS:
        raise ValidationError('This vanity path is reserved. Please choose another.')
    return vanity


def clean_custom_domain(value):
    """Normalize a submitted custom domain. Returns None for blank input."""
    raw = str(value or '').strip().lower()
    if not raw:
        return None
    domain = normalize_host(raw)
    if not domain or not DOMAIN_RE.match(domain):
        raise ValidationError('Enter a valid domain name, e.g. me.example.com')
    if is_platform_host(domain):
        raise ValidationError('This domain belongs to the platform. Please use your own domain.')
    return domain


def set_routes(user, vanity_path=None, custom_domain=None):
    """
    Replace the user's vanity path and custom domain together.

    Blank values clear the field. Taken values raise ConflictError and leave
    every routing row untouched; the unique constraints on UserRoute stay
    the source of truth when two writers race past the pre-check.
    """
    vanity = clean_vanity_path(vanity_path)
    domain = clean_custom_domain(custom_domain)

    others = UserRoute.objects.exclude(user=user)
    if vanity and others.filter(vanity_path=vanity).exists():
        raise ConflictError('Vanity path already taken')
    if domain and others.filter(custom_domain=domain).exists():
        raise ConflictError('Custom domain already in use')

    try:
        with transaction.atomic():
            route, _ = UserRoute.objects.update_or_create(
                user=user,
                defaults={'vanity_path': vanity, 'custom_domain': domain},
            )
    except IntegrityError as exc:
        logger.warning(f"Route upsert conflict for user {user.pk}: {exc}")
        raise ConflictError('Vanity path or custom domain already taken') from exc

    logger.info(f"Routes saved for user {user.pk}: vanity={vanity} domain={domain}")
    return route
