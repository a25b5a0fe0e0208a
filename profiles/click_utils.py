import logging
from django.db import transaction
from core.exceptions import NotFoundError
from .models import Link, LinkClick

logger = logging.getLogger(__name__)


def record_link_visit(link_id, ip=None, user_agent=None):
    """
    Count a public visit to a link and return its destination URL.

    The link row is locked for the whole transaction, so it cannot be
    deleted between the lookup and the writes. The counter increment and the
    click row commit together, keeping the counter equal to the click rows.
    """
    with transaction.atomic():
        link = Link.objects.select_for_update().filter(pk=link_id).first()
        if link is None:
            logger.warning(f"Visit for unknown link {link_id}")
            raise NotFoundError('Link not found')

        link.increment_clicks()
        LinkClick.objects.create(
            link=link,
            user_id=link.user_id,
            ip=ip,
            user_agent=user_agent,
        )

    return link.url
