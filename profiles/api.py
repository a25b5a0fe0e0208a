from django.http import Http404
from rest_framework.response import Response
from rest_framework.views import APIView
from . import ordering
from .models import ORDERED_SECTIONS


class SectionReorderAPIView(APIView):
    """
    Bulk reorder: POST {"order": [id, ...]}.

    Always answers {"ok": true}; empty or malformed lists and ids owned by
    someone else simply change nothing.
    """

    def post(self, request, section):
        model = ORDERED_SECTIONS.get(section)
        if model is None:
            raise Http404('Unknown section')

        data = request.data
        if hasattr(data, 'getlist'):
            order = data.getlist('order')
        elif isinstance(data, dict):
            order = data.get('order')
        else:
            order = None

        updated = ordering.reorder(model, request.user, order)
        return Response({'ok': True, 'updated': updated})
