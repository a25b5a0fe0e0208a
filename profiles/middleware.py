from .routing import resolve, PUBLIC_PROFILE
from .views import render_public_profile


class TenantRoutingMiddleware:
    """Serve public profiles for custom-domain hosts and vanity paths."""

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        if request.method in ('GET', 'HEAD'):
            resolution = resolve(request.get_host(), request.path_info)
            if resolution.kind == PUBLIC_PROFILE:
                return render_public_profile(request, resolution.user)

        return self.get_response(request)
