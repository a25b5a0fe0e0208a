"""
URL configuration for whome project.

Vanity paths and custom domains are resolved by
profiles.middleware.TenantRoutingMiddleware before these patterns run.
"""
from django.contrib import admin
from django.urls import path, include
from django.conf import settings
from django.conf.urls.static import static
from profiles.views import PublicProfileView, LinkVisitView

urlpatterns = [
    path('admin/', admin.site.urls),
    path('', include('core.urls')),
    path('auth/', include('users.urls')),
    path('dashboard/', include('profiles.urls')),

    # Public profile routes
    path('u/<str:username>/', PublicProfileView.as_view(), name='public_profile'),
    path('l/<uuid:link_id>/', LinkVisitView.as_view(), name='link_visit'),
]

if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
