from django.urls import path
from . import views
from .api import SectionReorderAPIView

urlpatterns = [
    path('', views.DashboardView.as_view(), name='dashboard'),
    path('profile/', views.ProfileUpdateView.as_view(), name='profile_update'),
    path('routes/', views.RoutesUpdateView.as_view(), name='routes_update'),

    path('links/', views.LinkCreateView.as_view(), name='link_create'),
    path('links/quick-add/', views.QuickAddLinkView.as_view(), name='link_quick_add'),
    path('projects/', views.ProjectCreateView.as_view(), name='project_create'),
    path('experiences/', views.ExperienceCreateView.as_view(), name='experience_create'),
    path('contacts/', views.ContactCreateView.as_view(), name='contact_create'),

    # <section> is one of links, projects, experiences (and contacts for delete)
    path('<str:section>/reorder/', SectionReorderAPIView.as_view(), name='section_reorder'),
    path('<str:section>/<uuid:pk>/move/', views.SectionItemMoveView.as_view(), name='section_move'),
    path('<str:section>/<uuid:pk>/delete/', views.SectionItemDeleteView.as_view(), name='section_delete'),

    path('sessions/<str:session_key>/revoke/', views.SessionRevokeView.as_view(), name='session_revoke'),
]
