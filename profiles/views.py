import logging
from django.contrib import messages
from django.contrib.auth import get_user_model
from django.contrib.auth.mixins import LoginRequiredMixin
from django.http import Http404, HttpResponseRedirect
from django.shortcuts import render, redirect
from django.views import View
from core.exceptions import ConflictError, NotFoundError, ValidationError
from core.utils import get_client_ip, get_user_agent
from users.session_utils import list_active_sessions, revoke_session
from . import ordering
from .click_utils import record_link_visit
from .forms import (
    ProfileForm, LinkForm, QuickAddLinkForm, ProjectForm, ExperienceForm, ContactForm, RouteForm,
)
from .models import Profile, UserRoute, Link, Project, Experience, Contact, ORDERED_SECTIONS, SECTIONS
from .routing import set_routes

User = get_user_model()
logger = logging.getLogger(__name__)


def public_profile_context(user):
    profile = Profile.objects.filter(user=user).first()
    return {
        'owner': user,
        'username': user.username,
        'profile': profile,
        'links': list(Link.objects.filter(user=user).order_by('position', 'label')),
        'projects': list(Project.objects.filter(user=user).order_by('position', 'title')),
        'experiences': list(Experience.objects.filter(user=user).order_by('position', '-start_date')),
        'contacts': list(Contact.objects.filter(user=user).order_by('label')),
        'profile_theme': profile.theme if profile else None,
        'profile_custom_css': profile.custom_css if profile else None,
    }


def render_public_profile(request, user):
    """Render a tenant's public page. Used by every public entry point."""
    return render(request, 'public/profile.html', public_profile_context(user))


class PublicProfileView(View):
    """Public profile by exact username, e.g. /u/jdoe/"""

    def get(self, request, username):
        user = User.objects.filter(username=username.lower(), is_active=True).first()
        if user is None:
            raise Http404('User not found')
        return render_public_profile(request, user)


class LinkVisitView(View):
    """Count a click and redirect to the link's URL."""

    def get(self, request, link_id):
        try:
            url = record_link_visit(
                link_id,
                ip=get_client_ip(request),
                user_agent=get_user_agent(request),
            )
        except NotFoundError:
            raise Http404('Link not found')
        return HttpResponseRedirect(url)


class DashboardView(LoginRequiredMixin, View):
    """Owner's editing hub"""
    template_name = 'dashboard/index.html'

    def get(self, request):
        user = request.user
        profile, _ = Profile.objects.get_or_create(user=user)
        route, _ = UserRoute.objects.get_or_create(user=user)

        return render(request, self.template_name, {
            'profile': profile,
            'route': route,
            'links': Link.objects.filter(user=user).order_by('position', 'label'),
            'projects': Project.objects.filter(user=user).order_by('position', 'title'),
            'experiences': Experience.objects.filter(user=user).order_by('position', '-start_date'),
            'contacts': Contact.objects.filter(user=user).order_by('label'),
            'sessions': list_active_sessions(user),
            'current_session_key': request.session.session_key,
            'profile_form': ProfileForm(instance=profile),
            'link_form': LinkForm(),
            'quick_add_form': QuickAddLinkForm(),
            'project_form': ProjectForm(),
            'experience_form': ExperienceForm(),
            'contact_form': ContactForm(),
            'route_form': RouteForm(initial={
                'vanity_path': route.vanity_path or '',
                'custom_domain': route.custom_domain or '',
            }),
        })


def flash_form_errors(request, form):
    for errors in form.errors.values():
        for error in errors:
            messages.error(request, error)


class ProfileUpdateView(LoginRequiredMixin, View):

    def post(self, request):
        profile, _ = Profile.objects.get_or_create(user=request.user)
        form = ProfileForm(request.POST, request.FILES, instance=profile)
        if form.is_valid():
            form.save()
            messages.success(request, 'Profile updated')
        else:
            flash_form_errors(request, form)
        return redirect('dashboard')


class SectionCreateView(LoginRequiredMixin, View):
    """Create one item in a profile section for the current user."""
    form_class = None
    success_message = ''

    def post(self, request):
        form = self.form_class(request.POST)
        if not form.is_valid():
            flash_form_errors(request, form)
            return redirect('dashboard')

        model = form._meta.model
        if model in ORDERED_SECTIONS.values():
            ordering.append(model, request.user, **form.cleaned_data)
        else:
            model.objects.create(user=request.user, **form.cleaned_data)
        messages.success(request, self.success_message)
        return redirect('dashboard')


class LinkCreateView(SectionCreateView):
    form_class = LinkForm
    success_message = 'Link added'


class ProjectCreateView(SectionCreateView):
    form_class = ProjectForm
    success_message = 'Project added'


class ExperienceCreateView(SectionCreateView):
    form_class = ExperienceForm
    success_message = 'Experience added'


class ContactCreateView(SectionCreateView):
    form_class = ContactForm
    success_message = 'Contact added'


class QuickAddLinkView(LoginRequiredMixin, View):
    """Add a social link from a platform + handle pair."""

    def post(self, request):
        form = QuickAddLinkForm(request.POST)
        if not form.is_valid():
            messages.error(request, 'Invalid quick-add submission')
            return redirect('dashboard')

        fields = form.link_fields()
        ordering.append(Link, request.user, **fields)
        messages.success(request, f"{fields['label']} link added")
        return redirect('dashboard')


class SectionItemDeleteView(LoginRequiredMixin, View):
    """Delete an owned item. Unknown or foreign ids are a silent no-op."""

    def post(self, request, section, pk):
        model = SECTIONS.get(section)
        if model is None:
            raise Http404('Unknown section')
        model.objects.filter(pk=pk, user=request.user).delete()
        messages.success(request, f'{model._meta.verbose_name.capitalize()} removed')
        return redirect('dashboard')


class SectionItemMoveView(LoginRequiredMixin, View):
    """Accessible single-step move: POST .../move/?dir=up|down"""

    def post(self, request, section, pk):
        model = ORDERED_SECTIONS.get(section)
        if model is None:
            raise Http404('Unknown section')
        direction = (request.GET.get('dir') or request.POST.get('dir') or '').lower()
        ordering.move(model, request.user, pk, direction)
        return redirect('dashboard')


class RoutesUpdateView(LoginRequiredMixin, View):
    """Save vanity path and custom domain together."""

    def post(self, request):
        form = RouteForm(request.POST)
        if not form.is_valid():
            flash_form_errors(request, form)
            return redirect('dashboard')

        try:
            set_routes(
                request.user,
                vanity_path=form.cleaned_data['vanity_path'],
                custom_domain=form.cleaned_data['custom_domain'],
            )
        except (ValidationError, ConflictError) as exc:
            messages.error(request, exc.message)
            return redirect('dashboard')

        messages.success(request, 'Routing settings saved')
        return redirect('dashboard')


class SessionRevokeView(LoginRequiredMixin, View):

    def post(self, request, session_key):
        was_current = session_key == request.session.session_key
        revoked = revoke_session(request, session_key)
        if revoked and was_current:
            return redirect('login')
        if revoked:
            messages.success(request, 'Session revoked')
        return redirect('dashboard')
