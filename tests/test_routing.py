"""Tenant resolution and the vanity path / custom domain guard."""

import pytest

from core.constants import RESERVED_SEGMENTS
from core.exceptions import ConflictError, ValidationError
from profiles import ordering
from profiles.models import Link, UserRoute
from profiles.routing import (
    APPLICATION, PUBLIC_PROFILE, RESERVED, normalize_host, resolve, set_routes,
)


@pytest.mark.django_db
class TestResolve:

    def test_vanity_path_resolves_single_segment(self, alice):
        set_routes(alice, vanity_path='al')

        resolution = resolve('who.me', '/al')
        assert resolution.kind == PUBLIC_PROFILE
        assert resolution.user == alice

        assert resolve('who.me', '/al/').kind == PUBLIC_PROFILE
        assert resolve('who.me', '/AL').user == alice

    def test_vanity_path_ignores_deeper_paths(self, alice):
        set_routes(alice, vanity_path='al')
        assert resolve('who.me', '/al/anything').kind == APPLICATION

    @pytest.mark.parametrize('path', ['/auth/login/', '/dashboard/', '/u/alice/', '/admin/', '/static/x.css'])
    def test_reserved_segments(self, path, db):
        assert resolve('who.me', path).kind == RESERVED

    def test_unknown_path_goes_to_application(self, db):
        assert resolve('who.me', '/nobody').kind == APPLICATION
        assert resolve('who.me', '/').kind == APPLICATION

    def test_custom_domain_serves_any_non_reserved_path(self, alice):
        set_routes(alice, custom_domain='Alice.Example.com')

        for path in ('/', '/about', '/a/b/c'):
            resolution = resolve('alice.example.com:8443', path)
            assert resolution.kind == PUBLIC_PROFILE
            assert resolution.user == alice

        assert resolve('alice.example.com', '/auth/login/').kind == RESERVED

    def test_normalize_host(self):
        assert normalize_host('Me.Example.COM:80') == 'me.example.com'
        assert normalize_host('me.example.com.') == 'me.example.com'
        assert normalize_host('') == ''


@pytest.mark.django_db
class TestSetRoutes:

    def test_values_are_normalized(self, alice):
        route = set_routes(alice, vanity_path='  Al-Ice ', custom_domain='ME.example.com')
        assert route.vanity_path == 'al-ice'
        assert route.custom_domain == 'me.example.com'

    @pytest.mark.parametrize('vanity', ['has space', 'under_score', 'a/b', 'x' * 65])
    def test_invalid_vanity_path(self, alice, vanity):
        with pytest.raises(ValidationError):
            set_routes(alice, vanity_path=vanity)
        assert UserRoute.objects.get(user=alice).vanity_path is None

    @pytest.mark.parametrize('segment', sorted(RESERVED_SEGMENTS))
    def test_reserved_vanity_path_is_rejected(self, alice, segment):
        with pytest.raises(ValidationError):
            set_routes(alice, vanity_path=segment.upper())

    @pytest.mark.parametrize('domain', ['localhost', 'no spaces.com', '-bad.example.com', 'http://x.com/'])
    def test_invalid_custom_domain(self, alice, domain):
        with pytest.raises(ValidationError):
            set_routes(alice, custom_domain=domain)

    def test_blank_clears_both_fields(self, alice):
        set_routes(alice, vanity_path='al', custom_domain='al.example.com')
        route = set_routes(alice, vanity_path='', custom_domain='  ')
        assert route.vanity_path is None
        assert route.custom_domain is None

    def test_saving_own_values_again_is_allowed(self, alice):
        set_routes(alice, vanity_path='al', custom_domain='al.example.com')
        route = set_routes(alice, vanity_path='al', custom_domain='al.example.com')
        assert route.vanity_path == 'al'

    def test_taken_vanity_path_conflicts(self, alice, bob):
        set_routes(alice, vanity_path='al')
        set_routes(bob, vanity_path='bobby', custom_domain='bob.example.com')

        with pytest.raises(ConflictError) as excinfo:
            set_routes(bob, vanity_path='AL', custom_domain='new.example.com')

        assert excinfo.value.message == 'Vanity path already taken'
        route = UserRoute.objects.get(user=bob)
        assert route.vanity_path == 'bobby'
        assert route.custom_domain == 'bob.example.com'

    def test_taken_custom_domain_conflicts(self, alice, bob):
        set_routes(alice, custom_domain='al.example.com')
        with pytest.raises(ConflictError) as excinfo:
            set_routes(bob, custom_domain='al.example.com')
        assert excinfo.value.message == 'Custom domain already in use'

    def test_platform_host_is_rejected_as_custom_domain(self, alice, bob, settings):
        settings.PLATFORM_HOSTS = ['who.me', 'www.who.me']
        set_routes(alice, vanity_path='al')

        for domain in ('who.me', 'WWW.Who.Me.', 'who.me:443'):
            with pytest.raises(ValidationError):
                set_routes(bob, custom_domain=domain)

        assert UserRoute.objects.get(user=bob).custom_domain is None
        assert resolve('who.me', '/al').user == alice

    def test_stored_platform_host_never_shadows_main_site(self, alice, bob, settings):
        settings.PLATFORM_HOSTS = ['who.me']
        set_routes(alice, vanity_path='al')
        UserRoute.objects.filter(user=bob).update(custom_domain='who.me')

        assert resolve('who.me', '/').kind == APPLICATION
        assert resolve('who.me', '/al').user == alice

    def test_many_users_may_have_no_routes(self, alice, bob):
        set_routes(alice)
        set_routes(bob)
        assert UserRoute.objects.filter(vanity_path__isnull=True).count() == 2


@pytest.mark.django_db
class TestPublicPages:

    def test_custom_domain_host_serves_profile(self, client, alice):
        set_routes(alice, custom_domain='alice.example.com')

        response = client.get('/anything/here', HTTP_HOST='alice.example.com')
        assert response.status_code == 200
        assert '@alice' in response.content.decode()

        response = client.get('/auth/login/', HTTP_HOST='alice.example.com')
        assert response.status_code == 200
        assert 'name="password"' in response.content.decode()

    def test_unknown_username_is_404(self, client, db):
        assert client.get('/u/ghost/').status_code == 404

    def test_username_lookup_is_case_insensitive(self, client, alice):
        assert client.get('/u/ALICE/').status_code == 200

    def test_routes_view_reports_conflict(self, alice, bob_client, bob):
        set_routes(alice, vanity_path='al')

        response = bob_client.post('/dashboard/routes/', {'vanity_path': 'al', 'custom_domain': ''}, follow=True)

        assert 'Vanity path already taken' in response.content.decode()
        assert UserRoute.objects.get(user=bob).vanity_path is None

    def test_alice_scenario(self, client, alice, bob_client, bob):
        ordering.append(Link, alice, label='GitHub', url='https://github.com/alice')
        ordering.append(Link, alice, label='Blog', url='https://blog.alice.dev')
        set_routes(alice, vanity_path='al')

        page = client.get('/u/alice/').content.decode()
        assert page.index('GitHub') < page.index('Blog')

        response = client.get('/al')
        assert response.status_code == 200
        assert '@alice' in response.content.decode()

        bob_client.post('/dashboard/routes/', {'vanity_path': 'al', 'custom_domain': ''})
        assert UserRoute.objects.get(user=bob).vanity_path is None
        assert client.get('/al').context['owner'] == alice

    def test_main_site_survives_platform_domain_claim(self, client, alice, bob_client, bob, settings):
        settings.PLATFORM_HOSTS = ['who.me']
        set_routes(alice, vanity_path='al')

        response = bob_client.post('/dashboard/routes/', {'vanity_path': '', 'custom_domain': 'who.me'}, follow=True)
        assert 'This domain belongs to the platform' in response.content.decode()

        assert client.get('/al', HTTP_HOST='who.me').context['owner'] == alice
        home = client.get('/', HTTP_HOST='who.me')
        assert home.status_code == 200
        assert '@bob' not in home.content.decode()
