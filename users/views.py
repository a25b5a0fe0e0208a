import logging

from django.shortcuts import render, redirect
from django.views import View
from django.contrib.auth import login, authenticate, get_user_model
from django.contrib import messages
from django.utils.http import url_has_allowed_host_and_scheme
from core.exceptions import AuthError, ConflictError
from core.utils import get_client_ip, get_user_agent, honeypot_tripped
from .forms import RegisterForm, LoginForm, ForgotPasswordForm, ResetPasswordForm
from .models import LoginLog
from .reset_utils import issue_reset_token, check_reset_token, consume_reset_token
from .session_utils import touch_session, end_current_session

User = get_user_model()
logger = logging.getLogger(__name__)


def bad_request(request):
    return render(request, '404.html', {'title': 'Bad Request'}, status=400)


class RegisterView(View):
    """User registration view"""
    template_name = 'auth/register.html'

    def get(self, request):
        if request.user.is_authenticated:
            return redirect('dashboard')
        return render(request, self.template_name, {'form': RegisterForm()})

    def post(self, request):
        if honeypot_tripped(request):
            return bad_request(request)

        form = RegisterForm(request.POST)
        if form.is_valid():
            try:
                user = form.save()
            except ConflictError as exc:
                messages.error(request, exc.message)
                return render(request, self.template_name, {'form': form})

            logger.info(f"Registered user {user.pk} ({user.username})")
            messages.success(request, 'Registration successful. Please log in.')
            return redirect('login')

        return render(request, self.template_name, {'form': form})


class LoginView(View):
    """User login view"""
    template_name = 'auth/login.html'

    def get(self, request):
        if request.user.is_authenticated:
            return redirect('dashboard')
        return render(request, self.template_name, {'form': LoginForm()})

    def post(self, request):
        if honeypot_tripped(request):
            return bad_request(request)

        form = LoginForm(request.POST)
        if form.is_valid():
            username = form.cleaned_data['username']
            password = form.cleaned_data['password']
            ip = get_client_ip(request)
            user_agent = get_user_agent(request)

            user = authenticate(request, username=username, password=password)
            if user is not None:
                login(request, user)
                LoginLog.objects.create(user=user, ip=ip, user_agent=user_agent, success=True)
                touch_session(request)
                logger.info(f"Login succeeded for user {user.pk}")

                next_url = request.GET.get('next', '')
                # Validate redirect URL to prevent open redirect attacks
                if next_url and url_has_allowed_host_and_scheme(next_url, allowed_hosts={request.get_host()}):
                    return redirect(next_url)
                return redirect('dashboard')

            known = User.objects.filter(username=username).first()
            if known is not None:
                LoginLog.objects.create(user=known, ip=ip, user_agent=user_agent, success=False)
            logger.warning(f"Login failed for username {username!r} from {ip}")
            messages.error(request, 'Invalid username or password')

        return render(request, self.template_name, {'form': form})


class LogoutView(View):
    """User logout view"""

    def post(self, request):
        end_current_session(request)
        messages.success(request, 'You have been logged out')
        return redirect('home')

    def get(self, request):
        return redirect('home')


class ForgotPasswordView(View):
    template_name = 'auth/forgot.html'
    sent_message = 'If that email exists, a reset link has been sent.'

    def get(self, request):
        return render(request, self.template_name, {'form': ForgotPasswordForm()})

    def post(self, request):
        if honeypot_tripped(request):
            return bad_request(request)

        form = ForgotPasswordForm(request.POST)
        if not form.is_valid():
            return render(request, self.template_name, {'form': form})

        try:
            issue_reset_token(form.cleaned_data['email'], base_url=request.build_absolute_uri('/')[:-1])
        except Exception:
            logger.exception('Failed to send password reset email')
            messages.error(request, 'Failed to send reset email. Please try again.')
            return redirect('forgot_password')

        messages.success(request, self.sent_message)
        return redirect('forgot_password')


class ResetPasswordView(View):
    template_name = 'auth/reset.html'

    def get(self, request, token):
        try:
            check_reset_token(token)
        except AuthError as exc:
            messages.error(request, exc.message)
            return redirect('forgot_password')
        return render(request, self.template_name, {'form': ResetPasswordForm(), 'token': token})

    def post(self, request, token):
        if honeypot_tripped(request):
            return bad_request(request)

        try:
            check_reset_token(token)
        except AuthError as exc:
            messages.error(request, exc.message)
            return redirect('forgot_password')

        form = ResetPasswordForm(request.POST)
        if not form.is_valid():
            return render(request, self.template_name, {'form': form, 'token': token})

        try:
            consume_reset_token(token, form.cleaned_data['password'])
        except AuthError as exc:
            messages.error(request, exc.message)
            return redirect('forgot_password')

        messages.success(request, 'Password has been reset. You can now log in.')
        return redirect('login')
