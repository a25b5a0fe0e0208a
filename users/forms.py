import re
from django import forms
from django.contrib.auth import get_user_model
from django.contrib.auth.password_validation import validate_password
from django.db import IntegrityError
from core.constants import RESERVED_SEGMENTS
from core.exceptions import ConflictError

User = get_user_model()

TAKEN_MESSAGE = 'Username or email already taken'


class PasswordPairMixin:
    """Validate that password and confirm_password match."""

    def clean(self):
        cleaned_data = super().clean()
        password = cleaned_data.get('password')
        confirm_password = cleaned_data.get('confirm_password')

        if password and confirm_password and password != confirm_password:
            raise forms.ValidationError('Passwords do not match')
        if password:
            validate_password(password)

        return cleaned_data


class RegisterForm(PasswordPairMixin, forms.Form):
    """User registration form"""
    username = forms.CharField(
        max_length=30,
        widget=forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'Username'})
    )
    email = forms.EmailField(
        widget=forms.EmailInput(attrs={'class': 'form-control', 'placeholder': 'Email Address'})
    )
    password = forms.CharField(
        widget=forms.PasswordInput(attrs={'class': 'form-control', 'placeholder': 'Password'})
    )
    confirm_password = forms.CharField(
        widget=forms.PasswordInput(attrs={'class': 'form-control', 'placeholder': 'Confirm Password'})
    )

    def clean_username(self):
        username = self.cleaned_data.get('username', '').strip().lower()
        if len(username) < 3:
            raise forms.ValidationError('Username must be at least 3 characters.')
        if not re.match(r'^[a-z0-9_]+$', username):
            raise forms.ValidationError('Username may only contain letters, numbers, and underscores.')
        if username in RESERVED_SEGMENTS:
            raise forms.ValidationError('This username is reserved. Please choose another.')
        return username

    def clean_email(self):
        return self.cleaned_data.get('email', '').strip().lower()

    def clean(self):
        cleaned_data = super().clean()
        username = cleaned_data.get('username')
        email = cleaned_data.get('email')
        if username and email:
            if User.objects.filter(username=username).exists() or User.objects.filter(email=email).exists():
                raise forms.ValidationError(TAKEN_MESSAGE)
        return cleaned_data

    def save(self):
        """Create the user with its empty profile and route."""
        try:
            return User.objects.create_user(
                username=self.cleaned_data['username'],
                email=self.cleaned_data['email'],
                password=self.cleaned_data['password'],
            )
        except IntegrityError as exc:
            raise ConflictError(TAKEN_MESSAGE) from exc


class LoginForm(forms.Form):
    """User login form"""
    username = forms.CharField(
        max_length=30,
        widget=forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'Username'})
    )
    password = forms.CharField(
        widget=forms.PasswordInput(attrs={'class': 'form-control', 'placeholder': 'Password'})
    )

    def clean_username(self):
        return self.cleaned_data.get('username', '').strip().lower()


class ForgotPasswordForm(forms.Form):
    email = forms.EmailField(
        widget=forms.EmailInput(attrs={'class': 'form-control', 'placeholder': 'Email Address'})
    )


class ResetPasswordForm(PasswordPairMixin, forms.Form):
    password = forms.CharField(
        widget=forms.PasswordInput(attrs={'class': 'form-control', 'placeholder': 'New Password'})
    )
    confirm_password = forms.CharField(
        widget=forms.PasswordInput(attrs={'class': 'form-control', 'placeholder': 'Confirm Password'})
    )
