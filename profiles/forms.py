import os
import logging
from django import forms
from django.conf import settings
from django.core.files.storage import default_storage
from .models import Profile, Link, Project, Experience, Contact

logger = logging.getLogger(__name__)

QUICK_ADD_PLATFORMS = {
    'github': ('GitHub', 'https://github.com/{handle}'),
    'linkedin': ('LinkedIn', 'https://www.linkedin.com/in/{handle}'),
    'x': ('X', 'https://x.com/{handle}'),
    'instagram': ('Instagram', 'https://instagram.com/{handle}'),
}


class BlankToNoneMixin:
    """Store blank optional text as NULL instead of ''."""

    def clean(self):
        cleaned_data = super().clean()
        for name, value in cleaned_data.items():
            if isinstance(value, str):
                value = value.strip()
                cleaned_data[name] = value or None
        return cleaned_data


class ProfileForm(BlankToNoneMixin, forms.ModelForm):
    """Form for editing the public profile"""
    avatar = forms.FileField(required=False)

    class Meta:
        model = Profile
        fields = ['full_name', 'birthday', 'city', 'workplace', 'bio', 'theme', 'custom_css']
        widgets = {
            'full_name': forms.TextInput(attrs={'class': 'form-control'}),
            'birthday': forms.DateInput(attrs={'class': 'form-control', 'type': 'date'}),
            'city': forms.TextInput(attrs={'class': 'form-control'}),
            'workplace': forms.TextInput(attrs={'class': 'form-control'}),
            'bio': forms.Textarea(attrs={'class': 'form-control', 'rows': 3}),
            'theme': forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'e.g. dark'}),
            'custom_css': forms.Textarea(attrs={'class': 'form-control', 'rows': 3}),
        }

    def clean_avatar(self):
        avatar = self.cleaned_data.get('avatar')
        if not avatar:
            return None
        ext = os.path.splitext(avatar.name)[1].lower()
        if ext not in settings.AVATAR_EXTENSIONS:
            raise forms.ValidationError('Invalid file type')
        if avatar.size > settings.AVATAR_MAX_BYTES:
            raise forms.ValidationError('Avatar must be 2 MB or smaller')
        return avatar

    def save(self, commit=True):
        profile = super().save(commit=False)
        avatar = self.cleaned_data.get('avatar')
        if avatar:
            ext = os.path.splitext(avatar.name)[1].lower()
            path = f'avatars/{profile.user_id}{ext}'
            if default_storage.exists(path):
                default_storage.delete(path)
            stored_name = default_storage.save(path, avatar)
            profile.avatar_path = default_storage.url(stored_name)
            logger.info(f"Avatar stored for user {profile.user_id} at {stored_name}")
        if commit:
            profile.save()
        return profile


class LinkForm(BlankToNoneMixin, forms.ModelForm):
    """Form for adding a profile link."""
    class Meta:
        model = Link
        fields = ['label', 'url', 'tags', 'group_name', 'thumb_url']
        widgets = {
            'label': forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'e.g. My Website'}),
            'url': forms.URLInput(attrs={'class': 'form-control', 'placeholder': 'https://example.com'}),
            'tags': forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'comma, separated'}),
            'group_name': forms.TextInput(attrs={'class': 'form-control'}),
            'thumb_url': forms.URLInput(attrs={'class': 'form-control'}),
        }


class QuickAddLinkForm(forms.Form):
    platform = forms.ChoiceField(choices=[(key, label) for key, (label, _) in QUICK_ADD_PLATFORMS.items()])
    handle = forms.CharField(max_length=100)

    def clean_handle(self):
        handle = self.cleaned_data['handle'].strip().lstrip('@')
        if not handle or '/' in handle:
            raise forms.ValidationError('Enter a handle, not a URL')
        return handle

    def link_fields(self):
        label, template = QUICK_ADD_PLATFORMS[self.cleaned_data['platform']]
        return {'label': label, 'url': template.format(handle=self.cleaned_data['handle'])}


class ProjectForm(BlankToNoneMixin, forms.ModelForm):
    class Meta:
        model = Project
        fields = ['title', 'description', 'url']


class ExperienceForm(BlankToNoneMixin, forms.ModelForm):
    class Meta:
        model = Experience
        fields = ['role', 'company', 'start_date', 'end_date', 'description']
        widgets = {
            'start_date': forms.DateInput(attrs={'type': 'date'}),
            'end_date': forms.DateInput(attrs={'type': 'date'}),
        }

    def clean(self):
        cleaned_data = super().clean()
        start, end = cleaned_data.get('start_date'), cleaned_data.get('end_date')
        if start and end and end < start:
            raise forms.ValidationError('End date cannot be before start date')
        return cleaned_data


class ContactForm(BlankToNoneMixin, forms.ModelForm):
    class Meta:
        model = Contact
        fields = ['label', 'value']


class RouteForm(forms.Form):
    """Vanity path and custom domain. Blank clears the field."""
    vanity_path = forms.CharField(max_length=100, required=False)
    custom_domain = forms.CharField(max_length=253, required=False)
