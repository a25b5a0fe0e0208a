from django.apps import apps
from django.contrib.auth.base_user import BaseUserManager
from django.db import transaction


class CustomUserManager(BaseUserManager):
    """Manager that creates every user together with its empty profile and route."""
    use_in_migrations = True

    def normalize_username(self, username):
        return str(username or '').strip().lower()

    def normalize_email(self, email):
        return str(email or '').strip().lower()

    def _create_user(self, username, email, password, **extra_fields):
        if not username:
            raise ValueError('The username must be set')
        if not email:
            raise ValueError('The email must be set')

        with transaction.atomic():
            user = self.model(
                username=self.normalize_username(username),
                email=self.normalize_email(email),
                **extra_fields
            )
            user.set_password(password)
            user.save(using=self._db)

            Profile = apps.get_model('profiles', 'Profile')
            UserRoute = apps.get_model('profiles', 'UserRoute')
            Profile.objects.create(user=user)
            UserRoute.objects.create(user=user)
        return user

    def create_user(self, username, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', False)
        extra_fields.setdefault('is_superuser', False)
        return self._create_user(username, email, password, **extra_fields)

    def create_superuser(self, username, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)

        if extra_fields.get('is_staff') is not True:
            raise ValueError('Superuser must have is_staff=True.')
        if extra_fields.get('is_superuser') is not True:
            raise ValueError('Superuser must have is_superuser=True.')
        return self._create_user(username, email, password, **extra_fields)

    def get_by_natural_key(self, username):
        return self.get(username=self.normalize_username(username))
