import uuid
from django.conf import settings
from django.db import models
from django.db.models import F


class Profile(models.Model):
    """Public profile content, one per user, created at registration."""
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        primary_key=True,
        related_name='profile'
    )
    full_name = models.CharField(max_length=120, null=True, blank=True)
    birthday = models.DateField(null=True, blank=True)
    city = models.CharField(max_length=100, null=True, blank=True)
    workplace = models.CharField(max_length=120, null=True, blank=True)
    bio = models.TextField(max_length=1000, null=True, blank=True)
    theme = models.CharField(max_length=50, null=True, blank=True)
    custom_css = models.TextField(null=True, blank=True)
    avatar_path = models.CharField(max_length=500, null=True, blank=True)

    def __str__(self):
        return f"Profile: {self.user.username}"


class UserRoute(models.Model):
    """Vanity path and custom domain for one user. Both may be null."""
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        primary_key=True,
        related_name='route'
    )
    vanity_path = models.CharField(max_length=64, unique=True, null=True, blank=True)
    custom_domain = models.CharField(max_length=253, unique=True, null=True, blank=True)

    def __str__(self):
        return f"Route: {self.user.username} ({self.vanity_path or '-'} / {self.custom_domain or '-'})"


class Link(models.Model):
    """A link on a user's public profile page."""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='links'
    )
    label = models.CharField(max_length=100)
    url = models.URLField(max_length=2000)
    position = models.IntegerField(default=0)
    tags = models.CharField(max_length=200, null=True, blank=True)
    group_name = models.CharField(max_length=100, null=True, blank=True)
    thumb_url = models.URLField(max_length=2000, null=True, blank=True)
    clicks = models.PositiveIntegerField(default=0)

    def __str__(self):
        return f"{self.label} ({self.user.username})"

    def increment_clicks(self, count=1):
        """Increment click counter atomically."""
        Link.objects.filter(pk=self.pk).update(
            clicks=F('clicks') + count
        )

    @property
    def tag_list(self):
        return [t.strip() for t in (self.tags or '').split(',') if t.strip()]

    class Meta:
        ordering = ['position', 'label']
        indexes = [
            models.Index(fields=['user', 'position'], name='profiles_link_user_pos_idx'),
        ]


class LinkClick(models.Model):
    """Append-only click event for a link."""
    link = models.ForeignKey(
        Link,
        on_delete=models.CASCADE,
        related_name='click_events'
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='link_clicks'
    )
    clicked_at = models.DateTimeField(auto_now_add=True)
    ip = models.GenericIPAddressField(null=True, blank=True)
    user_agent = models.CharField(max_length=300, null=True, blank=True)

    def __str__(self):
        return f"Click: {self.link.label} at {self.clicked_at}"


class Project(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='projects'
    )
    title = models.CharField(max_length=150)
    description = models.TextField(null=True, blank=True)
    url = models.URLField(max_length=2000, null=True, blank=True)
    position = models.IntegerField(default=0)

    def __str__(self):
        return f"{self.title} ({self.user.username})"

    class Meta:
        ordering = ['position', 'title']


class Experience(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='experiences'
    )
    role = models.CharField(max_length=150)
    company = models.CharField(max_length=150, null=True, blank=True)
    start_date = models.DateField(null=True, blank=True)
    end_date = models.DateField(null=True, blank=True)
    description = models.TextField(null=True, blank=True)
    position = models.IntegerField(default=0)

    def __str__(self):
        return f"{self.role} ({self.user.username})"

    class Meta:
        ordering = ['position', '-start_date']


class Contact(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='contacts'
    )
    label = models.CharField(max_length=100)
    value = models.CharField(max_length=300)

    def __str__(self):
        return f"{self.label}: {self.value}"

    class Meta:
        ordering = ['label']


# Dashboard URL section -> model
ORDERED_SECTIONS = {
    'links': Link,
    'projects': Project,
    'experiences': Experience,
}
SECTIONS = dict(ORDERED_SECTIONS, contacts=Contact)
