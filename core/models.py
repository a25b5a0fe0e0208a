from django.db import models


class Configuration(models.Model):
    """Key-value configuration storage"""
    key = models.CharField(max_length=100, unique=True)
    value = models.TextField()
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.key

    @staticmethod
    def get_value(key, default=None):
        """Get configuration value by key"""
        try:
            return Configuration.objects.get(key=key).value
        except Configuration.DoesNotExist:
            return default

    class Meta:
        ordering = ['key']
