from .models import Configuration


def site_settings(request):
    """Add site-wide settings to template context"""
    return {
        'site_name': Configuration.get_value('site_name', 'Who.Me'),
    }
