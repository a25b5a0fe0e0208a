from django.contrib import admin
from .models import Profile, UserRoute, Link, LinkClick, Project, Experience, Contact


@admin.register(Profile)
class ProfileAdmin(admin.ModelAdmin):
    list_display = ['user', 'full_name', 'city', 'theme']
    search_fields = ['user__username', 'full_name']


@admin.register(UserRoute)
class UserRouteAdmin(admin.ModelAdmin):
    list_display = ['user', 'vanity_path', 'custom_domain']
    search_fields = ['user__username', 'vanity_path', 'custom_domain']


@admin.register(Link)
class LinkAdmin(admin.ModelAdmin):
    list_display = ['label', 'user', 'position', 'clicks', 'group_name']
    search_fields = ['label', 'url', 'user__username']
    readonly_fields = ['clicks']


@admin.register(LinkClick)
class LinkClickAdmin(admin.ModelAdmin):
    list_display = ['link', 'user', 'ip', 'clicked_at']
    date_hierarchy = 'clicked_at'
    readonly_fields = ['link', 'user', 'clicked_at', 'ip', 'user_agent']


@admin.register(Project)
class ProjectAdmin(admin.ModelAdmin):
    list_display = ['title', 'user', 'position']
    search_fields = ['title', 'user__username']


@admin.register(Experience)
class ExperienceAdmin(admin.ModelAdmin):
    list_display = ['role', 'company', 'user', 'start_date', 'position']
    search_fields = ['role', 'company', 'user__username']


@admin.register(Contact)
class ContactAdmin(admin.ModelAdmin):
    list_display = ['label', 'value', 'user']
    search_fields = ['label', 'user__username']
