from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from .models import CustomUser, PasswordResetToken, LoginLog, UserSession


@admin.register(CustomUser)
class CustomUserAdmin(BaseUserAdmin):
    list_display = ['username', 'email', 'is_staff', 'is_active', 'created_at']
    list_filter = ['is_staff', 'is_active', 'created_at']
    search_fields = ['username', 'email']
    ordering = ['-created_at']

    fieldsets = (
        (None, {'fields': ('username', 'email', 'password')}),
        ('Permissions', {'fields': ('is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions')}),
        ('Important Dates', {'fields': ('last_login', 'created_at')}),
    )

    add_fieldsets = (
        (None, {
            'classes': ('wide',),
            'fields': ('username', 'email', 'password1', 'password2', 'is_staff', 'is_active'),
        }),
    )


@admin.register(PasswordResetToken)
class PasswordResetTokenAdmin(admin.ModelAdmin):
    list_display = ['user', 'expires_at', 'used', 'created_at']
    list_filter = ['used']
    search_fields = ['user__username', 'user__email']
    readonly_fields = ['token', 'user', 'expires_at', 'used', 'created_at']


@admin.register(LoginLog)
class LoginLogAdmin(admin.ModelAdmin):
    list_display = ['user', 'success', 'ip', 'ts']
    list_filter = ['success', 'ts']
    search_fields = ['user__username', 'ip']
    readonly_fields = ['user', 'ts', 'ip', 'user_agent', 'success']


@admin.register(UserSession)
class UserSessionAdmin(admin.ModelAdmin):
    list_display = ['session_key_short', 'user', 'ip', 'active', 'last_seen']
    list_filter = ['active']
    search_fields = ['user__username', 'ip']

    @admin.display(description='Session')
    def session_key_short(self, obj):
        return obj.session_key[:8] + '...'
