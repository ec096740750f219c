"""
Django Admin Configuration for GPS Tracker
Device, API key and session management for users
"""
from django.contrib import admin
from .models import Device, ApiKey, TrackingSession, LocationData


@admin.register(Device)
class DeviceAdmin(admin.ModelAdmin):
    list_display = ['device_id', 'description', 'owner']
    list_filter = ['owner']
    search_fields = ['device_id', 'description', 'owner__username']
    ordering = ['device_id']


@admin.register(ApiKey)
class ApiKeyAdmin(admin.ModelAdmin):
    list_display = ['description', 'user', 'is_active', 'created_at', 'last_used']
    list_filter = ['is_active', 'created_at']
    search_fields = ['description', 'user__username']
    readonly_fields = ['key', 'created_at', 'last_used']
    actions = ['deactivate_keys']

    fieldsets = (
        ('Key', {
            'fields': ('user', 'description', 'is_active', 'key')
        }),
        ('Usage', {
            'fields': ('created_at', 'last_used'),
            'classes': ('collapse',)
        }),
    )

    @admin.action(description='Deactivate selected API keys')
    def deactivate_keys(self, request, queryset):
        updated = queryset.update(is_active=False)
        self.message_user(request, f"{updated} API key(s) deactivated")


@admin.register(TrackingSession)
class TrackingSessionAdmin(admin.ModelAdmin):
    list_display = ['device_id', 'start_utc', 'end_utc', 'session_type']
    list_filter = ['session_type', 'start_utc']
    search_fields = ['device_id']
    date_hierarchy = 'start_utc'


@admin.register(LocationData)
class LocationDataAdmin(admin.ModelAdmin):
    """
    Admin interface for raw location pings
    """
    list_display = ['timestamp_utc', 'device_id', 'latitude', 'longitude', 'altitude']
    list_filter = ['timestamp_utc']
    search_fields = ['device_id']
    date_hierarchy = 'timestamp_utc'

    fieldsets = (
        ('Basic Info', {
            'fields': ('timestamp_utc', 'device_id')
        }),
        ('Location', {
            'fields': ('latitude', 'longitude', 'altitude')
        }),
    )
