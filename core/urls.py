"""
Main URL Configuration
Routes to the tracker API and Django admin
"""
from django.contrib import admin
from django.urls import path, include

urlpatterns = [
    # Django admin panel (users, devices, API keys)
    path('admin/', admin.site.urls),

    # Tracker API routes: /api/LocationData, /api/Session/..., /api/gps-data, ...
    path('', include('apps.tracker.urls')),
]
