"""
URL configuration for the stackd project.

Only the social core's JSON API and the admin are routed here; page rendering
lives in the front-end application.
"""
from django.contrib import admin
from django.urls import path, include

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/', include('social.urls')),
]
