"""
URL configuration for clubsync project.
"""

from django.contrib import admin
from django.urls import path
from clubsync import views

urlpatterns = [
    path("admin/", admin.site.urls),
    path("", views.sync_trigger, name='sync_trigger'),
]
