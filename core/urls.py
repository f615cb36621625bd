"""URL configuration for core views."""

from __future__ import annotations

from django.urls import path

from core import views

app_name = "core"

urlpatterns = [
    path("", views.dashboard, name="dashboard"),
    path("api/insight/", views.insight_api, name="insight_api"),
    path("adopt/", views.adoption_center, name="adoption_center"),
    path("my-animas/", views.my_animas, name="my_animas"),
    path("animas/", views.anima_library, name="anima_library"),
    path("animas/new/", views.anima_edit, name="anima_create"),
    path("animas/<int:pk>/edit/", views.anima_edit, name="anima_edit"),
    path("enemies/", views.enemy_library, name="enemy_library"),
    path("enemies/new/", views.enemy_edit, name="enemy_create"),
    path("enemies/<int:pk>/edit/", views.enemy_edit, name="enemy_edit"),
]
