"""API URL configuration."""
from __future__ import annotations

from django.urls import path

from backend.api.views import PredictView, WeatherView

urlpatterns = [
    path("weather", WeatherView.as_view(), name="weather"),
    path("predict", PredictView.as_view(), name="predict"),
]
