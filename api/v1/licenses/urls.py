"""
URL configuration for the client-facing license API.
"""

from django.urls import path

from api.v1.licenses import views

app_name = "licenses_api"

urlpatterns = [
    path(
        "validate",
        views.ValidateLicenseView.as_view(),
        name="validate-license",
    ),
]
