"""
URL configuration for the admin license API.
"""

from django.urls import path

from api.v1.admin import views

app_name = "admin_api"

urlpatterns = [
    path(
        "licenses",
        views.ListLicensesView.as_view(),
        name="list-licenses",
    ),
    path(
        "licenses/create",
        views.CreateLicenseView.as_view(),
        name="create-license",
    ),
    path(
        "licenses/delete",
        views.DeleteLicenseView.as_view(),
        name="delete-license",
    ),
    path(
        "licenses/extend",
        views.ExtendLicenseView.as_view(),
        name="extend-license",
    ),
    path(
        "licenses/status",
        views.SetLicenseStatusView.as_view(),
        name="set-license-status",
    ),
]
