from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/", include("calm_cashflow.api.urls")),
    path("", include("calm_cashflow.website.urls")),
]
