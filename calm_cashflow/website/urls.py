from django.urls import include, path

urlpatterns = [
    path("", include("calm_cashflow.website.cashflow.urls")),
]
