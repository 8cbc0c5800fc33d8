from django.urls import path
from . import views

urlpatterns = [
    # Main pages
    path("", views.dashboard_view, name="dashboard"),
    # Transactions
    path("transactions/add/", views.transaction_create_view, name="transaction_create"),
    path("transactions/<int:pk>/edit/", views.transaction_update_view, name="transaction_update"),
    path("transactions/<int:pk>/delete/", views.transaction_delete_view, name="transaction_delete"),
    path("transfer/", views.transfer_view, name="transfer"),
    # Categories
    path("categories/", views.category_list_view, name="category_list"),
    path("categories/add/", views.category_create_view, name="category_create"),
    path("categories/<int:pk>/edit/", views.category_update_view, name="category_update"),
    path("categories/<int:pk>/delete/", views.category_delete_view, name="category_delete"),
    # Savings goals
    path("goals/", views.goal_list_view, name="goal_list"),
    path("goals/add/", views.goal_create_view, name="goal_create"),
    path("goals/<int:pk>/edit/", views.goal_update_view, name="goal_update"),
    path("goals/<int:pk>/delete/", views.goal_delete_view, name="goal_delete"),
    path("goals/<int:pk>/progress/", views.goal_progress_view, name="goal_progress"),
]
