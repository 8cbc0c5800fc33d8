from django.urls import path

from . import views

urlpatterns = [
    path("ping/", views.Ping.as_view(), name="api_ping"),
    # Transactions
    path("transactions/", views.TransactionListView.as_view(), name="api_transactions"),
    path("transactions/<int:pk>/", views.TransactionDetailView.as_view(), name="api_transaction_detail"),
    path("transfers/", views.TransferView.as_view(), name="api_transfers"),
    # Categories
    path("categories/", views.CategoryListView.as_view(), name="api_categories"),
    path("categories/<int:pk>/", views.CategoryDetailView.as_view(), name="api_category_detail"),
    # Goals
    path("goals/", views.GoalListView.as_view(), name="api_goals"),
    path("goals/<int:pk>/", views.GoalDetailView.as_view(), name="api_goal_detail"),
    path("goals/<int:pk>/progress/", views.GoalProgressView.as_view(), name="api_goal_progress"),
    # Projections
    path("balances/", views.BalancesView.as_view(), name="api_balances"),
    path("summary/", views.SummaryView.as_view(), name="api_summary"),
    path("changes/", views.ChangeFeedView.as_view(), name="api_changes"),
]
