import logging
from typing import Any, Tuple

from django.db.models import Q
from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.parsers import JSONParser
from rest_framework.permissions import IsAuthenticated
from rest_framework.renderers import JSONRenderer
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from calm_cashflow.apps.categories.models import Category
from calm_cashflow.apps.categories.services import CategoryService
from calm_cashflow.apps.changes.models import ChangeEvent
from calm_cashflow.apps.goals.models import FinancialGoal
from calm_cashflow.apps.goals.services import GoalService
from calm_cashflow.apps.ledger.services import CashflowAnalyzerService
from calm_cashflow.apps.transactions.models import Transaction
from calm_cashflow.apps.transactions.services import TransactionService
from calm_cashflow.core.constants import CategoryType

from .authentication import DemoUserAuthentication
from .serializers import (
    BalancesSerializer,
    CategorySerializer,
    ChangeEventSerializer,
    GoalProgressSerializer,
    GoalSerializer,
    ProgressUpdateSerializer,
    SummarySerializer,
    TransactionSerializer,
    TransferSerializer,
)

logger = logging.getLogger(__name__)


def service_error(error: ValueError) -> Response:
    logger.warning("Rejected request: %s", error)
    return Response({"detail": str(error)}, status=status.HTTP_400_BAD_REQUEST)


class BaseAPIView(APIView):
    permission_classes: Tuple[Any, ...] = (IsAuthenticated,)
    authentication_classes: Tuple[Any, ...] = (DemoUserAuthentication,)

    renderer_classes: Tuple[Any, ...] = (JSONRenderer,)
    parser_classes: Tuple[Any, ...] = (JSONParser,)


class Ping(BaseAPIView):
    permission_classes = ()

    def get(self, request: Request) -> Response:
        return Response({"status": "ok"})

    def post(self, request: Request) -> Response:
        return Response({"status": "ok"})


class TransactionListView(BaseAPIView):
    def get(self, request: Request) -> Response:
        transactions = TransactionService(request.user).list_transactions()
        return Response(TransactionSerializer(transactions, many=True).data)

    def post(self, request: Request) -> Response:
        serializer = TransactionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            transaction = TransactionService(request.user).create(**serializer.validated_data)
        except ValueError as e:
            return service_error(e)
        return Response(TransactionSerializer(transaction).data, status=status.HTTP_201_CREATED)


class TransactionDetailView(BaseAPIView):
    def get_object(self, request: Request, pk: int) -> Transaction:
        return get_object_or_404(Transaction.objects.select_related("category"), pk=pk, user=request.user)

    def get(self, request: Request, pk: int) -> Response:
        return Response(TransactionSerializer(self.get_object(request, pk)).data)

    def patch(self, request: Request, pk: int) -> Response:
        transaction = self.get_object(request, pk)
        serializer = TransactionSerializer(transaction, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        try:
            transaction = TransactionService(request.user).update(transaction, **serializer.validated_data)
        except ValueError as e:
            return service_error(e)
        return Response(TransactionSerializer(transaction).data)

    def delete(self, request: Request, pk: int) -> Response:
        TransactionService(request.user).delete(self.get_object(request, pk))
        return Response(status=status.HTTP_204_NO_CONTENT)


class TransferView(BaseAPIView):
    def post(self, request: Request) -> Response:
        serializer = TransferSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            transaction = TransactionService(request.user).create_transfer(**serializer.validated_data)
        except ValueError as e:
            return service_error(e)
        return Response(TransactionSerializer(transaction).data, status=status.HTTP_201_CREATED)


class CategoryListView(BaseAPIView):
    def get(self, request: Request) -> Response:
        service = CategoryService()
        category_type = request.query_params.get("type")
        if category_type:
            if category_type not in CategoryType.values:
                raise ValidationError({"type": f"Must be one of: {', '.join(CategoryType.values)}."})
            categories = service.list_by_type(category_type)
        else:
            categories = service.list_categories()
        return Response(CategorySerializer(categories, many=True).data)

    def post(self, request: Request) -> Response:
        serializer = CategorySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            category = CategoryService().create(**serializer.validated_data)
        except ValueError as e:
            return service_error(e)
        return Response(CategorySerializer(category).data, status=status.HTTP_201_CREATED)


class CategoryDetailView(BaseAPIView):
    def patch(self, request: Request, pk: int) -> Response:
        category = get_object_or_404(Category, pk=pk)
        serializer = CategorySerializer(category, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        try:
            category = CategoryService().update(category, **serializer.validated_data)
        except ValueError as e:
            return service_error(e)
        return Response(CategorySerializer(category).data)

    def delete(self, request: Request, pk: int) -> Response:
        CategoryService().delete(get_object_or_404(Category, pk=pk))
        return Response(status=status.HTTP_204_NO_CONTENT)


class GoalListView(BaseAPIView):
    def get(self, request: Request) -> Response:
        overview = GoalService(request.user).overview()
        goals = [goal for goal, _ in overview["goals"]]
        progress = {goal.pk: goal_progress for goal, goal_progress in overview["goals"]}
        return Response(
            {
                "goals": GoalSerializer(goals, many=True, context={"progress": progress}).data,
                "goals_needing_update": [goal.pk for goal in overview["goals_needing_update"]],
                "total_auto_contributions": str(overview["total_auto_contributions"]),
                "total_savings": str(overview["total_savings"]),
                "total_target": str(overview["total_target"]),
            }
        )

    def post(self, request: Request) -> Response:
        serializer = GoalSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            goal = GoalService(request.user).create(**serializer.validated_data)
        except ValueError as e:
            return service_error(e)
        return Response(GoalSerializer(goal).data, status=status.HTTP_201_CREATED)


class GoalDetailView(BaseAPIView):
    def get_object(self, request: Request, pk: int) -> FinancialGoal:
        return get_object_or_404(FinancialGoal.objects.select_related("linked_category"), pk=pk, user=request.user)

    def patch(self, request: Request, pk: int) -> Response:
        goal = self.get_object(request, pk)
        serializer = GoalSerializer(goal, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        try:
            goal = GoalService(request.user).update(goal, **serializer.validated_data)
        except ValueError as e:
            return service_error(e)
        return Response(GoalSerializer(goal).data)

    def delete(self, request: Request, pk: int) -> Response:
        GoalService(request.user).delete(self.get_object(request, pk))
        return Response(status=status.HTTP_204_NO_CONTENT)


class GoalProgressView(BaseAPIView):
    def get(self, request: Request, pk: int) -> Response:
        service = GoalService(request.user)
        goal = get_object_or_404(service.list_goals(), pk=pk)
        data = GoalProgressSerializer(service.progress(goal)._asdict()).data
        data["suggested_amount"] = str(service.suggested_progress(goal))
        return Response(data)

    def post(self, request: Request, pk: int) -> Response:
        service = GoalService(request.user)
        goal = get_object_or_404(service.list_goals(), pk=pk)
        serializer = ProgressUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            goal = service.update_progress(goal, serializer.validated_data["current_amount"])
        except ValueError as e:
            return service_error(e)
        return Response(GoalSerializer(goal).data)


class BalancesView(BaseAPIView):
    def get(self, request: Request) -> Response:
        balances = CashflowAnalyzerService(request.user).get_balances()
        return Response(BalancesSerializer(balances).data)


class SummaryView(BaseAPIView):
    def get(self, request: Request) -> Response:
        summary = CashflowAnalyzerService(request.user).get_summary()
        return Response(SummarySerializer(summary).data)


class ChangeFeedView(BaseAPIView):
    """Poll row-level change events newer than ``after``, optionally for one table"""

    def get(self, request: Request) -> Response:
        events = ChangeEvent.objects.filter(Q(user=request.user) | Q(user__isnull=True))

        table = request.query_params.get("table")
        if table:
            events = events.filter(table=table)

        after = request.query_params.get("after", "0")
        try:
            events = events.filter(id__gt=int(after))
        except ValueError:
            raise ValidationError({"after": "Must be an integer event id."})

        return Response(ChangeEventSerializer(events.order_by("id")[:500], many=True).data)
