from typing import Callable

from django.http import HttpRequest, HttpResponse

from calm_cashflow.apps.accounts.services import ensure_demo_user


class DemoUserMiddleware:
    """Act as the demo user on every request that is not otherwise authenticated"""

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        if not request.user.is_authenticated:
            request.user = ensure_demo_user()
        return self.get_response(request)
