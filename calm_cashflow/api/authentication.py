from typing import Any, Optional, Tuple

from rest_framework.authentication import BaseAuthentication
from rest_framework.request import Request

from calm_cashflow.apps.accounts.services import ensure_demo_user


class DemoUserAuthentication(BaseAuthentication):
    """Authenticate every API request as the single demo user"""

    def authenticate(self, request: Request) -> Optional[Tuple[Any, None]]:
        return ensure_demo_user(), None
