"""HTTP handlers for subscription plans and the caller's subscription."""

from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from common.actors import Actor
from common.permissions import ADMIN, CENTER, EVENT_MANAGER, roles
from common.responses import success_response
from subscriptions.dependencies import get_subscription_service
from subscriptions.handlers.serializers import (
    PlanQuerySerializer,
    PlanSerializer,
    SubscribeSerializer,
    SubscriptionSerializer,
)

CanSubscribe = roles(EVENT_MANAGER, CENTER, ADMIN)


class PlanListView(APIView):
    """Handler for GET /api/subscriptions/plans"""

    permission_classes = [AllowAny]

    def get(self, request: Request) -> Response:
        query = PlanQuerySerializer(data=request.query_params.dict())
        query.is_valid(raise_exception=True)
        plans = get_subscription_service().list_plans(query.validated_data.get("type"))
        return success_response(PlanSerializer(plans, many=True).data, description="Plans retrieved successfully")


class MySubscriptionView(APIView):
    """Handler for GET /api/subscriptions/me"""

    permission_classes = [IsAuthenticated]

    def get(self, request: Request) -> Response:
        subscription = get_subscription_service().get_active(request.user.id)
        if subscription is None:
            return success_response(None, description="No active subscription")
        return success_response(
            SubscriptionSerializer(subscription).data, description="Subscription retrieved successfully"
        )


class SubscribeView(APIView):
    """Handler for POST /api/subscriptions"""

    permission_classes = [IsAuthenticated, CanSubscribe]

    def post(self, request: Request) -> Response:
        serializer = SubscribeSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        subscription = get_subscription_service().subscribe(
            Actor.from_user(request.user),
            serializer.validated_data["plan_id"],
            serializer.validated_data["payment_session_id"],
        )
        return success_response(
            SubscriptionSerializer(subscription).data,
            code=status.HTTP_201_CREATED,
            description="Subscription activated",
        )
