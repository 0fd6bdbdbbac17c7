# Contains the subscription tools.
# Date: 2026-10-19
# Version: 0.1.0

from pydantic import Field
from typing import Any, Dict, Literal, Optional, Type
from .base_tool import BackendTool, ToolInput


class GetSubscriptionsInput(ToolInput):
    """Input model for the Get Subscriptions tool."""
    active: Optional[bool] = Field(default=None, description="Only show active subscriptions.")

class GetSubscriptionsTool(BackendTool):
    name: str = "get_subscriptions"
    description: str = "Get the user's subscriptions and recurring costs."
    args_schema: Type[ToolInput] = GetSubscriptionsInput
    path: str = "/api/subscriptions"

    def build_payload(self, args: GetSubscriptionsInput) -> Dict[str, Any]:
        return {"active": args.active}


class UpdateSubscriptionInput(ToolInput):
    """Input model for the Update Subscription tool."""
    id: str = Field(..., description="Subscription ID.")
    status: Optional[Literal["active", "cancelled"]] = Field(default=None, description="New status.")
    cost: Optional[float] = Field(default=None, description="New monthly cost.")

class UpdateSubscriptionTool(BackendTool):
    name: str = "update_subscription"
    description: str = "Update a subscription, for example cancel it or change its cost."
    args_schema: Type[ToolInput] = UpdateSubscriptionInput
    method: str = "POST"
    path: str = "/api/subscriptions/update"
