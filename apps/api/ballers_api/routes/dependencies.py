"""Dependency wiring for routes."""

from __future__ import annotations

from typing import Annotated
from uuid import uuid4

from fastapi import Depends, Request

from ballers_api.core.context import AppContext
from ballers_api.repositories.memory import InMemoryStore
from ballers_api.services.badges import AssignedBadgeService, BadgeService
from ballers_api.services.enquiries import EnquiryService
from ballers_api.services.knowledge_base import KnowledgeBaseService
from ballers_api.services.notifications import NotificationService
from ballers_api.services.properties import PropertyService
from ballers_api.services.referrals import ReferralService
from ballers_api.services.users import UserService
from ballers_api.services.visitations import VisitationService


def _request_correlation_id(request: Request) -> str:
    existing = getattr(request.state, "correlation_id", None)
    if isinstance(existing, str) and existing:
        return existing

    correlation_id = request.headers.get("X-Correlation-Id")
    if correlation_id:
        request.state.correlation_id = correlation_id
        return correlation_id

    generated = f"req-{uuid4()}"
    request.state.correlation_id = generated
    return generated


def get_request_correlation_id(request: Request) -> str:
    return _request_correlation_id(request)


def get_context(request: Request) -> AppContext:
    return request.app.state.context


def get_store(context: Annotated[AppContext, Depends(get_context)]) -> InMemoryStore:
    return context.store


def get_query(request: Request) -> dict[str, str]:
    """Raw query string parameters, handed to the pagination engine."""
    return dict(request.query_params)


def get_user_service(context: Annotated[AppContext, Depends(get_context)]) -> UserService:
    return UserService(context)


def get_property_service(context: Annotated[AppContext, Depends(get_context)]) -> PropertyService:
    return PropertyService(context.store, default_limit=context.settings.default_page_limit)


def get_badge_service(context: Annotated[AppContext, Depends(get_context)]) -> BadgeService:
    return BadgeService(context.store, default_limit=context.settings.default_page_limit)


def get_assigned_badge_service(store: Annotated[InMemoryStore, Depends(get_store)]) -> AssignedBadgeService:
    return AssignedBadgeService(store)


def get_enquiry_service(context: Annotated[AppContext, Depends(get_context)]) -> EnquiryService:
    return EnquiryService(context.store, default_limit=context.settings.default_page_limit)


def get_visitation_service(context: Annotated[AppContext, Depends(get_context)]) -> VisitationService:
    return VisitationService(context.store, default_limit=context.settings.default_page_limit)


def get_notification_service(context: Annotated[AppContext, Depends(get_context)]) -> NotificationService:
    return NotificationService(context.store, default_limit=context.settings.default_page_limit)


def get_knowledge_base_service(context: Annotated[AppContext, Depends(get_context)]) -> KnowledgeBaseService:
    return KnowledgeBaseService(context.store, default_limit=context.settings.default_page_limit)


def get_referral_service(context: Annotated[AppContext, Depends(get_context)]) -> ReferralService:
    return ReferralService(
        context.store,
        context.mailer,
        context.settings.host,
        default_limit=context.settings.default_page_limit,
    )


Query = Annotated[dict[str, str], Depends(get_query)]
