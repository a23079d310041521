"""
Prometheus metrics endpoint.

Example:
    GET /metrics

    Response:
        # HELP cabin_admin_actions_total Write actions by outcome
        # TYPE cabin_admin_actions_total counter
        cabin_admin_actions_total{action="create_reservation",outcome="ok"} 12.0
        ...
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter
from fastapi.responses import Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

router = APIRouter()


@router.get("/metrics", response_class=Response)
async def metrics() -> Any:
    """
    Expose every registered counter and histogram in Prometheus text format.
    """
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
