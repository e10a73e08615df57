"""Health check endpoint."""

import logging

from django.http import JsonResponse

from the_shire.apps.core.health import check_db_and_orm

logger = logging.getLogger(__name__)


def healthz(request):
    """Public health check endpoint."""
    try:
        details = check_db_and_orm()
    except Exception as exc:  # noqa: BLE001
        logger.exception("Health check failed")
        resp = JsonResponse({"status": "error", "error": str(exc)})
        resp.status_code = 503
        resp["Cache-Control"] = "no-store"
        return resp

    resp = JsonResponse({"status": "ok", "checks": details})
    resp["Cache-Control"] = "no-store"
    return resp
