"""GET /api/health — storage and LLM configuration check."""
import logging

from fastapi import APIRouter, Depends

from api.chat import connected_clients
from api.deps import get_storage
from integrations.llm_client import resolve_api_key
from storage.base import Storage

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/health")
def health_check(storage: Storage = Depends(get_storage)):
    storage_status = _check_storage(storage)
    llm_status = _check_llm(storage)
    overall = "ok" if storage_status["status"] == "up" and llm_status["status"] == "configured" else "degraded"
    return {
        "status": overall,
        "services": {
            "storage": storage_status,
            "llm": llm_status,
        },
        "chat_clients": connected_clients(),
    }


def _check_storage(storage: Storage) -> dict:
    try:
        ping = getattr(storage, "ping", None)
        if ping:
            ping()
        return {"status": "up", "backend": type(storage).__name__}
    except Exception as e:
        logger.warning("Storage health check failed: %s", e)
        return {"status": "down", "error": str(e)}


def _check_llm(storage: Storage) -> dict:
    try:
        config = storage.get_admin_config()
    except Exception as e:
        return {"status": "unknown", "error": str(e)}
    if resolve_api_key(config):
        return {"status": "configured", "provider": config.llm_provider}
    return {"status": "missing_key", "provider": config.llm_provider}
