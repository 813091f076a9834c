"""
/api/admin/* — operator dashboard: login, quote review, service-type pricing,
and the singleton provider configuration. Everything but login needs a bearer token.
"""
import logging
import os

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.responses import FileResponse

from api.deps import client_address, get_storage, require_admin
from config import settings
from core.auth import login_throttle, tokens, verify_credentials
from core.image_processor import ImageProcessingError, create_thumbnail
from models.admin import MASK_PREFIX, AdminConfigUpdate, AdminConfigView, LoginRequest, LoginResponse
from models.quote import Quote, QuoteUpdate
from models.service_type import ServiceType, ServiceTypeCreate, ServiceTypeUpdate
from storage.base import Storage

router = APIRouter(prefix="/admin")
protected = APIRouter(prefix="/admin", dependencies=[Depends(require_admin)])
logger = logging.getLogger(__name__)

# ── Auth ──────────────────────────────────────────────────────────────────────

@router.post("/login", response_model=LoginResponse)
def login(req: LoginRequest, request: Request):
    client = client_address(request)
    if login_throttle.is_blocked(client):
        raise HTTPException(status_code=429, detail="Too many failed login attempts. Try again later.")
    if not verify_credentials(req.username, req.password):
        login_throttle.record_failure(client)
        logger.warning("Failed admin login from %s", client)
        raise HTTPException(status_code=401, detail="Invalid credentials")
    login_throttle.reset(client)
    token, expires_at = tokens.issue()
    logger.info("Admin logged in from %s", client)
    return LoginResponse(token=token, expires_at=expires_at)


@protected.post("/logout")
def logout(token: str = Depends(require_admin)):
    tokens.revoke(token)
    return {"success": True}


# ── Quotes ────────────────────────────────────────────────────────────────────

@protected.get("/quotes", response_model=list[Quote])
def list_quotes(storage: Storage = Depends(get_storage)):
    try:
        return storage.list_quotes()
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to fetch quotes: {e}")


@protected.put("/quotes/{quote_id}", response_model=Quote)
def update_quote(quote_id: str, patch: QuoteUpdate, storage: Storage = Depends(get_storage)):
    quote = storage.update_quote(quote_id, patch)
    if quote is None:
        raise HTTPException(status_code=404, detail="Quote not found")
    logger.info("Quote %s updated: %s", quote_id, sorted(patch.model_fields_set))
    return quote


@protected.get("/quotes/{quote_id}/photo")
def get_quote_photo(
    quote_id: str,
    thumbnail: bool = Query(False),
    storage: Storage = Depends(get_storage),
):
    quote = storage.get_quote(quote_id)
    if quote is None:
        raise HTTPException(status_code=404, detail="Quote not found")
    if not quote.photo_path or not os.path.exists(quote.photo_path):
        raise HTTPException(status_code=404, detail="Quote has no photo")
    if not thumbnail:
        return FileResponse(quote.photo_path)

    thumb_dir = os.path.join(settings.UPLOAD_DIR, "thumbs")
    os.makedirs(thumb_dir, exist_ok=True)
    thumb_path = os.path.join(thumb_dir, f"{quote.id}.jpg")
    if not os.path.exists(thumb_path):
        try:
            create_thumbnail(quote.photo_path, thumb_path)
        except ImageProcessingError as e:
            raise HTTPException(status_code=500, detail=str(e))
    return FileResponse(thumb_path, media_type="image/jpeg")


# ── Service types ─────────────────────────────────────────────────────────────

@protected.get("/service-types", response_model=list[ServiceType])
def list_all_service_types(storage: Storage = Depends(get_storage)):
    return storage.list_service_types(active_only=False)


@protected.post("/service-types", response_model=ServiceType, status_code=201)
def create_service_type(data: ServiceTypeCreate, storage: Storage = Depends(get_storage)):
    try:
        service_type = storage.create_service_type(data)
    except Exception as e:
        logger.exception("Service type creation failed")
        raise HTTPException(status_code=500, detail=f"Failed to create service type: {e}")
    logger.info("Service type %s created (%s)", service_type.id, service_type.name)
    return service_type


@protected.put("/service-types/{service_type_id}", response_model=ServiceType)
def update_service_type(service_type_id: str, patch: ServiceTypeUpdate, storage: Storage = Depends(get_storage)):
    service_type = storage.update_service_type(service_type_id, patch)
    if service_type is None:
        raise HTTPException(status_code=404, detail="Service type not found")
    logger.info("Service type %s updated: %s", service_type_id, sorted(patch.model_fields_set))
    return service_type


# ── Provider config ───────────────────────────────────────────────────────────

@protected.get("/config", response_model=AdminConfigView)
def get_config(storage: Storage = Depends(get_storage)):
    return AdminConfigView.from_config(storage.get_admin_config())


@protected.put("/config", response_model=AdminConfigView)
def update_config(patch: AdminConfigUpdate, storage: Storage = Depends(get_storage)):
    # The dashboard echoes the masked key back; that means "unchanged"
    if patch.llm_api_key is not None and patch.llm_api_key.startswith(MASK_PREFIX):
        patch = AdminConfigUpdate(**patch.model_dump(exclude_unset=True, exclude={"llm_api_key"}))
    config = storage.update_admin_config(patch)
    logger.info("Admin config updated: %s", sorted(patch.model_fields_set))
    return AdminConfigView.from_config(config)
