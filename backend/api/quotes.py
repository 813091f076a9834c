"""
POST /api/quotes — photo upload → AI price analysis → stored quote.
GET  /api/quotes/search, GET /api/quotes/{id} — customer lookups.
"""
import logging
import os
import uuid
from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Depends, File, Form, HTTPException, Query, UploadFile
from pydantic import EmailStr

from api.deps import get_storage
from config import settings
from core.image_processor import ImageProcessingError, cleanup_file, process_upload, validate_image
from core.pricing_analyzer import AnalysisError, analyze_image
from integrations.llm_client import LLMError, client_for_config, resolve_api_key
from integrations.webhook import notify_quote_created
from models.quote import Quote, QuoteCreate
from storage.base import Storage

router = APIRouter()
logger = logging.getLogger(__name__)

_CHUNK = 64 * 1024
_SAFE_EXTENSIONS = {".jpg", ".jpeg", ".png", ".webp"}


def _save_upload(photo: UploadFile) -> str:
    """Stream the upload to UPLOAD_DIR, enforcing MAX_UPLOAD_BYTES."""
    os.makedirs(settings.UPLOAD_DIR, exist_ok=True)
    ext = os.path.splitext(photo.filename or "")[1].lower()
    if ext not in _SAFE_EXTENSIONS:
        ext = ""
    path = os.path.join(settings.UPLOAD_DIR, f"{uuid.uuid4().hex}{ext}")

    written = 0
    too_large = False
    with open(path, "wb") as out:
        while True:
            chunk = photo.file.read(_CHUNK)
            if not chunk:
                break
            written += len(chunk)
            if written > settings.MAX_UPLOAD_BYTES:
                too_large = True
                break
            out.write(chunk)
    if too_large:
        cleanup_file(path)
        limit_mb = settings.MAX_UPLOAD_BYTES // (1024 * 1024)
        raise HTTPException(status_code=413, detail=f"Photo exceeds the {limit_mb}MB limit")
    return path


@router.post("/quotes", response_model=Quote)
def submit_quote(
    background_tasks: BackgroundTasks,
    customer_name: str = Form(..., alias="customerName", min_length=1),
    customer_email: EmailStr = Form(..., alias="customerEmail"),
    service_type_id: str = Form(..., alias="serviceTypeId"),
    photo: Optional[UploadFile] = File(None),
    storage: Storage = Depends(get_storage),
):
    service_type = storage.get_service_type(service_type_id)
    if service_type is None or not service_type.active:
        raise HTTPException(status_code=400, detail="Invalid service type")

    config = storage.get_admin_config()

    if photo is None or not photo.filename:
        if settings.QUOTE_PHOTO_REQUIRED:
            raise HTTPException(
                status_code=400,
                detail="Photo is required for pricing analysis. Please upload a photo of the area to be refinished.",
            )
        quote = storage.create_quote(QuoteCreate(
            customer_email=customer_email,
            customer_name=customer_name,
            service_type_id=service_type.id,
            total_price=service_type.base_price,
        ))
        logger.info("Quote %s created at base price (no photo)", quote.id)
        background_tasks.add_task(notify_quote_created, config.webhook_url, quote)
        return quote

    if not (photo.content_type or "").startswith("image/"):
        raise HTTPException(status_code=400, detail="Only image files allowed")

    photo_path = _save_upload(photo)

    if not resolve_api_key(config):
        cleanup_file(photo_path)
        raise HTTPException(
            status_code=503,
            detail="AI pricing service not configured. An LLM API key is required for pricing analysis.",
        )

    if not validate_image(photo_path):
        cleanup_file(photo_path)
        raise HTTPException(
            status_code=400,
            detail="Invalid image format. Please upload a clear JPEG, PNG or WEBP photo under 10MB.",
        )

    try:
        processed = process_upload(photo_path)
    except ImageProcessingError as e:
        cleanup_file(photo_path)
        raise HTTPException(status_code=400, detail=str(e))

    try:
        client = client_for_config(config)
        analysis = analyze_image(
            client,
            processed.base64,
            service_type.name,
            mime_type=processed.mime_type,
            with_preview=settings.ANALYSIS_GENERATE_PREVIEW,
        )
    except (LLMError, AnalysisError) as e:
        logger.error("AI pricing analysis failed: %s", e)
        cleanup_file(photo_path)
        raise HTTPException(
            status_code=503,
            detail="Failed to analyze image for pricing. Please try again with a clearer photo or contact support.",
        )

    try:
        quote = storage.create_quote(QuoteCreate(
            customer_email=customer_email,
            customer_name=customer_name,
            service_type_id=service_type.id,
            photo_path=photo_path,
            ai_analysis=analysis,
            total_price=round(analysis.total_price),
        ))
    except Exception as e:
        logger.exception("Quote creation failed")
        cleanup_file(photo_path)
        raise HTTPException(status_code=500, detail=f"Failed to create quote: {e}")

    background_tasks.add_task(notify_quote_created, config.webhook_url, quote)
    return quote


@router.get("/quotes/search", response_model=list[Quote])
def search_quotes(
    email: Optional[str] = Query(None),
    name: Optional[str] = Query(None),
    storage: Storage = Depends(get_storage),
):
    if not (email and email.strip()) and not (name and name.strip()):
        raise HTTPException(status_code=400, detail="Email or name parameter is required")
    return storage.search_quotes(email=email, name=name)


@router.get("/quotes/{quote_id}", response_model=Quote)
def get_quote(quote_id: str, storage: Storage = Depends(get_storage)):
    quote = storage.get_quote(quote_id)
    if quote is None:
        raise HTTPException(status_code=404, detail="Quote not found")
    return quote
