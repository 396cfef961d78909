# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-23
# Description: index router
# -----------------------------------------------------------------------------
import logging
from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_entity_store, get_index_service
from api.schemas.index import IndexAllResponse, IndexEntityResponse
from entities.FolioEntityStore import FolioEntityStore
from services.FolioIndexService import FolioIndexService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/index", tags=["index"])


@router.post("", response_model=IndexAllResponse)
def index_all(
    svc: FolioIndexService = Depends(get_index_service),
    entities: FolioEntityStore = Depends(get_entity_store),
) -> IndexAllResponse:
    logger.info("POST /index (start)")
    summary = svc.index_entities(entities.list_published())
    logger.info("POST /index (done) indexed=%d failed=%d", summary.indexed, summary.failed)
    return IndexAllResponse(**asdict(summary))


@router.post("/{entity_id}", response_model=IndexEntityResponse)
def index_entity(
    entity_id: str,
    svc: FolioIndexService = Depends(get_index_service),
    entities: FolioEntityStore = Depends(get_entity_store),
) -> IndexEntityResponse:
    entity_id = (entity_id or "").strip()
    project = entities.get(entity_id)
    if project is None:
        raise HTTPException(status_code=404, detail=f"entity '{entity_id}' not found")

    logger.info("POST /index/%s (start)", entity_id)
    try:
        chunks = svc.index_project(project)
    except Exception as e:
        logger.exception("POST /index/%s failed: %s", entity_id, e)
        raise HTTPException(status_code=500, detail=f"index failed: {e}")

    logger.info("POST /index/%s (done) chunks=%d", entity_id, chunks)
    return IndexEntityResponse(entity_id=entity_id, chunks=chunks)
