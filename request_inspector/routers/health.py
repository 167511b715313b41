"""Liveness endpoint, mounted under ``/api``."""

from typing import Dict

from fastapi import APIRouter

from request_inspector.config.log import get_logger

router = APIRouter()
logger = get_logger(__name__)


@router.get('/health')
async def health() -> Dict[str, str]:
    logger.debug('health check')
    return {'status': 'ok'}
