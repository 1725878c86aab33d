# forum/domains/usr/tasks.py

import logging
from datetime import datetime, timedelta, UTC

from forum.core.config import settings
from forum.core.database import get_async_session_context
from . import crud as usr_crud

logger = logging.getLogger(__name__)


async def prune_view_history_task(ctx):
    """
    보존 기간(HISTORY_RETENTION_DAYS)이 지난 열람 기록을 삭제하는 ARQ 태스크입니다.
    """
    cutoff = datetime.now(UTC) - timedelta(days=settings.HISTORY_RETENTION_DAYS)
    async with get_async_session_context() as db:
        deleted = await usr_crud.prune_history(db, before=cutoff)
    logger.info("Pruned %s view history rows older than %s", deleted, cutoff.isoformat())
    return {"status": "success", "deleted": deleted}
