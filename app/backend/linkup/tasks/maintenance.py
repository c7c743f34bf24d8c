import asyncio
from linkup.celery_app import celery_app
from linkup.db.session import async_session
from linkup.services.maintenance import purge_expired_tokens as _purge

@celery_app.task(name="linkup.tasks.maintenance.purge_expired_tokens")
def purge_expired_tokens():
    return asyncio.run(_run())

async def _run() -> dict:
    async with async_session() as db:
        refresh_count, reset_count = await _purge(db)
    return {"refresh_tokens": refresh_count, "reset_tokens": reset_count}
