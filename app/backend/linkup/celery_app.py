import sentry_sdk
from celery import Celery
from sentry_sdk.integrations.celery import CeleryIntegration

from linkup.core.config import settings

if settings.SENTRY_DSN:
    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        integrations=[CeleryIntegration()],
        environment=settings.ENV,
        release=settings.GIT_SHA,
    )

celery_app = Celery(
    "linkup",
    broker=settings.CELERY_BROKER_URL,
    backend=settings.CELERY_RESULT_BACKEND,
    include=["linkup.tasks.maintenance"],
)

celery_app.conf.update(
    timezone=settings.CELERY_TIMEZONE,
    task_serializer="json",
    result_serializer="json",
    accept_content=["json"],
    # purge is idempotent, so a redelivery after a worker crash is harmless
    task_acks_late=True,
    task_routes={"linkup.tasks.maintenance.*": {"queue": "maintenance"}},
    beat_schedule={
        "purge-expired-tokens": {
            "task": "linkup.tasks.maintenance.purge_expired_tokens",
            "schedule": float(settings.TOKEN_PURGE_INTERVAL_SECONDS),
        },
    },
)
