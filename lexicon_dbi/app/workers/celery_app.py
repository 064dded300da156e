"""Celery application instance.

Start the worker::

    celery -A lexicon_dbi.app.workers.celery_app worker --loglevel=info
"""

from __future__ import annotations

from celery import Celery

from lexicon_dbi.app.core.config import settings

celery = Celery(
    "lexicon_dbi",
    broker=settings.CELERY_BROKER_URL,
    backend=settings.CELERY_RESULT_BACKEND,
    include=["lexicon_dbi.app.workers.tasks.lexicon"],
)

celery.conf.update(
    task_serializer="json",
    result_serializer="json",
    accept_content=["json"],
    enable_utc=True,
    task_track_started=True,
    task_acks_late=True,
    worker_prefetch_multiplier=1,
)
