"""Celery application used for background persistence."""

from celery import Celery

from gitbattle.config import settings

celery_app = Celery(
    "gitbattle",
    broker=settings.CELERY_BROKER_URL or settings.REDIS_URL,
    backend=settings.CELERY_RESULT_BACKEND or settings.REDIS_URL,
    include=["gitbattle.tasks.persistence"],
)

celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
    task_default_queue="persistence",
    task_always_eager=settings.CELERY_TASK_ALWAYS_EAGER,
    broker_connection_timeout=settings.CELERY_BROKER_CONNECTION_TIMEOUT,
    broker_connection_retry_on_startup=True,
    broker_transport_options={
        "socket_connect_timeout": settings.CELERY_BROKER_CONNECTION_TIMEOUT,
        "socket_timeout": settings.CELERY_BROKER_CONNECTION_TIMEOUT,
    },
    redis_socket_connect_timeout=settings.CELERY_BROKER_CONNECTION_TIMEOUT,
    redis_socket_timeout=settings.CELERY_BROKER_CONNECTION_TIMEOUT,
    task_acks_late=True,
    worker_prefetch_multiplier=1,
)
