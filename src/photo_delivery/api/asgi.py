"""ASGI entrypoint for the redirect service."""

from photo_delivery.api.app import create_app
from photo_delivery.containers import build_redirect_container

app = create_app(build_redirect_container())
