"""FastAPI application factory for the redirect service."""

import logging
import secrets
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import PlainTextResponse, RedirectResponse

from photo_delivery.api.redirect_models import AliasUpdate
from photo_delivery.app_logging import configure_logging
from photo_delivery.containers import RedirectContainer
from photo_delivery.domain.errors import LedgerError


def create_app(container: RedirectContainer) -> FastAPI:
    """Create a FastAPI app serving short delivery links."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.get("/status")
    async def service_status() -> dict[str, str]:
        """Liveness check."""
        return {"status": "ok"}

    @app.get("/view/{alias}", response_model=None)
    async def view(
        alias: str, request: Request
    ) -> RedirectResponse | PlainTextResponse:
        """Redirect a short alias to its storage folder."""
        state_container: RedirectContainer = request.app.state.container
        try:
            folder_id = state_container.alias_ledger.get(alias)
        except LedgerError as exc:
            logger.exception("Failed to read alias ledger for %s", alias)
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE
            ) from exc
        if folder_id is None:
            return PlainTextResponse(
                "Model folder not found.", status_code=status.HTTP_404_NOT_FOUND
            )
        url = state_container.settings.folder_url_template.format(folder_id=folder_id)
        return RedirectResponse(url, status_code=status.HTTP_302_FOUND)

    @app.get("/linktree", response_model=None)
    async def linktree(request: Request) -> RedirectResponse:
        """Redirect to the configured link-tree page."""
        state_container: RedirectContainer = request.app.state.container
        target = state_container.settings.linktree_url
        if not target:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return RedirectResponse(target, status_code=status.HTTP_302_FOUND)

    @app.post("/update")
    async def update(body: AliasUpdate, request: Request) -> dict[str, str]:
        """Register or overwrite an alias; requires the shared secret."""
        state_container: RedirectContainer = request.app.state.container
        expected = state_container.settings.redirect_api_secret
        if body.secret is None or not secrets.compare_digest(
            body.secret.encode(), expected.encode()
        ):
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
        if not body.alias or not body.folder_id:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Missing alias or folderId",
            )
        try:
            state_container.alias_ledger.set(body.alias, body.folder_id)
        except LedgerError as exc:
            logger.exception("Failed to update alias %s", body.alias)
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE
            ) from exc
        logger.info("Alias %s now points to %s", body.alias, body.folder_id)
        return {"status": "updated", "alias": body.alias}

    return app
