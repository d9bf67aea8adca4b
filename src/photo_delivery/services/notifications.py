"""Delivery email rendering and sending."""

import base64
import logging
from dataclasses import dataclass
from pathlib import Path

import httpx

from photo_delivery.adapters.resend_client import EmailClient
from photo_delivery.domain.errors import SendError
from photo_delivery.domain.models import PhotographerContext, RecipientRecord

_logger = logging.getLogger(__name__)


def render_template(template: str, values: dict[str, str]) -> str:
    """Replace ``{{key}}`` placeholders literally; unknown ones are left as is."""
    rendered = template
    for key, value in values.items():
        rendered = rendered.replace(f"{{{{{key}}}}}", value)
    return rendered


@dataclass
class Notifier:
    """Send the branded delivery email with the signature attached."""

    email_client: EmailClient
    template_path: Path
    signature_path: Path
    from_address: str
    sender_name: str
    subject_template: str

    async def notify(
        self,
        recipient: RecipientRecord,
        model_id: str,
        link: str,
        photographer: PhotographerContext,
    ) -> dict[str, object]:
        """Render and send the email; a single attempt, no retry."""
        try:
            html = render_template(
                self.template_path.read_text(encoding="utf-8"),
                {
                    "recipientName": recipient.name,
                    "folderNumber": model_id,
                    "photographerName": photographer.name,
                    "photographerHandle": photographer.handle,
                    "driveLink": link,
                },
            )
            signature = base64.b64encode(self.signature_path.read_bytes()).decode(
                "utf-8"
            )
            subject = self.subject_template.replace(
                "{recipient_name}", recipient.name
            )
        except OSError as exc:
            raise SendError(f"Failed to prepare email: {exc}") from exc

        try:
            response = await self.email_client.send(
                sender=f"{self.sender_name} <{self.from_address}>",
                to=recipient.email,
                subject=subject,
                html=html,
                attachments=[
                    {"filename": self.signature_path.name, "content": signature}
                ],
            )
        except (httpx.HTTPError, ValueError) as exc:
            raise SendError(_provider_message(exc)) from exc

        _logger.info("Email sent to %s: %s", recipient.email, response)
        return response


def _provider_message(exc: Exception) -> str:
    """Extract the provider's error text from a failed request."""
    if isinstance(exc, httpx.HTTPStatusError):
        response = exc.response
        try:
            payload = response.json()
        except ValueError:
            payload = None
        if isinstance(payload, dict) and payload.get("message"):
            return str(payload["message"])
        return f"{response.status_code}: {response.text}"
    return str(exc) or type(exc).__name__
