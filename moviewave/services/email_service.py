import logging
from datetime import datetime
from typing import Optional
from urllib.parse import quote, urlencode

import httpx

from ..clients.brevo import BrevoClient
from ..exceptions import ConfigurationError, UpstreamFailure

logger = logging.getLogger(__name__)

SENDER_NAME = "MovieWave"
RECOVERY_SUBJECT = "🔑 Recuperación de Contraseña - MovieWave"

RECOVERY_HTML = """
<div style="font-family: 'Segoe UI', Arial, sans-serif; background-color: #f5f9ff; color: #222; padding: 30px;">
  <div style="max-width: 600px; margin: auto; background: #ffffff; border-radius: 10px; padding: 30px;">
    <h2 style="color:#0078d7; text-align:center;">Recupera tu contraseña</h2>
    <p>Hola, has solicitado restablecer tu contraseña en <strong>MovieWave</strong>.</p>
    <p>Haz clic en el siguiente botón para restablecerla:</p>
    <div style="text-align:center; margin: 30px 0;">
      <a href="{link}" style="background-color:#009dff; color:#fff; padding: 12px 25px; border-radius:8px; text-decoration:none; font-weight:600;">
        Restablecer Contraseña
      </a>
    </div>
    <p>Este enlace expira en 1 hora.</p>
    <p>Si no solicitaste este cambio, simplemente ignora este correo.</p>
    <hr style="border:none; border-top:1px solid #ddd; margin:30px 0;">
    <p style="font-size:12px; color:#888; text-align:center;">© {year} MovieWave - Todos los derechos reservados</p>
  </div>
</div>
"""

RECOVERY_TEXT = """Recuperación de contraseña - MovieWave

Hola, has solicitado restablecer tu contraseña.
Haz clic en este enlace para continuar:
{link}

Este enlace expira en 1 hora. Si no solicitaste esto, ignora este correo.

© {year} MovieWave
"""


def recovery_link(frontend_url: str, token: str, email: str) -> str:
    query = urlencode({"token": token, "email": email}, quote_via=quote)
    return f"{frontend_url.rstrip('/')}/resetpassword?{query}"


class EmailService:
    def __init__(self, brevo: Optional[BrevoClient], sender_email: str, frontend_url: str):
        # brevo is None when BREVO_API_KEY is not configured
        self.brevo = brevo
        self.sender_email = sender_email
        self.frontend_url = frontend_url

    async def send_recovery_email(self, email: str, reset_token: str) -> Optional[str]:
        """Send the password recovery email; returns the provider message id."""
        if self.brevo is None:
            raise ConfigurationError("Email service is not configured")

        link = recovery_link(self.frontend_url, reset_token, email)
        year = datetime.now().year
        try:
            result = await self.brevo.send_transactional_email(
                sender={"email": self.sender_email, "name": SENDER_NAME},
                to_email=email,
                subject=RECOVERY_SUBJECT,
                html_content=RECOVERY_HTML.format(link=link, year=year),
                text_content=RECOVERY_TEXT.format(link=link, year=year),
            )
        except httpx.HTTPError as exc:
            raise UpstreamFailure("Error sending recovery email") from exc

        message_id = result.get("messageId")
        logger.info(f"Recovery email sent, message id {message_id}")
        return message_id
