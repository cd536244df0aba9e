from typing import Any, Dict, Optional

import httpx


class BrevoClient:
    """Thin wrapper around the Brevo (Sendinblue) transactional email API."""
    BASE_URL = "https://api.brevo.com/v3"

    def __init__(self, http: httpx.AsyncClient, api_key: str):
        self.http = http
        self.api_key = api_key

    async def send_transactional_email(
        self,
        sender: Dict[str, str],
        to_email: str,
        subject: str,
        html_content: str,
        text_content: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Returns the provider body ({"messageId": ...}); raises httpx.HTTPError on failure."""
        payload: Dict[str, Any] = {
            "sender": sender,
            "to": [{"email": to_email}],
            "subject": subject,
            "htmlContent": html_content,
        }
        if text_content:
            payload["textContent"] = text_content

        response = await self.http.post(
            f"{self.BASE_URL}/smtp/email",
            json=payload,
            headers={"api-key": self.api_key, "accept": "application/json"},
        )
        response.raise_for_status()
        return response.json() if response.content else {}
