import logging

import httpx
import msal

logger = logging.getLogger(__name__)

GRAPH_SCOPE = "https://graph.microsoft.com/.default"
GRAPH_BASE_URL = "https://graph.microsoft.com/v1.0"


class MailDeliveryError(RuntimeError):
    pass


class GraphMailer:
    """Sends HTML mail from a shared mailbox through Microsoft Graph (client-credentials flow)."""

    def __init__(
        self,
        *,
        tenant_id: str | None,
        client_id: str | None,
        client_secret: str | None,
        sender_email: str | None,
        timeout: float = 15.0,
    ):
        self.tenant_id = tenant_id
        self.client_id = client_id
        self.client_secret = client_secret
        self.sender_email = sender_email
        self.timeout = timeout
        self._app: msal.ConfidentialClientApplication | None = None

    def _confidential_app(self) -> msal.ConfidentialClientApplication:
        if self._app is None:
            if not (self.tenant_id and self.client_id and self.client_secret):
                raise MailDeliveryError("Microsoft Graph credentials are not configured")
            self._app = msal.ConfidentialClientApplication(
                self.client_id,
                authority=f"https://login.microsoftonline.com/{self.tenant_id}",
                client_credential=self.client_secret,
            )
        return self._app

    def _acquire_token(self) -> str:
        result = self._confidential_app().acquire_token_for_client(scopes=[GRAPH_SCOPE])
        token = result.get("access_token") if result else None
        if not token:
            logger.error("Graph token request failed: %s", (result or {}).get("error_description"))
            raise MailDeliveryError("Failed to authenticate with Microsoft Graph API")
        return token

    @staticmethod
    def build_message(to: str, subject: str, html: str, sender: str) -> dict:
        return {
            "message": {
                "subject": subject,
                "body": {"contentType": "HTML", "content": html},
                "toRecipients": [{"emailAddress": {"address": to}}],
                "from": {"emailAddress": {"address": sender}},
            }
        }

    def send(self, to: str, subject: str, html: str, *, from_email: str | None = None) -> None:
        sender = from_email or self.sender_email
        if not sender:
            raise MailDeliveryError("Sender email not configured")

        token = self._acquire_token()
        try:
            with httpx.Client(timeout=self.timeout) as client:
                response = client.post(
                    f"{GRAPH_BASE_URL}/users/{sender}/sendMail",
                    json=self.build_message(to, subject, html, sender),
                    headers={"Authorization": f"Bearer {token}"},
                )
                response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise MailDeliveryError(
                f"Failed to send email: Graph returned {exc.response.status_code}"
            ) from exc
        except httpx.HTTPError as exc:
            raise MailDeliveryError(f"Failed to send email: {exc}") from exc

        logger.info("Email sent successfully via Microsoft Graph to %s (%s) from %s", to, subject, sender)
