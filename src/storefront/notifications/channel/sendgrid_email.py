"""SendGrid email adapter: delivers through the SendGrid v3 Mail Send API."""

import requests
import structlog

from storefront.notifications.channel.email_port import EmailPort

logger = structlog.get_logger(__name__)

SENDGRID_SEND_URL = "https://api.sendgrid.com/v3/mail/send"


class SendGridEmailAdapter(EmailPort):
    """Never raises: transport and API errors come back as a failed result."""

    def __init__(self, api_key: str | None, from_email: str, from_name: str | None = None, timeout: float = 10):
        self.api_key = api_key
        self.from_email = from_email
        self.from_name = from_name
        self.timeout = timeout

    def _payload(self, to, subject, body, html_body):
        content = [{"type": "text/plain", "value": body}]
        if html_body:
            content.append({"type": "text/html", "value": html_body})

        sender = {"email": self.from_email}
        if self.from_name:
            sender["name"] = self.from_name

        return {
            "personalizations": [{"to": [{"email": to}]}],
            "from": sender,
            "subject": subject,
            "content": content,
        }

    def send(
        self,
        to: str,
        subject: str,
        body: str,
        html_body: str | None = None,
    ) -> dict:
        if not self.api_key:
            logger.warning("SendGrid API key not configured, email not sent", to=to, subject=subject)
            return {"message_id": None, "status": "failed", "error": "SendGrid API key not configured"}

        try:
            response = requests.post(
                SENDGRID_SEND_URL,
                json=self._payload(to, subject, body, html_body),
                headers={
                    "Authorization": f"Bearer {self.api_key}",
                    "Content-Type": "application/json",
                },
                timeout=self.timeout,
            )
        except requests.exceptions.Timeout:
            logger.error("SendGrid request timed out", to=to)
            return {"message_id": None, "status": "failed", "error": "SendGrid request timed out"}
        except requests.exceptions.RequestException as exc:
            logger.error("SendGrid request failed", to=to, error=str(exc))
            return {"message_id": None, "status": "failed", "error": str(exc)}

        if response.status_code >= 400:
            logger.error("SendGrid rejected email", to=to, status=response.status_code, body=response.text[:500])
            return {
                "message_id": None,
                "status": "failed",
                "error": f"SendGrid error {response.status_code}: {response.text[:200]}",
            }

        message_id = response.headers.get("X-Message-Id")
        logger.info("Email sent", to=to, subject=subject, message_id=message_id)
        return {"message_id": message_id, "status": "sent"}
