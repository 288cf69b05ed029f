# account_api/services/mail.py
import logging
import smtplib
from email.message import EmailMessage
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from account_api.core.config import Settings, settings as default_settings

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

_env = Environment(
    loader=FileSystemLoader(str(TEMPLATES_DIR)),
    autoescape=select_autoescape(["html"]),
)


class Mailer:
    def __init__(self, settings: Settings = default_settings):
        self.settings = settings
        self.frontend_url = settings.FRONTEND_URL.rstrip("/")

    def render(self, template: str, context: dict) -> str:
        return _env.get_template(f"{template}.html").render(**context)

    def send_mail(self, to: str, subject: str, template: str, context: dict) -> None:
        html = self.render(template, context)

        if not self.settings.SMTP_HOST:
            logger.warning("SMTP_HOST is not set; '%s' mail to %s was not sent", template, to)
            return

        msg = EmailMessage()
        msg["Subject"] = subject
        msg["From"] = self.settings.MAIL_FROM
        msg["To"] = to
        msg.set_content("This message requires an HTML capable mail client.")
        msg.add_alternative(html, subtype="html")

        with smtplib.SMTP(self.settings.SMTP_HOST, self.settings.SMTP_PORT, timeout=self.settings.SMTP_TIMEOUT) as smtp:
            if self.settings.SMTP_USE_TLS:
                smtp.starttls()
            if self.settings.SMTP_USER:
                smtp.login(self.settings.SMTP_USER, self.settings.SMTP_PASSWORD)
            smtp.send_message(msg)

        logger.info("Mail sent", extra={"template": template, "to": to})

    def send_password_reset(self, email: str, first_name: str, last_name: str, token: str) -> None:
        reset_url = f"{self.frontend_url}/reset-password?token={token}"
        self.send_mail(
            to=email,
            subject="Password Reset",
            template="password_reset",
            context={"first_name": first_name, "last_name": last_name, "reset_url": reset_url},
        )

    def send_registration_confirmation(self, email: str, first_name: str, last_name: str, token: str) -> None:
        confirm_url = f"{self.frontend_url}/confirm-registration?token={token}"
        self.send_mail(
            to=email,
            subject="Welcome! Please confirm your registration",
            template="registration_confirmation",
            context={"first_name": first_name, "last_name": last_name, "confirm_url": confirm_url},
        )


def get_mailer() -> Mailer:
    return Mailer()
