import logging
import mimetypes
from io import BytesIO
from pathlib import Path
from typing import List, Optional

from fastapi_mail import FastMail, MessageSchema, ConnectionConfig, MessageType
from starlette.datastructures import Headers, UploadFile

from app.schemas.student import StudentSubmission

logger = logging.getLogger(__name__)

SUBJECT = "New Student Admission Submission"


def build_connection_config(settings) -> ConnectionConfig:
    mail_settings = {
        'MAIL_USERNAME': settings.MAIL_USERNAME,
        'MAIL_PASSWORD': settings.MAIL_PASSWORD,
        'MAIL_FROM': settings.mail_sender,
        'MAIL_SERVER': settings.MAIL_SERVER,
        'MAIL_PORT': settings.MAIL_PORT,
    }

    # Mail ayarlarını logla (şifre hariç)
    for key, value in mail_settings.items():
        if 'PASSWORD' not in key:
            logger.info(f"{key}: {value}")
        else:
            logger.info(f"{key}: {'*' * 8}")

    missing_settings = [k for k, v in mail_settings.items() if not v]
    if missing_settings and not settings.MAIL_SUPPRESS_SEND:
        raise ValueError(f"Missing email settings: {', '.join(missing_settings)}")

    return ConnectionConfig(
        MAIL_USERNAME=mail_settings['MAIL_USERNAME'],
        MAIL_PASSWORD=mail_settings['MAIL_PASSWORD'],
        MAIL_FROM=mail_settings['MAIL_FROM'] or settings.ADMIN_EMAIL,
        MAIL_PORT=int(mail_settings['MAIL_PORT']),
        MAIL_SERVER=mail_settings['MAIL_SERVER'],
        MAIL_STARTTLS=True,
        MAIL_SSL_TLS=False,
        USE_CREDENTIALS=bool(mail_settings['MAIL_USERNAME']),
        VALIDATE_CERTS=True,
        SUPPRESS_SEND=settings.MAIL_SUPPRESS_SEND,
    )


def compose_submission_summary(submission: StudentSubmission, photo_path: Optional[str]) -> str:
    lines = [
        "New submission:",
        f"Full Name: {submission.full_name}",
        f"DOB: {submission.dob.isoformat()}",
        f"Gender: {submission.gender}",
        f"Email: {submission.email}",
        f"Phone: {submission.phone}",
        f"Address: {submission.address}",
        f"Previous School: {submission.previous_school or 'N/A'}",
        f"Result: {submission.result}",
        f"Class Applying: {submission.class_applying}",
        f"Photo: {'Attached' if photo_path else 'None'}",
    ]
    return "\n".join(lines) + "\n"


def _load_attachment(photo_path: str) -> UploadFile:
    # fastapi-mail string yollarını sadece çalışma dizini altında kabul ediyor,
    # bu yüzden dosyayı belleğe alıp UploadFile olarak veriyoruz
    path = Path(photo_path)
    mime_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
    return UploadFile(
        file=BytesIO(path.read_bytes()),
        filename=path.name,
        headers=Headers({"content-type": mime_type}),
    )


class AdminNotifier:
    """Sends the administrator a summary of every accepted submission."""

    def __init__(self, conf: ConnectionConfig, recipients: List[str]):
        self.conf = conf
        self.recipients = recipients
        self.mailer = FastMail(conf)

    def build_message(self, submission: StudentSubmission, photo_path: Optional[str]) -> MessageSchema:
        attachments = [_load_attachment(photo_path)] if photo_path else []
        return MessageSchema(
            subject=SUBJECT,
            recipients=self.recipients,
            body=compose_submission_summary(submission, photo_path),
            subtype=MessageType.plain,
            attachments=attachments,
        )

    async def send_submission_notice(self, submission: StudentSubmission, photo_path: Optional[str]):
        message = self.build_message(submission, photo_path)
        await self.mailer.send_message(message)
        logger.info(f"Submission notice sent to {', '.join(self.recipients)}")


async def notify_admin(notifier, submission: StudentSubmission, photo_path: Optional[str]) -> bool:
    """Best-effort delivery run after the response; failures are logged only."""
    try:
        await notifier.send_submission_notice(submission, photo_path)
        return True
    except Exception as e:
        logger.error(f"Error sending submission notice for {submission.email}: {str(e)}", exc_info=True)
        return False
