import logging
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Depends, File, Form, UploadFile
from fastapi.responses import FileResponse
from sqlalchemy.orm import Session

from app.dependencies import get_current_time, get_notifier, get_storage
from app.errors import ServerError, SubmissionError
from app.models.student import StudentDB
from app.schemas.student import ErrorResponse, SubmissionAccepted
from app.services.email import notify_admin
from app.services.storage import has_upload
from app.services.validation import validate_submission
from config import settings
from database import get_db

logger = logging.getLogger(__name__)

router = APIRouter(tags=["admissions"])


@router.get("/", include_in_schema=False)
async def form_page():
    return FileResponse(Path(settings.STATIC_DIR) / "index.html")


@router.post(
    "/submit",
    response_model=SubmissionAccepted,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def submit_application(
        background_tasks: BackgroundTasks,
        full_name: Optional[str] = Form(None, alias="fullName"),
        dob: Optional[str] = Form(None),
        gender: Optional[str] = Form(None),
        email: Optional[str] = Form(None),
        phone: Optional[str] = Form(None),
        address: Optional[str] = Form(None),
        previous_school: Optional[str] = Form(None, alias="previousSchool"),
        result: Optional[str] = Form(None),
        class_applying: Optional[str] = Form(None, alias="classApplying"),
        agreed: Optional[str] = Form(None),
        photo: Optional[UploadFile] = File(None),
        db: Session = Depends(get_db),
        storage=Depends(get_storage),
        notifier=Depends(get_notifier),
        now=Depends(get_current_time),
):
    photo = photo if has_upload(photo) else None

    # Dosya tipi diske yazılmadan önce kontrol edilir
    if photo is not None:
        storage.check_content_type(photo)

    try:
        submission = validate_submission(
            {
                "full_name": full_name,
                "dob": dob,
                "gender": gender,
                "email": email,
                "phone": phone,
                "address": address,
                "previous_school": previous_school,
                "result": result,
                "class_applying": class_applying,
                "agreed": agreed,
            },
            now,
        )
    except SubmissionError as e:
        logger.info(f"Submission rejected: {e.reason}")
        raise

    photo_path = None
    try:
        if photo is not None:
            photo_path = await storage.save(photo)

        db_student = StudentDB(
            full_name=submission.full_name,
            dob=submission.dob,
            gender=submission.gender,
            email=submission.email,
            phone=submission.phone,
            address=submission.address,
            previous_school=submission.previous_school,
            result=submission.result,
            class_applying=submission.class_applying,
            photo=photo_path,
            agreed=submission.agreed,
        )
        db.add(db_student)
        # id commit öncesi alınır; commit sonrası oturuma dokunulmaz
        db.flush()
        student_id = db_student.id
        db.commit()
    except Exception as e:
        logger.error(f"Error saving submission for {submission.email}: {str(e)}", exc_info=True)
        db.rollback()
        storage.discard(photo_path)
        raise ServerError()

    logger.info(f"Submission {student_id} stored")

    # Bildirim cevaptan sonra gönderilir; hata kaydı etkilemez
    background_tasks.add_task(notify_admin, notifier, submission, photo_path)

    return SubmissionAccepted()
