from fastapi import APIRouter, BackgroundTasks, Depends
from typing import List
import logging

from lsms.exceptions import ValidationError, NotFoundError
from lsms.lecturers.directory import LecturerDirectory, get_lecturer_directory
from lsms.lecturers.schemas import (
    SignupRequest, LoginRequest, LoginResponse, ForgotPasswordRequest,
    CheckEmailRequest, CheckEmailResponse, LecturerResponse, SuccessResponse,
)
from lsms.mail.service import MailService, get_mail_service, load_logo_attachment
from lsms.mail.templates import welcome_email, credentials_email

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api",
    tags=["lecturers"],
)


async def send_welcome_email(mail_service: MailService, lec_name: str, signin_email: str):
    """Runs after the signup response; a failed send leaves the account in place."""
    subject, html = welcome_email(lec_name)
    logo = load_logo_attachment()
    sent = await mail_service.send_email(
        signin_email, subject, html_content=html,
        attachments=[logo] if logo else None,
        from_name="Landmark Student Management Team",
    )
    if not sent:
        logger.error(f"Welcome email to {signin_email} was not delivered")


@router.post("/lecturer/signup", response_model=SuccessResponse, response_model_exclude_none=True)
async def signup(
    request: SignupRequest,
    background_tasks: BackgroundTasks,
    directory: LecturerDirectory = Depends(get_lecturer_directory),
    mail_service: MailService = Depends(get_mail_service),
):
    account = directory.signup(request.lec_name, request.signin_email, request.signin_password)
    background_tasks.add_task(send_welcome_email, mail_service, account["lec_name"], account["signin_email"])
    return {"success": True, "message": "Lecturer registered successfully."}


@router.post("/lecturer/login", response_model=LoginResponse)
def login(request: LoginRequest, directory: LecturerDirectory = Depends(get_lecturer_directory)):
    lec_name = directory.login(request.signin_email, request.signin_password)
    return {"success": True, "lec_name": lec_name, "message": "login successful"}


@router.post("/lecturer/forgot-password", response_model=SuccessResponse, response_model_exclude_none=True)
async def forgot_password(
    request: ForgotPasswordRequest,
    directory: LecturerDirectory = Depends(get_lecturer_directory),
    mail_service: MailService = Depends(get_mail_service),
):
    """
    Email the LSMS credentials to a registered lecturer.
    A failed delivery is reported with success=false instead of an error status.
    """
    if not request.signin_email:
        raise ValidationError("Email required.")
    lecturer = directory.get(request.signin_email)
    if lecturer is None:
        raise NotFoundError("Email not found.")

    subject, html = credentials_email(lecturer.get("lec_name") or "")
    logo = load_logo_attachment()
    sent = await mail_service.send_email(
        request.signin_email, subject, html_content=html,
        attachments=[logo] if logo else None,
    )
    if not sent:
        return {"success": False, "error": "Failed to send credentials email."}
    return {"success": True}


@router.post("/lecturer/check-email", response_model=CheckEmailResponse)
def check_email(request: CheckEmailRequest, directory: LecturerDirectory = Depends(get_lecturer_directory)):
    return {"exists": directory.email_exists(request.email)}


@router.get("/lecturers", response_model=List[LecturerResponse])
def list_lecturers(directory: LecturerDirectory = Depends(get_lecturer_directory)):
    return directory.list()
