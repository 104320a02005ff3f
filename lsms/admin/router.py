import base64
import binascii
import logging
import re

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from lsms.admin.schemas import ExistsResponse, CheckPassRequest, KycEmailRequest, SuccessFlag
from lsms.config.levels import ADMIN_FILE, LECTURER_FILE
from lsms.mail.service import Attachment, MailService, get_mail_service
from lsms.mail.templates import kyc_email
from lsms.storage import JsonStore, get_store

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api",
    tags=["admin"],
)

_DATA_URL = re.compile(r"^data:(.+);base64,(.+)$", re.DOTALL)


@router.get("/admin/exists", response_model=ExistsResponse)
def admin_exists(store: JsonStore = Depends(get_store)):
    return {"exists": store.exists(ADMIN_FILE)}


@router.post("/admin/copy", response_model=ExistsResponse)
def bootstrap_admin(store: JsonStore = Depends(get_store)):
    """
    Create administrator.json from the current lecturer directory.
    Does nothing if the administrator file already exists.
    """
    with store.lock:
        if not store.exists(ADMIN_FILE):
            if store.exists(LECTURER_FILE):
                store.copy(LECTURER_FILE, ADMIN_FILE)
            else:
                store.write(ADMIN_FILE, [])
            logger.info("Administrator file created")
    return {"exists": True}


@router.post("/admin/check-pass", response_model=SuccessFlag, response_model_exclude_none=True)
def check_admin_pass(request: CheckPassRequest, store: JsonStore = Depends(get_store)):
    admins = store.read(ADMIN_FILE, default=[])
    if not request.pass_ or not isinstance(admins, list):
        return {"success": False}
    return {"success": any(a.get("signin_password") == request.pass_ for a in admins if isinstance(a, dict))}


@router.post("/send-kyc-email", response_model=SuccessFlag, response_model_exclude_none=True)
async def send_kyc_email(request: KycEmailRequest, mail_service: MailService = Depends(get_mail_service)):
    """Ask an administrator to approve a lecturer account, attaching the lecturer's ID image."""
    if not request.adminEmail:
        return JSONResponse(status_code=400, content={"success": False, "error": "Admin email required."})

    match = _DATA_URL.match(request.image or "")
    if not match:
        return JSONResponse(status_code=400, content={"success": False, "error": "Invalid image data"})

    mime_type, encoded = match.group(1), match.group(2)
    try:
        content = base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError):
        return JSONResponse(status_code=400, content={"success": False, "error": "Invalid image data"})

    subject, text = kyc_email(request.userEmail or "")
    attachment = Attachment(
        filename=f"lecturer_id.{mime_type.split('/')[-1]}",
        content=content,
        content_type=mime_type,
    )
    sent = await mail_service.send_email(
        request.adminEmail, subject, text_content=text,
        attachments=[attachment], from_name="Landmark Lecturer",
    )
    if not sent:
        return JSONResponse(status_code=500, content={"success": False, "error": "Failed to send KYC email."})
    return {"success": True}
