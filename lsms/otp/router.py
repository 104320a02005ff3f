from fastapi import APIRouter, Depends

from lsms.mail.service import MailService, get_mail_service
from lsms.otp.schemas import SendOtpRequest, ValidateOtpRequest, OtpResponse
from lsms.otp.service import OtpService, get_otp_service

router = APIRouter(
    prefix="/api/lecturer",
    tags=["otp"],
)


@router.post("/send-otp", response_model=OtpResponse, response_model_exclude_none=True)
async def send_otp(
    request: SendOtpRequest,
    otp_service: OtpService = Depends(get_otp_service),
    mail_service: MailService = Depends(get_mail_service),
):
    """Issue a login code to a registered lecturer and email it."""
    if not await otp_service.send(request.email, mail_service):
        return {"success": False, "error": "Failed to send OTP email."}
    return {"success": True}


@router.post("/validate-otp", response_model=OtpResponse, response_model_exclude_none=True)
def validate_otp(request: ValidateOtpRequest, otp_service: OtpService = Depends(get_otp_service)):
    otp_service.validate(request.email, request.otp)
    return {"success": True}
