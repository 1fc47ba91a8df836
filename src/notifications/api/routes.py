"""FastAPI endpoints relaying the store's forms to its inbox."""

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from identity.api.deps import current_user
from identity.user.user import User
from notifications.api.schemas import ContactFormRequest, SupportRequest, WholesaleApplicationRequest
from notifications.inquiry.submission import (
    SubmitContactForm,
    SubmitSupportRequest,
    SubmitWholesaleApplication,
    get_inquiry,
)
from shared.errors import DeliveryFailedError
from shared.schemas import MessageResponse

inquiry_router = APIRouter(prefix="/api", tags=["inquiries"])


def _relay(command, failure_message: str) -> None:
    inquiry_id = current_domain.process(command, asynchronous=False)
    if not get_inquiry(inquiry_id).relayed:
        raise DeliveryFailedError(failure_message)


@inquiry_router.post("/support", response_model=MessageResponse)
async def submit_support_request(body: SupportRequest, user: User = Depends(current_user)) -> MessageResponse:
    command = SubmitSupportRequest(user_id=str(user.id), **body.model_dump())
    _relay(command, "Failed to submit support request")
    return MessageResponse(message="Support request submitted successfully")


@inquiry_router.post("/wholesale-application", response_model=MessageResponse)
async def submit_wholesale_application(
    body: WholesaleApplicationRequest, user: User = Depends(current_user)
) -> MessageResponse:
    command = SubmitWholesaleApplication(user_id=str(user.id), **body.model_dump())
    _relay(command, "Failed to process application")
    return MessageResponse(message="Application submitted successfully")


@inquiry_router.post("/submit-contact-form", response_model=MessageResponse)
async def submit_contact_form(body: ContactFormRequest, user: User = Depends(current_user)) -> MessageResponse:
    command = SubmitContactForm(user_id=str(user.id), **body.model_dump())
    _relay(command, "Failed to send your message.")
    return MessageResponse(message="Your message has been sent successfully.")
