"""Form relays: support requests, wholesale applications and contact messages.

Each command records an ``Inquiry`` and relays it to the store inbox with
the sender as Reply-To. The relay outcome is stored on the inquiry and the
handler returns the inquiry id either way; callers decide how to report a
failed relay.
"""

from protean import handle
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from notifications.channel import send_email
from notifications.inquiry.inquiry import Inquiry, InquiryKind
from notifications.templates.contact_message import ContactMessageTemplate
from notifications.templates.support_request import SupportRequestTemplate
from notifications.templates.wholesale_application import WholesaleApplicationTemplate
from shared.config import get_settings
from shared.domain import storefront
from shared.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="Inquiry")
class SubmitSupportRequest:
    user_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    email = String(required=True, max_length=255)
    subject = String(required=True, max_length=255)
    message = Text(required=True)


@storefront.command(part_of="Inquiry")
class SubmitWholesaleApplication:
    user_id = Identifier(required=True)
    full_name = String(required=True, max_length=255)
    business_email = String(required=True, max_length=255)
    company_name = String(required=True, max_length=255)
    gst_number = String(required=True, max_length=20)
    product_types = Text(required=True)
    catalog_file = Text()


@storefront.command(part_of="Inquiry")
class SubmitContactForm:
    user_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    email = String(required=True, max_length=255)
    subject = String(required=True, max_length=255)
    message = Text(required=True)


def _relay(inquiry: Inquiry, template, context: dict) -> str:
    result = send_email(template, to=get_settings().store_inbox, context=context, reply_to=inquiry.email)
    inquiry.mark_relayed(result)
    current_domain.repository_for(Inquiry).add(inquiry)

    logger.info("inquiry_recorded", inquiry_id=str(inquiry.id), kind=inquiry.kind, relay_status=inquiry.relay_status)
    return str(inquiry.id)


@storefront.command_handler(part_of=Inquiry)
class InquiryHandler:
    @handle(SubmitSupportRequest)
    def submit_support_request(self, command):
        inquiry = Inquiry.record(
            command.user_id,
            InquiryKind.SUPPORT,
            name=command.name,
            email=command.email,
            subject=command.subject,
            message=command.message,
        )
        context = {"name": command.name, "email": command.email, "subject": command.subject, "message": command.message}
        return _relay(inquiry, SupportRequestTemplate, context)

    @handle(SubmitWholesaleApplication)
    def submit_wholesale_application(self, command):
        details = {
            "company_name": command.company_name,
            "gst_number": command.gst_number,
            "product_types": command.product_types,
            "catalog_file": command.catalog_file,
        }
        inquiry = Inquiry.record(
            command.user_id,
            InquiryKind.WHOLESALE_APPLICATION,
            name=command.full_name,
            email=command.business_email,
            subject="Wholesale application",
            details=details,
        )
        context = {"full_name": command.full_name, "business_email": command.business_email, **details}
        return _relay(inquiry, WholesaleApplicationTemplate, context)

    @handle(SubmitContactForm)
    def submit_contact_form(self, command):
        inquiry = Inquiry.record(
            command.user_id,
            InquiryKind.CONTACT,
            name=command.name,
            email=command.email,
            subject=command.subject,
            message=command.message,
        )
        context = {"name": command.name, "email": command.email, "subject": command.subject, "message": command.message}
        return _relay(inquiry, ContactMessageTemplate, context)


def get_inquiry(inquiry_id: str) -> Inquiry:
    return current_domain.repository_for(Inquiry).get(inquiry_id)
