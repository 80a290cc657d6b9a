"""Agenda service - Daily agenda image notifications"""

import logging
from datetime import datetime, timezone
from typing import Awaitable, Callable, Optional

from sqlalchemy.orm import Session

from ...config import AGENDA_DEFAULT_COUNTRY_CODE
from ...models import AgendaNotificationConfig, Appointment
from ...services.renderer import AGENDA_VIEWPORT, BrowserManager
from ...services.storage import upload_image_async
from ...services.webhook import send_webhook
from . import render_agenda_html
from .repository import AgendaRepository
from .schemas import AppointmentInput, MemberAppointments, MemberInfo, OrganizationInfo
from .trigger import local_today, should_trigger

logger = logging.getLogger(__name__)

UNASSIGNED_MEMBER_KEY = "unassigned"
DEFAULT_RECIPIENT_NAME = "Recipient"

Uploader = Callable[[bytes, str], Awaitable[str]]
WebhookSender = Callable[[dict], Awaitable[bool]]


def _member_info(appointment: Appointment) -> MemberInfo:
    if appointment.member is None:
        return MemberInfo(id=None, firstName="Unassigned", lastName="")
    return MemberInfo(
        id=appointment.member.id,
        firstName=appointment.member.first_name,
        lastName=appointment.member.last_name or "",
    )


def _appointment_input(appointment: Appointment) -> AppointmentInput:
    contact = appointment.contact
    service = appointment.service
    client_name = f"{contact.first_name} {contact.last_name or ''}".strip() if contact else ""
    return AppointmentInput(
        startTime=appointment.start_time,
        endTime=appointment.end_time,
        serviceDurationMinutes=service.duration_minutes if service else None,
        clientName=client_name,
        serviceName=service.name if service else "",
        status=appointment.status,
    )


def group_by_member(appointments: list[Appointment]) -> list[MemberAppointments]:
    """Group appointments per member in first-seen order; unassigned ones share a bucket"""
    groups: dict = {}
    for appointment in appointments:
        key = appointment.member_id if appointment.member_id is not None else UNASSIGNED_MEMBER_KEY
        if key not in groups:
            groups[key] = MemberAppointments(member=_member_info(appointment), appointments=[])
        groups[key].appointments.append(_appointment_input(appointment))
    return list(groups.values())


def build_webhook_payload(
    config: AgendaNotificationConfig,
    organization: OrganizationInfo,
    groups: list[MemberAppointments],
    agenda_date: str,
    image_url: str,
) -> dict:
    country_code = config.country_code or AGENDA_DEFAULT_COUNTRY_CODE
    return {
        "event_type": "daily_agenda",
        "organization": organization.model_dump(),
        "agenda_date": agenda_date,
        "image_url": image_url,
        "recipient_phone": f"{country_code}{config.recipient_phone}",
        "recipient_name": config.recipient_name or DEFAULT_RECIPIENT_NAME,
        "members_with_appointments": [
            {
                "member": {
                    "id": group.member.id,
                    "first_name": group.member.firstName,
                    "last_name": group.member.lastName,
                },
                "appointment_count": len(group.appointments),
            }
            for group in groups
        ],
        "total_appointments": sum(len(group.appointments) for group in groups),
    }


class AgendaNotificationService:
    """Runs one trigger cycle of the daily agenda notifications"""

    def __init__(
        self,
        db: Session,
        renderer: BrowserManager,
        uploader: Uploader = upload_image_async,
        webhook_sender: WebhookSender = send_webhook,
    ):
        self.db = db
        self.repo = AgendaRepository()
        self.renderer = renderer
        self.uploader = uploader
        self.webhook_sender = webhook_sender

    async def generate_agenda_image(
        self,
        organization: OrganizationInfo,
        groups: list[MemberAppointments],
        agenda_date: str,
        now: datetime,
    ) -> str:
        """Render, rasterize and upload a day's agenda; returns the public image URL"""
        logger.info(f"🎨 Generating agenda image for {organization.name} on {agenda_date}")

        html_content = render_agenda_html(organization, groups, agenda_date)
        image_bytes = await self.renderer.html_to_image(html_content, viewport=AGENDA_VIEWPORT)

        key = f"agenda-{organization.id}-{agenda_date}-{int(now.timestamp() * 1000)}.png"
        return await self.uploader(image_bytes, key)

    async def process_config(self, config: AgendaNotificationConfig, now: datetime) -> dict:
        organization = OrganizationInfo(id=config.organization.id, name=config.organization.name)
        logger.info(f"🏢 Processing organization: {organization.name}")

        day = local_today(now, config.timezone)
        agenda_date = day.isoformat()
        appointments = self.repo.get_appointments_for_day(self.db, organization.id, day)
        logger.info(f"📅 Found {len(appointments)} appointments for {agenda_date}")

        if not appointments:
            logger.info(f"📭 No appointments for {organization.name} today")
            return {
                "organization": organization.name,
                "status": "skipped",
                "reason": "no_appointments",
                "appointments_count": 0,
            }

        groups = group_by_member(appointments)

        try:
            image_url = await self.generate_agenda_image(organization, groups, agenda_date, now)
        except Exception as e:
            logger.error(f"❌ Failed to generate image for {organization.name}: {e}")
            logger.error(
                f"📊 Image error details: appointments={len(appointments)}, members={len(groups)}"
            )
            return {
                "organization": organization.name,
                "status": "failed",
                "error": f"Image generation failed: {e}",
                "appointments_count": len(appointments),
            }

        payload = build_webhook_payload(config, organization, groups, agenda_date, image_url)
        logger.info(f"📱 Recipient: {payload['recipient_phone']} ({payload['recipient_name']})")
        delivered = await self.webhook_sender(payload)

        return {
            "organization": organization.name,
            "status": "success",
            "appointments_count": len(appointments),
            "recipient": payload["recipient_phone"],
            "image_url": image_url,
            "webhook_delivered": delivered,
        }

    async def run(self, now: Optional[datetime] = None) -> dict:
        """
        Process every enabled configuration whose send hour is now.

        A failure for one organization is recorded in its result and does
        not stop the others. Errors loading configurations propagate.
        """
        now = now or datetime.now(timezone.utc)
        logger.info(f"🚀 Daily agenda notifications - starting at {now.isoformat()}")

        configs = self.repo.get_enabled_configs(self.db)
        if not configs:
            logger.info("📭 No agenda notification configurations found")
            return {"message": "No configurations found", "processed_count": 0, "results": []}

        logger.info(f"📋 Found {len(configs)} agenda notification configurations")

        due = []
        for config in configs:
            try:
                if should_trigger(now, config.timezone, config.send_time):
                    due.append(config)
            except ValueError as e:
                logger.error(f"❌ Invalid send_time {config.send_time!r} for config {config.id}: {e}")

        logger.info(f"🎯 {len(due)} configurations to process")
        if not due:
            return {
                "message": "No configurations for current hour",
                "processed_count": 0,
                "results": [],
            }

        results = []
        for config in due:
            try:
                results.append(await self.process_config(config, now))
            except Exception as e:
                name = config.organization.name if config.organization else config.organization_id
                logger.error(f"❌ Error processing {name}: {type(e).__name__}: {e}")
                results.append({"organization": name, "status": "failed", "error": str(e)})

        logger.info("🎉 Daily agenda notifications - execution completed")
        return {
            "message": "Agenda notifications processed",
            "processed_count": len(due),
            "results": results,
        }
