"""
Event handlers for domain events.

These handlers react to application events for side effects such as
audit logging and provisioning an approved application's steps.
"""

import logging
from typing import Optional

from applications.domain.events import (
    ApplicationApproved,
    ApplicationStatusChanged,
    ApplicationSubmitted,
    ExpertAssigned,
    ExpertStepsProvisioned,
)
from core.domain.events import DomainEvent, EventHandler
from core.infrastructure.container import DataAccess, django_data_access

logger = logging.getLogger(__name__)

AUDITED_EVENTS = (
    ApplicationSubmitted,
    ExpertAssigned,
    ApplicationApproved,
    ApplicationStatusChanged,
    ExpertStepsProvisioned,
)


class AuditLogEventHandler(EventHandler):
    """
    Event handler for audit logging.

    Logs every application event with its identity and payload.
    """

    async def handle(self, event: DomainEvent) -> None:
        """
        Handle domain event for audit logging.

        Args:
            event: Domain event to log
        """
        logger.info(
            "Audit log: %s - %s",
            event.event_type,
            event.aggregate_id,
            extra=event.to_dict(),
        )


class ApplicationProvisioningEventHandler(EventHandler):
    """
    Provisions an application's steps when an admin approves it.

    Copies the requirement's expert template and its regular steps into
    the application. Both copies are idempotent, so a redelivered event
    adds nothing.
    """

    def __init__(self, data: DataAccess):
        self.data = data

    async def handle(self, event: DomainEvent) -> None:
        """
        Handle ApplicationApproved.

        Args:
            event: Domain event; anything but ApplicationApproved is ignored
        """
        if not isinstance(event, ApplicationApproved):
            return

        from provisioning.actions import (
            copy_expert_steps_from_requirement_to_application,
            copy_regular_steps_from_requirement_to_application,
        )

        for provision in (
            copy_expert_steps_from_requirement_to_application,
            copy_regular_steps_from_requirement_to_application,
        ):
            result = await provision(
                self.data, event.application_id, event.state, event.license_type_name
            )
            if result.ok:
                logger.info(
                    "%s provisioned %d steps for application %s",
                    provision.__name__,
                    len(result.data),
                    event.application_id,
                )
            else:
                logger.warning(
                    "Provisioning failed for application %s: %s",
                    event.application_id,
                    result.error,
                )


def register_event_handlers(data: Optional[DataAccess] = None) -> None:
    """
    Register all event handlers on the bus of a DataAccess.

    The provisioning handler works against the same repositories whose
    bus delivers the approval, so an approval made through ``data`` is
    provisioned through ``data``.

    Args:
        data: DataAccess to subscribe on (Django-backed when omitted)
    """
    if data is None:
        data = django_data_access()
    bus = data.event_bus

    audit_handler = AuditLogEventHandler()
    provisioning_handler = ApplicationProvisioningEventHandler(data)

    for event_type in AUDITED_EVENTS:
        bus.subscribe(event_type, audit_handler)

    bus.subscribe(ApplicationApproved, provisioning_handler)

    logger.info("Event handlers registered")
