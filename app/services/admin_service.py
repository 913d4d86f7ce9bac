from decimal import Decimal
from typing import Optional

from app.repositories.event_repository import EventRepository
from app.repositories.registration_repository import RegistrationRepository
from app.models.enums import EventStatus
from app.utils.dates import as_utc, utc_now

RECENT_REGISTRATIONS_LIMIT = 10


class AdminService:
    @staticmethod
    def get_stats(organizer_id: str, now=None, recent_limit: Optional[int] = None):
        """Dashboard totals over one organizer's events. Read-only."""
        now = now or utc_now()
        events = EventRepository.get_events_by_organizer(organizer_id)

        total_registrations = 0
        total_revenue = Decimal("0")
        for event in events:
            total_registrations += event.registered_count
            if event.is_paid and event.price:
                total_revenue += Decimal(event.price) * event.registered_count

        recent = RegistrationRepository.get_recent_for_organizer(
            organizer_id, limit=recent_limit or RECENT_REGISTRATIONS_LIMIT
        )

        return {
            "total_events": len(events),
            "published_events": len(
                [e for e in events if e.status == EventStatus.PUBLISHED]
            ),
            "upcoming_events": len([e for e in events if as_utc(e.event_starts) > now]),
            "total_registrations": total_registrations,
            "total_revenue": f"{total_revenue:.2f}",
            "recent_registrations": [r.to_dict(include_event=True) for r in recent],
        }
