import logging
from dataclasses import dataclass, field

from django.db import DatabaseError, transaction

from .models import Room

logger = logging.getLogger(__name__)


@dataclass
class QRRegenerationResult:
    updated: list = field(default_factory=list)
    failed: list = field(default_factory=list)
    total: int = 0

    @property
    def all_succeeded(self):
        return not self.failed

    @property
    def all_failed(self):
        return self.total > 0 and not self.updated

    def as_dict(self):
        return {
            'updated': self.updated,
            'failed': self.failed,
            'total': self.total,
            'updated_count': len(self.updated),
            'failed_count': len(self.failed),
        }


def regenerate_room_qr_codes(hotel):
    """
    Give every active room of `hotel` a new QR session id and deep link.

    Rooms are saved one by one so a failing row does not roll back the
    others; failures are collected in the result.
    """
    rooms = list(Room.objects.for_hotel(hotel).select_related('hotel'))
    result = QRRegenerationResult(total=len(rooms))

    for room in rooms:
        previous = str(room.qr_session_id) if room.qr_session_id else None
        try:
            room.rotate_qr_session()
            with transaction.atomic():
                room.save(update_fields=['qr_session_id', 'qr_code_url', 'updated_at'])
        except DatabaseError as e:
            logger.error(f"QR regeneration failed for room {room.room_number} of hotel {hotel.id}: {e}")
            result.failed.append({
                'room_id': str(room.id),
                'room_number': room.room_number,
                'error': str(e),
            })
            continue

        result.updated.append({
            'room_id': str(room.id),
            'room_number': room.room_number,
            'previous_session_id': previous,
            'session_id': str(room.qr_session_id),
            'chat_url': room.qr_code_url,
        })

    logger.info(
        f"Regenerated QR codes for hotel {hotel.id}: "
        f"{len(result.updated)} updated, {len(result.failed)} failed of {result.total}"
    )
    return result
