"""
Guest chat session context.

A session is established from the query string of the QR deep link
(`/chat?hotel_id=..&room_number=..&session_id=..`) and is immutable
afterwards; every downstream consumer (widget config, tracking payloads,
system messages) reads from the same SessionContext.
"""
from dataclasses import dataclass, field, asdict

from django.utils import timezone

REQUIRED_PARAMS = ('hotel_id', 'room_number', 'session_id')
DEFAULT_HOTEL_NAME = 'Hotel'
QR_CODE_SOURCE = 'qr_code'


class MissingSessionParameters(ValueError):
    message = "Missing required parameters: hotel_id, room_number, or session_id"

    def __init__(self, missing):
        self.missing = list(missing)
        super().__init__(self.message)


def _now_iso():
    return timezone.now().isoformat()


@dataclass(frozen=True)
class SessionContext:
    hotel_id: str
    room_number: str
    session_id: str
    hotel_name: str = DEFAULT_HOTEL_NAME
    guest_name: str = None
    reservation_id: str = None
    timestamp: str = field(default_factory=_now_iso)
    source: str = QR_CODE_SOURCE

    @classmethod
    def from_query(cls, params, hotel_name=None):
        """
        Build a session from query parameters (a dict or QueryDict).
        Raises MissingSessionParameters when a required value is absent or blank.
        """
        values = {key: (params.get(key) or '').strip() for key in REQUIRED_PARAMS}
        missing = [key for key in REQUIRED_PARAMS if not values[key]]
        if missing:
            raise MissingSessionParameters(missing)

        return cls(
            hotel_id=values['hotel_id'],
            room_number=values['room_number'],
            session_id=values['session_id'],
            hotel_name=hotel_name or DEFAULT_HOTEL_NAME,
            guest_name=params.get('guest_name') or None,
            reservation_id=params.get('reservation_id') or None,
        )

    def as_user_data(self):
        data = {
            'hotel_id': self.hotel_id,
            'room_number': self.room_number,
            'session_id': self.session_id,
            'hotel_name': self.hotel_name,
            'timestamp': self.timestamp,
            'source': self.source,
        }
        if self.guest_name:
            data['guest_name'] = self.guest_name
        if self.reservation_id:
            data['reservation_id'] = self.reservation_id
        return data

    def as_dict(self):
        return asdict(self)

    def tagged_text(self):
        return f"SESSION_DATA: {self.hotel_name}|{self.room_number}|{self.hotel_id}|{self.session_id}"
