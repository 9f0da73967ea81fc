"""
Best-effort HTTP reporting of guest chat sessions and widget events.

Nothing here may break the guest flow: every transport error and every
non-2xx answer is logged and reported as False.
"""
import logging

import requests
from django.utils import timezone

logger = logging.getLogger(__name__)


class SessionTracker:
    def __init__(self, base_url, timeout=5.0, http=None):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.http = http or requests

    @classmethod
    def from_config(cls, config):
        return cls(config.tracking_base_url, timeout=config.tracking_timeout)

    def _post(self, path, payload):
        url = f"{self.base_url}{path}"
        try:
            response = self.http.post(url, json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            logger.warning(f"Tracking call to {url} failed: {e}")
            return False

        if not 200 <= response.status_code < 300:
            logger.warning(f"Tracking call to {url} returned {response.status_code}")
            return False
        return True

    def track_session(self, session):
        payload = {
            'hotel_id': session.hotel_id,
            'room_number': session.room_number,
            'session_id': session.session_id,
            'hotel_name': session.hotel_name,
            'source': session.source,
        }
        if session.guest_name:
            payload['guest_name'] = session.guest_name
        if session.reservation_id:
            payload['reservation_id'] = session.reservation_id

        ok = self._post('/api/track-session/', payload)
        if ok:
            logger.info(f"Session {session.session_id} tracked for room {session.room_number}")
        return ok

    def track_chat_event(self, session, event_type, message=''):
        return self._post('/api/track-chat-event/', {
            'hotel_id': session.hotel_id,
            'session_id': session.session_id,
            'room_number': session.room_number,
            'event_type': event_type,
            'message': message or '',
            'timestamp': timezone.now().isoformat(),
        })

    def store_session_data(self, session, user_id):
        """Map the widget's user id to the session so the bot can look it up."""
        return self._post('/api/session-data/', {
            'session_id': user_id,
            'user_id': user_id,
            'original_session_id': session.session_id,
            'hotel_id': session.hotel_id,
            'room_number': session.room_number,
            'hotel_name': session.hotel_name,
            'timestamp': timezone.now().isoformat(),
            'source': session.source,
        })
