import uuid
from unittest.mock import patch
from urllib.parse import urlparse, parse_qs

from django.db import DatabaseError
from django.test import TestCase

from hotel.models import Hotel, Room
from hotel.services import regenerate_room_qr_codes


class RoomQrDefaultsTest(TestCase):

    def test_room_gets_qr_link_on_create(self):
        hotel = Hotel.objects.create(name="Grand Plaza", base_url="https://grandplaza.test")

        room = Room.objects.create(hotel=hotel, room_number="101")

        self.assertIsNotNone(room.qr_session_id)
        self.assertTrue(room.qr_code_url.startswith("https://grandplaza.test/chat?"))
        self.assertIn(f"hotel_id={hotel.id}", room.qr_code_url)
        self.assertIn(f"session_id={room.qr_session_id}", room.qr_code_url)

    def test_session_id_type_matches_database(self):
        hotel = Hotel.objects.create(name="Grand Plaza")

        room = Room.objects.create(hotel=hotel, room_number="101")
        stored = Room.objects.get(pk=room.pk)

        self.assertIsInstance(room.qr_session_id, uuid.UUID)
        self.assertEqual(room.qr_session_id, stored.qr_session_id)

        room.rotate_qr_session()
        self.assertIsInstance(room.qr_session_id, uuid.UUID)

    def test_renaming_room_rebuilds_link_with_same_session(self):
        hotel = Hotel.objects.create(name="Grand Plaza", base_url="https://grandplaza.test")
        room = Room.objects.create(hotel=hotel, room_number="101")
        session_id = room.qr_session_id

        room.room_number = "Suite 4"
        room.save()
        room.refresh_from_db()

        query = parse_qs(urlparse(room.qr_code_url).query)
        self.assertEqual(query['room_number'], ["Suite 4"])
        self.assertEqual(query['session_id'], [str(session_id)])
        self.assertEqual(room.qr_session_id, session_id)
        self.assertFalse(room.qr_link_is_stale())

    def test_hotel_slug_is_unique(self):
        first = Hotel.objects.create(name="Grand Plaza")
        second = Hotel.objects.create(name="Grand Plaza")

        self.assertEqual(first.slug, "grand-plaza")
        self.assertNotEqual(first.slug, second.slug)

    def test_for_hotel_returns_active_rooms_in_order(self):
        hotel = Hotel.objects.create(name="Grand Plaza")
        Room.objects.create(hotel=hotel, room_number="202")
        Room.objects.create(hotel=hotel, room_number="101")
        Room.objects.create(hotel=hotel, room_number="150", is_active=False)

        numbers = list(Room.objects.for_hotel(hotel).values_list('room_number', flat=True))

        self.assertEqual(numbers, ["101", "202"])


class RegenerateRoomQrCodesTest(TestCase):

    def setUp(self):
        self.hotel = Hotel.objects.create(name="Grand Plaza", base_url="https://grandplaza.test")
        self.rooms = [
            Room.objects.create(hotel=self.hotel, room_number=str(number))
            for number in (101, 102, 103, 104)
        ]
        self.previous = dict(Room.objects.filter(hotel=self.hotel).values_list('pk', 'qr_session_id'))

    def test_every_room_gets_a_new_distinct_session(self):
        result = regenerate_room_qr_codes(self.hotel)

        self.assertEqual(result.total, 4)
        self.assertEqual(len(result.updated), 4)
        self.assertEqual(result.failed, [])

        new_ids = set()
        for room in Room.objects.filter(hotel=self.hotel):
            self.assertNotEqual(room.qr_session_id, self.previous[room.pk])
            self.assertIn(f"session_id={room.qr_session_id}", room.qr_code_url)
            new_ids.add(room.qr_session_id)
        self.assertEqual(len(new_ids), 4)

    def test_partial_failure_is_reported(self):
        original_save = Room.save

        def flaky_save(room, *args, **kwargs):
            if room.room_number == "102":
                raise DatabaseError("connection reset")
            return original_save(room, *args, **kwargs)

        with patch.object(Room, 'save', autospec=True, side_effect=flaky_save):
            result = regenerate_room_qr_codes(self.hotel)

        self.assertEqual(result.total, 4)
        self.assertEqual(len(result.updated), 3)
        self.assertEqual([f['room_number'] for f in result.failed], ["102"])
        self.assertIn("connection reset", result.failed[0]['error'])
        self.assertFalse(result.all_succeeded)
        self.assertFalse(result.all_failed)

        failed_room = Room.objects.get(hotel=self.hotel, room_number="102")
        self.assertEqual(failed_room.qr_session_id, self.previous[failed_room.pk])

    def test_no_rooms(self):
        empty = Hotel.objects.create(name="Empty Inn")

        result = regenerate_room_qr_codes(empty)

        self.assertEqual(result.total, 0)
        self.assertTrue(result.all_succeeded)
        self.assertFalse(result.all_failed)
