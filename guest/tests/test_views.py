from urllib.parse import urlsplit, parse_qs

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from guest.models import Guest
from hotel.models import Hotel, Room
from user.models import User


class GuestViewSetTest(APITestCase):

    def setUp(self):
        self.hotel = Hotel.objects.create(name="Grand Plaza", base_url="https://grandplaza.test")
        self.other_hotel = Hotel.objects.create(name="Seaside Inn")
        self.receptionist = User.objects.create_user(
            username='reception', email='reception@grandplaza.test', password='pass',
            user_type='receptionist', hotel=self.hotel,
        )
        self.staff = User.objects.create_user(
            username='hk', email='hk@grandplaza.test', password='pass',
            user_type='staff', hotel=self.hotel,
        )
        self.room = Room.objects.create(hotel=self.hotel, room_number="101")
        self.busy_room = Room.objects.create(hotel=self.hotel, room_number="102", status='occupied')
        self.guest = Guest.objects.create(
            hotel=self.hotel, full_name="Ana Silva", email="ana@example.com", reservation_id="R-1001",
        )
        self.client.force_authenticate(user=self.receptionist)

    def test_identifier_is_generated(self):
        self.assertTrue(self.guest.guest_identifier.startswith("G-"))

    def test_create_guest(self):
        response = self.client.post(reverse('guest-list'), {
            'full_name': 'John Doe',
            'email': 'john@example.com',
            'room': str(self.room.pk),
            'check_in_date': '2024-05-01',
            'check_out_date': '2024-05-04',
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        guest = Guest.objects.get(full_name='John Doe')
        self.assertEqual(guest.hotel, self.hotel)
        self.assertEqual(guest.status, 'reserved')

    def test_create_rejects_reversed_dates(self):
        response = self.client.post(reverse('guest-list'), {
            'full_name': 'John Doe',
            'check_in_date': '2024-05-04',
            'check_out_date': '2024-05-01',
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('check_out_date', response.data['errors'])

    def test_create_rejects_foreign_room(self):
        foreign_room = Room.objects.create(hotel=self.other_hotel, room_number="1")

        response = self.client.post(reverse('guest-list'), {
            'full_name': 'John Doe', 'room': str(foreign_room.pk),
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_duplicate_identifier_rejected(self):
        response = self.client.post(reverse('guest-list'), {
            'full_name': 'Copy', 'guest_identifier': self.guest.guest_identifier,
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_search(self):
        Guest.objects.create(hotel=self.hotel, full_name="Bob Stone")

        response = self.client.get(reverse('guest-list'), {'search': 'R-1001'})

        self.assertEqual([g['full_name'] for g in response.data['data']['results']], ["Ana Silva"])

    def test_check_in_and_out(self):
        response = self.client.post(
            reverse('guest-check-in', args=[self.guest.pk]), {'room_id': str(self.room.pk)}, format='json',
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.guest.refresh_from_db()
        self.room.refresh_from_db()
        self.assertEqual(self.guest.status, 'checked_in')
        self.assertEqual(self.guest.room, self.room)
        self.assertEqual(self.room.status, 'occupied')

        response = self.client.post(reverse('guest-check-out', args=[self.guest.pk]))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.guest.refresh_from_db()
        self.room.refresh_from_db()
        self.assertEqual(self.guest.status, 'checked_out')
        self.assertEqual(self.room.status, 'cleaning')
        self.assertIsNotNone(self.guest.check_out_date)

    def test_check_in_unavailable_room(self):
        response = self.client.post(
            reverse('guest-check-in', args=[self.guest.pk]), {'room_id': str(self.busy_room.pk)}, format='json',
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['message'], "Room 102 is not available")
        self.guest.refresh_from_db()
        self.assertEqual(self.guest.status, 'reserved')

    def test_check_in_without_room(self):
        response = self.client.post(reverse('guest-check-in', args=[self.guest.pk]), {}, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_check_out_requires_checked_in(self):
        response = self.client.post(reverse('guest-check-out', args=[self.guest.pk]))

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_chat_link(self):
        self.guest.room = self.room
        self.guest.save()

        response = self.client.get(reverse('guest-chat-link', args=[self.guest.pk]))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        query = {k: v[0] for k, v in parse_qs(urlsplit(response.data['data']['chat_url']).query).items()}
        self.assertEqual(query['hotel_id'], str(self.hotel.id))
        self.assertEqual(query['room_number'], "101")
        self.assertEqual(query['session_id'], str(self.room.qr_session_id))
        self.assertEqual(query['guest_name'], "Ana Silva")
        self.assertEqual(query['reservation_id'], "R-1001")

    def test_staff_can_read_but_not_write(self):
        self.client.force_authenticate(user=self.staff)

        response = self.client.get(reverse('guest-list'))
        self.assertEqual(response.status_code, status.HTTP_200_OK)

        response = self.client.post(reverse('guest-check-in', args=[self.guest.pk]), {}, format='json')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_other_hotel_guest_not_found(self):
        foreign = Guest.objects.create(hotel=self.other_hotel, full_name="Stranger")

        response = self.client.get(reverse('guest-detail', args=[foreign.pk]))

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
