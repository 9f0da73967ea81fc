from io import BytesIO
from urllib.parse import urlparse, parse_qs
from unittest.mock import patch

from django.core.files.storage import default_storage
from django.core.files.uploadedfile import SimpleUploadedFile
from django.db import DatabaseError
from django.test import override_settings
from django.urls import reverse
from PIL import Image
from rest_framework import status
from rest_framework.test import APITestCase

from hotel.models import Hotel, HotelDocument, Room
from user.models import User


class HotelApiTestCase(APITestCase):

    def setUp(self):
        self.hotel = Hotel.objects.create(name="Grand Plaza", base_url="https://grandplaza.test")
        self.other_hotel = Hotel.objects.create(name="Seaside Inn")
        self.admin = User.objects.create_user(
            username='admin', email='admin@grandplaza.test', password='pass',
            user_type='hotel_admin', hotel=self.hotel,
        )
        self.receptionist = User.objects.create_user(
            username='reception', email='reception@grandplaza.test', password='pass',
            user_type='receptionist', hotel=self.hotel,
        )


class CurrentHotelViewTest(HotelApiTestCase):

    def test_get_current_hotel(self):
        self.client.force_authenticate(user=self.receptionist)

        response = self.client.get(reverse('hotel-current'))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['data']['id'], str(self.hotel.id))

    def test_admin_updates_hotel(self):
        self.client.force_authenticate(user=self.admin)

        response = self.client.patch(reverse('hotel-current'), {'tagline': 'Stay in the heart of town'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.hotel.refresh_from_db()
        self.assertEqual(self.hotel.tagline, 'Stay in the heart of town')

    def test_receptionist_cannot_update_hotel(self):
        self.client.force_authenticate(user=self.receptionist)

        response = self.client.patch(reverse('hotel-current'), {'tagline': 'x'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_update_base_url(self):
        self.client.force_authenticate(user=self.admin)

        response = self.client.patch(reverse('hotel-base-url'), {'base_url': 'https://new.grandplaza.test/'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.hotel.refresh_from_db()
        self.assertEqual(self.hotel.base_url, 'https://new.grandplaza.test')

    def test_public_branding(self):
        response = self.client.get(reverse('hotel-branding', args=[self.hotel.slug]))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['data']['name'], "Grand Plaza")
        self.assertIn('colors', response.data['data'])

    def test_branding_inactive_hotel(self):
        self.hotel.is_active = False
        self.hotel.save()

        response = self.client.get(reverse('hotel-branding', args=[self.hotel.slug]))

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)


class RoomViewSetTest(HotelApiTestCase):

    def setUp(self):
        super().setUp()
        self.room = Room.objects.create(hotel=self.hotel, room_number="101", floor_number=1)
        Room.objects.create(hotel=self.hotel, room_number="102", floor_number=1, status='occupied')
        Room.objects.create(hotel=self.other_hotel, room_number="101")

    def test_list_is_scoped_and_filterable(self):
        self.client.force_authenticate(user=self.receptionist)

        response = self.client.get(reverse('room-list'))
        self.assertEqual(response.data['data']['count'], 2)

        response = self.client.get(reverse('room-list'), {'occupied': 'true'})
        self.assertEqual([r['room_number'] for r in response.data['data']['results']], ["102"])

    def test_admin_creates_room_with_qr_link(self):
        self.client.force_authenticate(user=self.admin)

        response = self.client.post(reverse('room-list'), {'room_number': '201', 'floor_number': 2}, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertTrue(response.data['qr_code_url'].startswith('https://grandplaza.test/chat?'))

    def test_duplicate_room_number_rejected(self):
        self.client.force_authenticate(user=self.admin)

        response = self.client.post(reverse('room-list'), {'room_number': '101'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('room_number', response.data['errors'])

    def test_receptionist_can_only_change_status(self):
        self.client.force_authenticate(user=self.receptionist)
        url = reverse('room-detail', args=[self.room.pk])

        response = self.client.patch(url, {'status': 'cleaning'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.room.refresh_from_db()
        self.assertEqual(self.room.status, 'cleaning')

        response = self.client.patch(url, {'room_number': '999'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

        response = self.client.delete(url)
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_qr_codes_listing(self):
        self.client.force_authenticate(user=self.receptionist)

        response = self.client.get(reverse('room-qr-codes'))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        entry = response.data['data'][0]
        self.assertEqual(entry['room_number'], "101")
        self.assertEqual(entry['chat_url'], self.room.qr_code_url)
        self.assertEqual(str(entry['session_id']), str(self.room.qr_session_id))

    def test_renamed_room_gets_a_matching_qr_link(self):
        self.client.force_authenticate(user=self.admin)
        session_id = str(self.room.qr_session_id)

        response = self.client.patch(reverse('room-detail', args=[self.room.pk]), {'room_number': '304'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)

        response = self.client.get(reverse('room-qr-codes'))

        entry = next(e for e in response.data['data'] if str(e['room_id']) == str(self.room.pk))
        query = parse_qs(urlparse(entry['chat_url']).query)
        self.assertEqual(query['room_number'], ['304'])
        self.assertEqual(query['session_id'], [session_id])
        self.assertEqual(str(entry['session_id']), session_id)

    def test_regenerate_all_succeeded(self):
        self.client.force_authenticate(user=self.admin)

        response = self.client.post(reverse('room-regenerate-qr-codes'))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['data']['total'], 2)
        self.assertEqual(response.data['data']['updated_count'], 2)

    def test_regenerate_partial_failure_returns_207(self):
        self.client.force_authenticate(user=self.admin)
        original_save = Room.save

        def flaky_save(room, *args, **kwargs):
            if room.room_number == "102":
                raise DatabaseError("disk full")
            return original_save(room, *args, **kwargs)

        with patch.object(Room, 'save', autospec=True, side_effect=flaky_save):
            response = self.client.post(reverse('room-regenerate-qr-codes'))

        self.assertEqual(response.status_code, status.HTTP_207_MULTI_STATUS)
        self.assertFalse(response.data['success'])
        self.assertEqual(response.data['errors']['failed_rooms'], ["102"])
        self.assertEqual(response.data['data']['failed_count'], 1)

    def test_regenerate_total_failure_returns_500(self):
        self.client.force_authenticate(user=self.admin)

        with patch.object(Room, 'save', side_effect=DatabaseError("read only")):
            response = self.client.post(reverse('room-regenerate-qr-codes'))

        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(response.data['data']['failed_count'], 2)

    def test_receptionist_cannot_regenerate(self):
        self.client.force_authenticate(user=self.receptionist)

        response = self.client.post(reverse('room-regenerate-qr-codes'))

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_qr_code_image(self):
        self.client.force_authenticate(user=self.receptionist)

        response = self.client.get(reverse('room-qr-code', args=[self.room.pk]), {'size': 256, 'ecc': 'H'})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response['Content-Type'], 'image/png')
        self.assertEqual(Image.open(BytesIO(response.content)).size, (256, 256))

    def test_qr_code_svg(self):
        self.client.force_authenticate(user=self.receptionist)

        response = self.client.get(reverse('room-qr-code', args=[self.room.pk]), {'format': 'svg'})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response['Content-Type'], 'image/svg+xml')
        self.assertIn(b'<svg', response.content)

    def test_qr_code_invalid_size(self):
        self.client.force_authenticate(user=self.receptionist)

        response = self.client.get(reverse('room-qr-code', args=[self.room.pk]), {'size': 10})

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)


class HotelDocumentViewsTest(HotelApiTestCase):

    def _upload(self, content=b'%PDF-1.4 breakfast menu', **extra):
        data = {
            'file': SimpleUploadedFile('menu.pdf', content, content_type='application/pdf'),
            'title': 'Breakfast menu',
        }
        data.update(extra)
        return self.client.post(reverse('document-upload'), data, format='multipart')

    def test_upload_document(self):
        self.client.force_authenticate(user=self.admin)

        response = self._upload(tags='food, breakfast')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        document = HotelDocument.objects.get(pk=response.data['data']['document_id'])
        self.assertEqual(document.hotel, self.hotel)
        self.assertEqual(document.file_type, 'application/pdf')
        self.assertEqual(document.tags, ['food', 'breakfast'])
        self.assertTrue(default_storage.exists(document.file.name))

    def test_upload_missing_title(self):
        self.client.force_authenticate(user=self.admin)

        response = self.client.post(
            reverse('document-upload'),
            {'file': SimpleUploadedFile('menu.pdf', b'data')},
            format='multipart',
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['message'], "Missing required file or title")

    @override_settings(DOCUMENT_MAX_UPLOAD_SIZE=1024)
    def test_upload_too_large(self):
        self.client.force_authenticate(user=self.admin)

        response = self._upload(content=b'x' * 2048)

        self.assertEqual(response.status_code, status.HTTP_413_REQUEST_ENTITY_TOO_LARGE)
        self.assertFalse(HotelDocument.objects.exists())

    def test_receptionist_cannot_upload(self):
        self.client.force_authenticate(user=self.receptionist)

        response = self._upload()

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_list_download_view_and_delete(self):
        self.client.force_authenticate(user=self.admin)
        document_id = self._upload().data['data']['document_id']
        document = HotelDocument.objects.get(pk=document_id)

        response = self.client.get(reverse('document-list'))
        self.assertEqual(response.data['data']['count'], 1)

        response = self.client.get(reverse('document-download', args=[document_id]))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn('attachment', response['Content-Disposition'])
        self.assertEqual(b''.join(response.streaming_content), b'%PDF-1.4 breakfast menu')

        response = self.client.get(reverse('document-view', args=[document_id]))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.data['data']['url'])

        response = self.client.delete(reverse('document-detail', args=[document_id]))
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(HotelDocument.objects.exists())
        self.assertFalse(default_storage.exists(document.file.name))

    def test_other_hotel_document_is_not_found(self):
        foreign = HotelDocument.objects.create(
            hotel=self.other_hotel,
            title='Seaside policy',
            file=SimpleUploadedFile('policy.txt', b'no pets'),
        )
        self.client.force_authenticate(user=self.admin)

        for name in ('document-detail', 'document-download', 'document-view'):
            response = self.client.get(reverse(name, args=[foreign.pk]))
            self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
