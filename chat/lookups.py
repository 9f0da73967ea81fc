import uuid

from hotel.models import Hotel


def parse_hotel_uuid(hotel_id):
    try:
        return uuid.UUID(str(hotel_id))
    except (TypeError, ValueError):
        return None


def get_hotel(hotel_id):
    """Active hotel for a raw id from a query string, or None."""
    hotel_uuid = parse_hotel_uuid(hotel_id) if hotel_id else None
    if hotel_uuid is None:
        return None
    return Hotel.objects.filter(pk=hotel_uuid, is_active=True).first()


def get_hotel_name(hotel_id):
    hotel = get_hotel(hotel_id)
    return hotel.name if hotel else None
