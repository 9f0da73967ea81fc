import os
import uuid


def upload_to_hotel_documents(instance, filename):
    """hotels/<hotel_id>/documents/<uuid>.<ext>, keeping the original extension."""
    ext = os.path.splitext(filename)[1].lower()
    return f"hotels/{instance.hotel_id}/documents/{uuid.uuid4()}{ext}"
