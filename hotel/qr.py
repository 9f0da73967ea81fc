"""
Room QR codes.

A room's QR code encodes a deep link into the guest chat page:

    {base_url}/chat?hotel_id=<uuid>&room_number=<str>&session_id=<uuid>

The builder never raises for missing ids; a missing hotel id is replaced
with MISSING_HOTEL_ID so the chat page shows its "unavailable" state
instead of the QR code being impossible to print.
"""
import logging
import uuid
from io import BytesIO
from urllib.parse import urlencode, quote

import qrcode
import qrcode.image.svg
from django.conf import settings
from PIL import Image

logger = logging.getLogger(__name__)

MISSING_HOTEL_ID = 'MISSING_HOTEL_ID'

MIN_QR_SIZE = 64
MAX_QR_SIZE = 2048

ERROR_CORRECTION_LEVELS = {
    'L': qrcode.constants.ERROR_CORRECT_L,
    'M': qrcode.constants.ERROR_CORRECT_M,
    'Q': qrcode.constants.ERROR_CORRECT_Q,
    'H': qrcode.constants.ERROR_CORRECT_H,
}

IMAGE_FORMATS = ('png', 'svg')


class QRRenderError(ValueError):
    pass


def new_session_id(previous=None):
    session_id = str(uuid.uuid4())
    while session_id == previous:
        session_id = str(uuid.uuid4())
    return session_id


def build_chat_url(base_url, hotel_id, room_number, session_id=None, **extra):
    """
    Build the chat deep link for a room.

    `extra` may carry guest_name and reservation_id; empty values are skipped.
    """
    base = (base_url or settings.CHAT_SITE_BASE_URL).rstrip('/')

    params = {
        'hotel_id': str(hotel_id) if hotel_id else MISSING_HOTEL_ID,
        'room_number': str(room_number),
        'session_id': session_id or new_session_id(),
    }
    for key in ('guest_name', 'reservation_id'):
        value = extra.get(key)
        if value:
            params[key] = value

    if not hotel_id:
        logger.warning(f"Chat URL built without hotel id for room {room_number}")

    return f"{base}/chat?{urlencode(params, quote_via=quote)}"


def render_qr_code(data, size=300, error_correction='M', image_format='png'):
    """
    Render `data` as a QR code and return the encoded image bytes.

    PNG output is exactly size x size pixels. SVG output is vector and
    ignores `size` beyond validation.
    """
    try:
        size = int(size)
    except (TypeError, ValueError):
        raise QRRenderError(f"Invalid size: {size!r}")
    if not MIN_QR_SIZE <= size <= MAX_QR_SIZE:
        raise QRRenderError(f"Size must be between {MIN_QR_SIZE} and {MAX_QR_SIZE} pixels")

    level = ERROR_CORRECTION_LEVELS.get(str(error_correction).upper())
    if level is None:
        raise QRRenderError(f"Error correction level must be one of {', '.join(ERROR_CORRECTION_LEVELS)}")

    image_format = str(image_format).lower()
    if image_format not in IMAGE_FORMATS:
        raise QRRenderError(f"Image format must be one of {', '.join(IMAGE_FORMATS)}")

    qr = qrcode.QRCode(error_correction=level, box_size=10, border=4)
    qr.add_data(data)
    qr.make(fit=True)

    buf = BytesIO()
    if image_format == 'svg':
        img = qr.make_image(image_factory=qrcode.image.svg.SvgPathImage)
        img.save(buf)
        return buf.getvalue()

    img = qr.make_image(fill_color='black', back_color='white')
    img.save(buf, format='PNG')
    buf.seek(0)

    resized = Image.open(buf).convert('RGB').resize((size, size), Image.NEAREST)
    out = BytesIO()
    resized.save(out, format='PNG')
    return out.getvalue()
