import logging

from django.apps import apps
from django.shortcuts import render, get_object_or_404

from hotel.models import Hotel
from .lookups import get_hotel_name
from .services.session import SessionContext, MissingSessionParameters

logger = logging.getLogger(__name__)


def chat_page(request):
    """
    Landing page behind every room QR code.

    Without hotel_id, room_number and session_id the guest gets a terminal
    "Chat Unavailable" page that loads no scripts. Otherwise the page opens
    the bootstrap socket and executes the widget commands it receives.
    """
    try:
        session = SessionContext.from_query(request.GET, hotel_name=get_hotel_name(request.GET.get('hotel_id')))
    except MissingSessionParameters as e:
        logger.info(f"Chat page opened without {', '.join(e.missing)}")
        return render(request, 'chat/unavailable.html', {'error': str(e)})

    config = apps.get_app_config('chat').master_bot_config
    return render(request, 'chat/chat.html', {
        'session': session,
        'theme_color': config.theme_color,
    })


def hotel_landing(request, slug):
    hotel = get_object_or_404(Hotel, slug=slug, is_active=True)
    config = apps.get_app_config('chat').master_bot_config

    widget_config = {
        'botId': config.bot_id,
        'hostUrl': config.host_url,
        'botName': f"{hotel.name} Assistant",
        'themeColor': hotel.accent_color or config.theme_color,
        'showPoweredBy': False,
        'userData': {
            'hotel_id': str(hotel.id),
            'hotel_name': hotel.name,
            'source': 'website',
        },
    }
    return render(request, 'chat/hotel_landing.html', {
        'hotel': hotel,
        'branding': hotel.branding(),
        'scripts': config.scripts,
        'widget_config': widget_config,
    })
