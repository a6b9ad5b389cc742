"""
Thin wrapper around the LiveKit server SDK.

Room service calls are async in the SDK; views are sync, so each call
runs through async_to_sync with its own client.
"""
import logging

from asgiref.sync import async_to_sync
from django.conf import settings
from livekit import api

from api.utils import ExternalServiceError

logger = logging.getLogger(__name__)


class LiveKitNotConfigured(Exception):
    pass


def _credentials():
    api_key = settings.LIVEKIT_API_KEY
    api_secret = settings.LIVEKIT_API_SECRET
    if not api_key or not api_secret:
        raise LiveKitNotConfigured("LIVEKIT_API_KEY and LIVEKIT_API_SECRET must be set.")
    return api_key, api_secret


def _http_url():
    # Clients connect over websockets, the room service speaks HTTP
    url = settings.LIVEKIT_URL
    if url.startswith('wss://'):
        return 'https://' + url[len('wss://'):]
    if url.startswith('ws://'):
        return 'http://' + url[len('ws://'):]
    return url


def mint_token(room_name, identity, name, is_admin=False):
    api_key, api_secret = _credentials()
    grants = api.VideoGrants(
        room_join=True,
        room=room_name,
        can_publish=True,
        can_subscribe=True,
        can_publish_data=True,
        room_admin=is_admin,
    )
    return (
        api.AccessToken(api_key, api_secret)
        .with_identity(identity)
        .with_name(name)
        .with_grants(grants)
        .to_jwt()
    )


async def _create_room(name, empty_timeout, max_participants):
    api_key, api_secret = _credentials()
    lkapi = api.LiveKitAPI(_http_url(), api_key, api_secret)
    try:
        return await lkapi.room.create_room(api.CreateRoomRequest(
            name=name,
            empty_timeout=empty_timeout,
            max_participants=max_participants,
        ))
    finally:
        await lkapi.aclose()


async def _delete_room(name):
    api_key, api_secret = _credentials()
    lkapi = api.LiveKitAPI(_http_url(), api_key, api_secret)
    try:
        await lkapi.room.delete_room(api.DeleteRoomRequest(room=name))
    finally:
        await lkapi.aclose()


def create_room(name, max_participants):
    """Create (or reuse) a room; answers the SDK Room message."""
    try:
        room = async_to_sync(_create_room)(name, settings.LIVEKIT_EMPTY_TIMEOUT, max_participants)
    except LiveKitNotConfigured as exc:
        logger.error(f"LiveKit room {name} not created: {exc}")
        raise ExternalServiceError("Video service is not configured.")
    except (api.TwirpError, OSError) as exc:
        logger.error(f"LiveKit room {name} not created: {exc}")
        raise ExternalServiceError("Failed to create room.")

    logger.info(f"Created LiveKit room {room.name} (sid={room.sid}, max={room.max_participants})")
    return room


def delete_room(name):
    try:
        async_to_sync(_delete_room)(name)
    except LiveKitNotConfigured as exc:
        logger.error(f"LiveKit room {name} not deleted: {exc}")
        raise ExternalServiceError("Video service is not configured.")
    except api.TwirpError as exc:
        if exc.code != 'not_found':
            logger.error(f"LiveKit room {name} not deleted: {exc}")
            raise ExternalServiceError("Failed to delete room.")
        # Empty rooms close on their own after LIVEKIT_EMPTY_TIMEOUT
        logger.info(f"LiveKit room {name} was already closed")
        return
    except OSError as exc:
        logger.error(f"LiveKit room {name} not deleted: {exc}")
        raise ExternalServiceError("Failed to delete room.")

    logger.info(f"Deleted LiveKit room {name}")


def server_url():
    return settings.LIVEKIT_URL
