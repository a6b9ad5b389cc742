import logging
import uuid

from django.conf import settings
from django.utils import timezone
from google.oauth2 import service_account
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from api.utils import ExternalServiceError

logger = logging.getLogger(__name__)

SCOPES = ['https://www.googleapis.com/auth/calendar']
TOKEN_URI = 'https://oauth2.googleapis.com/token'


def calendar_configured():
    return bool(settings.GOOGLE_CLIENT_EMAIL and settings.GOOGLE_PRIVATE_KEY)


def _calendar_service():
    credentials = service_account.Credentials.from_service_account_info(
        {
            'client_email': settings.GOOGLE_CLIENT_EMAIL,
            'private_key': settings.GOOGLE_PRIVATE_KEY,
            'token_uri': TOKEN_URI,
        },
        scopes=SCOPES,
    )
    return build('calendar', 'v3', credentials=credentials, cache_discovery=False)


def create_calendar_event(title, start_time, end_time, description='', attendees=None):
    """
    Insert an event with a Meet conference into the configured calendar.
    Without service-account credentials nothing is sent and a mock id is returned.
    """
    if not calendar_configured():
        logger.info("Google Calendar credentials missing, skipping API call")
        return {
            'event_id': f"mock-event-id-{int(timezone.now().timestamp() * 1000)}",
            'meet_link': None,
            'mocked': True,
        }

    event = {
        'summary': title,
        'description': description,
        'start': {'dateTime': start_time.isoformat(), 'timeZone': 'UTC'},
        'end': {'dateTime': end_time.isoformat(), 'timeZone': 'UTC'},
        'attendees': [{'email': email} for email in attendees or []],
        'conferenceData': {
            'createRequest': {
                'requestId': uuid.uuid4().hex,
                'conferenceSolutionKey': {'type': 'hangoutsMeet'},
            },
        },
    }

    try:
        created = _calendar_service().events().insert(
            calendarId=settings.GOOGLE_CALENDAR_ID,
            body=event,
            conferenceDataVersion=1,
        ).execute()
    except (HttpError, ValueError) as exc:
        logger.error(f"Error creating calendar event '{title}': {exc}")
        raise ExternalServiceError("Failed to create calendar event.")

    logger.info(f"Created calendar event {created.get('id')} for '{title}'")
    return {
        'event_id': created.get('id'),
        'meet_link': created.get('hangoutLink'),
        'mocked': False,
    }
