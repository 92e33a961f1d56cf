"""Google API clients (OAuth, Calendar, Drive)."""

from second_brain.infrastructure.google.calendar_api import GoogleCalendarClient, to_rfc3339
from second_brain.infrastructure.google.drive_api import GoogleDriveClient, build_multipart_body
from second_brain.infrastructure.google.oauth import GoogleOAuthClient

__all__ = [
    "GoogleOAuthClient",
    "GoogleCalendarClient",
    "GoogleDriveClient",
    "to_rfc3339",
    "build_multipart_body",
]
