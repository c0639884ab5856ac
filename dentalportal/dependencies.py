"""FastAPI dependencies: authenticated user, settings and external clients.

The client factories are overridden in tests through ``app.dependency_overrides``.
"""

from fastapi import Depends

from dentalportal.config import Settings, get_settings
from dentalportal.email.send import Mailer, SmtpMailer
from dentalportal.integrations.geocoding import Geocoder, NominatimGeocoder
from dentalportal.integrations.storage import S3Uploader, Uploader
from shared.auth.dependencies import (
    get_current_user_optional,
    get_current_user_required,
    require_admin,
)

get_current_user = get_current_user_required
get_optional_user = get_current_user_optional

__all__ = [
    "get_current_user",
    "get_geocoder",
    "get_mailer",
    "get_optional_user",
    "get_settings",
    "get_uploader",
    "require_admin",
]


def get_uploader(settings: Settings = Depends(get_settings)) -> Uploader:
    return S3Uploader(settings)


def get_geocoder(settings: Settings = Depends(get_settings)) -> Geocoder:
    return NominatimGeocoder(settings)


def get_mailer(settings: Settings = Depends(get_settings)) -> Mailer:
    return SmtpMailer(settings)
