from stravakit.clients.base import BaseClient
from stravakit.clients.strava import StravaClient

__all__ = ['BaseClient', 'StravaClient']
