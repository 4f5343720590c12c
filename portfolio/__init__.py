"""Portfolio site server-side pieces: contact endpoint and scheduling embed loader"""

from .app import create_app
from .widgets import WidgetLoader, EmbedContainer, LoadState

__all__ = ['create_app', 'WidgetLoader', 'EmbedContainer', 'LoadState']
