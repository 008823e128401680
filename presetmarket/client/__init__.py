"""
Storefront client: API access, action handlers, shared state, cards and
the audio preview player.
"""

from .actions import ItemActions, Mutation  # noqa: F401
from .api import ApiClient  # noqa: F401
from .cards import CardView, PresetCard, PresetPackCard, format_price  # noqa: F401
from .errors import ActionError, AudioError  # noqa: F401
from .navigation import Navigator  # noqa: F401
from .notify import Toaster  # noqa: F401
from .preview import NullAudioBackend, PlaybackStatus, PreviewPlayer  # noqa: F401
from .state import AppState, CartEntry  # noqa: F401
