"""Social and profile use cases."""

from .echo_ritual import EchoRitualRequest, EchoRitualUseCase
from .receive_echo import ReceiveEchoRequest, ReceiveEchoUseCase
from .toggle_featured_mark import ToggleFeaturedMarkRequest, ToggleFeaturedMarkUseCase
from .toggle_follow import ToggleFollowRequest, ToggleFollowResponse, ToggleFollowUseCase
from .unlock_mark import UnlockMarkRequest, UnlockMarkUseCase
from .update_identity import UpdateIdentityRequest, UpdateIdentityUseCase

__all__ = [
    "EchoRitualRequest",
    "EchoRitualUseCase",
    "ReceiveEchoRequest",
    "ReceiveEchoUseCase",
    "ToggleFeaturedMarkRequest",
    "ToggleFeaturedMarkUseCase",
    "ToggleFollowRequest",
    "ToggleFollowResponse",
    "ToggleFollowUseCase",
    "UnlockMarkRequest",
    "UnlockMarkUseCase",
    "UpdateIdentityRequest",
    "UpdateIdentityUseCase",
]
