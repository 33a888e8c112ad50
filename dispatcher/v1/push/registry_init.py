"""
Push sender registry initialization.
"""

from dispatcher.config.settings import PushProvider, settings
from dispatcher.v1.core.registries import push_sender_registry
from dispatcher.v1.push.senders import FcmPushSender, StubPushSender


def register_push_senders() -> None:
    """Register all push senders with the push sender registry."""

    push_sender_registry.register(PushProvider.FCM.value, FcmPushSender(settings))
    push_sender_registry.register(PushProvider.STUB.value, StubPushSender())


# Auto-register senders when module is imported
register_push_senders()
