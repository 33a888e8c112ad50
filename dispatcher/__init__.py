"""Push dispatcher: Firestore job documents to push notifications."""

__version__ = "1.0.0"
