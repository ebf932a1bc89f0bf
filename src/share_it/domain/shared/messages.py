"""Centralized message constants for error messages, validation, and user feedback."""

from __future__ import annotations


class ErrorMessages:
    """Error messages for exceptions and validation failures."""

    # Aggregate Invariants
    DUPLICATE_SONG_ID = "Playlist contains song {song_id} more than once"
    DUPLICATE_DJ = "Waitlist holds more than one slot for user {user_id}"
    DUPLICATE_MEMBER = "Roster lists user {user_id} more than once"
    PLAYLIST_KEY_MISMATCH = "Playlist stored under key {key} has id {playlist_id}"

    # Configuration Errors
    INVALID_DATABASE_URL = "Database URL must start with sqlite:// or memory://"
    INVALID_LOG_LEVEL = "Invalid log level: {level}. Must be one of {valid_levels}"

    # Persistence Errors
    STORAGE_UNREACHABLE = "Could not reach storage at {location}"
    STALE_CHATROOM = "Chatroom {chatroom_id} was modified by another writer (version {version})"


class LogTemplates:
    """Log message templates for structured logging.

    Use these with logger.info(), logger.error(), etc. and pass values as parameters
    for proper log formatting and structured logging support.
    """

    # Database Lifecycle
    DATABASE_INITIALIZED = "Database initialized at %s"
    DATABASE_CLOSED = "Database manager closed"
    DATABASE_ERROR = "Database error during %s: %r"

    # Repository Operations
    USER_SAVED = "Saved user %s"
    USER_DELETED = "Deleted user %s"
    CHATROOM_SAVED = "Saved chatroom %s at version %s"
    CHATROOM_DELETED = "Deleted chatroom %s"

    # Waitlist Turn Engine
    WAITLIST_TURN_STARTED = "Waitlist %s: turn for user %s, song %s"
    WAITLIST_EXHAUSTED = "Waitlist %s is empty, rotation is over"
    WAITLIST_SKIP_MISSING_USER = "Waitlist %s: skipping user %s (no stored user)"
    WAITLIST_SKIP_NO_ACTIVE_PLAYLIST = "Waitlist %s: skipping user %s (no active playlist)"
    WAITLIST_SKIP_DANGLING_PLAYLIST = "Waitlist %s: skipping user %s (active playlist %s not found)"
    WAITLIST_DROP_INVALID_FIRST = "Waitlist %s: dropping invalid first entry %s"
    WAITLIST_ROTATION_LOST = "Waitlist %s: rotated user %s no longer stored"

    # Chatroom Commands
    CHATROOM_CREATED = "Chatroom %s (%s) created by user %s"
    CHATROOM_JOINED = "User %s joined chatroom %s"
    CHATROOM_LEFT = "User %s left chatroom %s"
    CHATROOM_MODERATOR_CHANGED = "Chatroom %s moderator changed to %s"
    WAITLIST_JOINED = "User %s joined the waitlist of chatroom %s"
    WAITLIST_LEFT = "User %s left the waitlist of chatroom %s"
    PLAY_NEXT_DENIED = "User %s is not the moderator of chatroom %s"

    # Event Bus
    EVENT_SUBSCRIBED = "Subscribed handler to: %s"
    EVENT_UNSUBSCRIBED = "Unsubscribed handler from %s"
    EVENT_NO_HANDLERS = "No handlers for %s"
    EVENT_PUBLISHING = "Publishing %s to %d handlers"
    EVENT_HANDLER_FAILED = "Error in handler for %s: %s"
    EVENT_HANDLERS_CLEARED = "Cleared all event handlers"

    # Container Lifecycle
    CONTAINER_INITIALIZED = "Container initialized with %s storage"
    CONTAINER_SHUTDOWN = "Container shut down"
    LOGGING_FALLBACK = "Unknown log level %r, falling back to INFO"
