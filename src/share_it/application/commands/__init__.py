"""
Application Commands (CQRS Write Side)

Command objects and their handlers for write operations.
Commands represent intent to change the system state.
"""

from share_it.application.commands.change_moderator import (
    ChangeModeratorCommand,
    ChangeModeratorHandler,
    ChangeModeratorResult,
    ChangeModeratorStatus,
)
from share_it.application.commands.create_chatroom import (
    CreateChatroomCommand,
    CreateChatroomHandler,
    CreateChatroomResult,
    CreateChatroomStatus,
)
from share_it.application.commands.join_chatroom import (
    JoinChatroomCommand,
    JoinChatroomHandler,
    JoinChatroomResult,
    JoinChatroomStatus,
)
from share_it.application.commands.join_waitlist import (
    JoinWaitlistCommand,
    JoinWaitlistHandler,
    JoinWaitlistResult,
    JoinWaitlistStatus,
)
from share_it.application.commands.leave_chatroom import (
    LeaveChatroomCommand,
    LeaveChatroomHandler,
    LeaveChatroomResult,
    LeaveChatroomStatus,
)
from share_it.application.commands.leave_waitlist import (
    LeaveWaitlistCommand,
    LeaveWaitlistHandler,
    LeaveWaitlistResult,
    LeaveWaitlistStatus,
)
from share_it.application.commands.play_next import (
    PlayNextCommand,
    PlayNextHandler,
    PlayNextResult,
    PlayNextStatus,
)

__all__ = [
    # Create
    "CreateChatroomCommand",
    "CreateChatroomHandler",
    "CreateChatroomResult",
    "CreateChatroomStatus",
    # Join / leave room
    "JoinChatroomCommand",
    "JoinChatroomHandler",
    "JoinChatroomResult",
    "JoinChatroomStatus",
    "LeaveChatroomCommand",
    "LeaveChatroomHandler",
    "LeaveChatroomResult",
    "LeaveChatroomStatus",
    # Moderation
    "ChangeModeratorCommand",
    "ChangeModeratorHandler",
    "ChangeModeratorResult",
    "ChangeModeratorStatus",
    # Waitlist
    "JoinWaitlistCommand",
    "JoinWaitlistHandler",
    "JoinWaitlistResult",
    "JoinWaitlistStatus",
    "LeaveWaitlistCommand",
    "LeaveWaitlistHandler",
    "LeaveWaitlistResult",
    "LeaveWaitlistStatus",
    # Rotation
    "PlayNextCommand",
    "PlayNextHandler",
    "PlayNextResult",
    "PlayNextStatus",
]
