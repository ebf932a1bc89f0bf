import pytest
import pytest_asyncio

from share_it.domain.library.entities import Playlist, Song, User
from share_it.domain.rooms.entities import Chatroom, Waitlist
from share_it.domain.rooms.value_objects import ChatUser, Dj
from share_it.domain.shared.events import EventBus, reset_event_bus

# ============================================================================
# Test Data Builders
# ============================================================================


def new_test_user(user_id: int) -> User:
    return User(
        id=user_id,
        username=f"dj_{user_id}",
        avatar_url="https://i1.sndcdn.com/avatars-test-large.jpg",
        permalink_url=f"https://soundcloud.com/dj_{user_id}",
    )


def new_test_song(song_id: int, user_id: int) -> Song:
    return Song(
        id=song_id,
        user_id=user_id,
        duration_ms=111,
        username=f"dj_{user_id}",
        title=f"test song {song_id}",
        permalink="test-song",
        permalink_url="https://www.soundcloud.com/test-user/test-song",
        artwork_url="https://www.artwork.com/test-art.jpg",
        stream_url=f"https://api.soundcloud.com/tracks/{song_id}",
    )


def new_test_playlist(user_index: int, user_id: int, song_count: int) -> Playlist:
    """Song ids are unique across users: user ``i`` owns ``i*n .. i*n + n-1``."""
    playlist = Playlist(name="Test Playlist")
    for j in range(song_count):
        playlist.add(new_test_song(user_index * song_count + j, user_id))
    return playlist


async def seed_users(
    user_repository,
    user_count: int = 4,
    song_per_playlist: int = 2,
    which_forgot_active: int | None = None,
) -> list[User]:
    """Store ``user_count`` users (ids 0..n-1), each owning one playlist.

    ``which_forgot_active`` is 1-based: ``3`` means the third user (id 2)
    never selects their playlist as active.
    """
    users = []
    for i in range(user_count):
        user = new_test_user(i)
        playlist = new_test_playlist(i, user.id, song_per_playlist)
        user.add_playlist(playlist)
        if which_forgot_active != i + 1:
            user.set_active_playlist(playlist.id)
        await user_repository.insert(user)
        users.append(user)
    return users


# ============================================================================
# Database Fixtures
# ============================================================================


@pytest_asyncio.fixture
async def in_memory_database():
    """Create an in-memory SQLite database for testing."""
    from share_it.infrastructure.persistence.database import Database

    db = Database(":memory:")
    await db.initialize()
    yield db
    await db.close()


@pytest_asyncio.fixture(params=["memory", "sqlite"])
async def repositories(request):
    """(user, chatroom) repository pair for each storage backend."""
    from share_it.infrastructure.persistence.database import Database
    from share_it.infrastructure.persistence.repositories import (
        InMemoryChatroomRepository,
        InMemoryUserRepository,
        SQLiteChatroomRepository,
        SQLiteUserRepository,
    )

    if request.param == "memory":
        yield InMemoryUserRepository(), InMemoryChatroomRepository()
        return

    db = Database(":memory:")
    await db.initialize()
    yield SQLiteUserRepository(db), SQLiteChatroomRepository(db)
    await db.close()


@pytest.fixture
def user_repository(repositories):
    return repositories[0]


@pytest.fixture
def chatroom_repository(repositories):
    return repositories[1]


@pytest.fixture
def memory_user_repository():
    from share_it.infrastructure.persistence.repositories.memory_repository import (
        InMemoryUserRepository,
    )

    return InMemoryUserRepository()


class RecordingEventBus(EventBus):
    """Event bus that keeps every published event, in order."""

    def __init__(self) -> None:
        super().__init__()
        self.published: list = []

    async def publish(self, event) -> None:
        self.published.append(event)
        await super().publish(event)


@pytest.fixture
def event_bus():
    return RecordingEventBus()


@pytest.fixture(autouse=True)
def _reset_global_event_bus():
    reset_event_bus()
    yield
    reset_event_bus()


# ============================================================================
# Domain Fixtures
# ============================================================================


@pytest.fixture
def sample_song():
    return new_test_song(22, 7)


@pytest.fixture
def sample_playlist():
    playlist = Playlist(name="Morning Mix")
    for song_id in (1, 2, 3):
        playlist.add(new_test_song(song_id, 7))
    return playlist


@pytest.fixture
def waitlist_factory(memory_user_repository):
    """Build a waitlist whose DJs are seeded into ``memory_user_repository``."""

    async def build(
        user_count: int = 4,
        song_per_playlist: int = 2,
        which_forgot_active: int | None = None,
    ) -> Waitlist:
        users = await seed_users(
            memory_user_repository, user_count, song_per_playlist, which_forgot_active
        )
        waitlist = Waitlist()
        for user in users:
            waitlist.join(Dj(user_id=user.id, username=user.username))
        return waitlist

    return build


@pytest.fixture
def chatroom_factory(user_repository, chatroom_repository):
    """Store a chatroom plus its seeded users on the parametrized backend.

    ``moderator_user`` and ``which_joined_waitlist`` are 1-based user numbers.
    """

    async def build(
        chatroom_user_count: int = 4,
        song_per_playlist: int = 2,
        moderator_user: int = 1,
        which_joined_waitlist: tuple[int, ...] = (),
        which_forgot_active: int | None = None,
    ) -> Chatroom:
        users = await seed_users(
            user_repository, chatroom_user_count, song_per_playlist, which_forgot_active
        )
        chatroom = Chatroom.create("Test Room", users[moderator_user - 1].id)
        for user in users:
            chatroom.join(ChatUser(user_id=user.id, username=user.username))
        for number in which_joined_waitlist:
            chatroom.join_waitlist(users[number - 1].id)
        await chatroom_repository.insert(chatroom)
        return chatroom

    return build
