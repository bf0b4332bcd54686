"""
Example household used on first run, by local storage when nothing is
stored yet and by `init_db` when the roommates table is empty.
"""
from roomiesync.models.roommate import Role
from roomiesync.schemas.roommate import Roommate

INITIAL_ROOMMATES = [
    Roommate(
        id="1",
        name="Admin Alice",
        email="alice@example.com",
        role=Role.ADMIN,
        is_vegetarian=False,
        avatar_url="https://picsum.photos/seed/alice/200/200",
        agreed_contribution=6000,
    ),
    Roommate(
        id="2",
        name="Bob Builder",
        email="bob@example.com",
        role=Role.MEMBER,
        is_vegetarian=True,
        avatar_url="https://picsum.photos/seed/bob/200/200",
        agreed_contribution=6000,
    ),
    Roommate(
        id="3",
        name="Charlie Chef",
        email="charlie@example.com",
        role=Role.MEMBER,
        is_vegetarian=False,
        avatar_url="https://picsum.photos/seed/charlie/200/200",
        agreed_contribution=6000,
    ),
]
