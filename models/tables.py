"""
models/tables.py
----------------
Table descriptors for the marketing site's content tables.
These are the only tables the admin resources can reach.
"""

from models.resource import DESC, SortSpec, TableDescriptor, make_descriptor

RELEASES: TableDescriptor = make_descriptor(
    name="releases",
    primary_key="id",
    columns=[
        "title", "artist", "genre", "release_date", "description",
        "cover_image_url", "audio_url", "soundcloud_url", "spotify_url",
        "youtube_url", "is_featured", "play_count", "created_at", "updated_at",
    ],
    # indexed columns plus a few cheap ones
    sortable=["title", "artist", "genre", "release_date", "play_count", "is_featured", "created_at"],
    default_sort=SortSpec("release_date", DESC),
)

EVENTS: TableDescriptor = make_descriptor(
    name="events",
    primary_key="id",
    columns=[
        "title", "venue", "location", "event_date", "description",
        "status", "ticket_url", "image_url", "created_at", "updated_at",
    ],
    sortable=["title", "venue", "event_date", "status", "created_at"],
    default_sort=SortSpec("event_date", DESC),
)

CONTACTS: TableDescriptor = make_descriptor(
    name="contacts",
    primary_key="id",
    columns=["name", "email", "subject", "message", "status", "created_at"],
    sortable=["name", "email", "status", "created_at"],
    default_sort=SortSpec("created_at", DESC),
)

NEWSLETTER: TableDescriptor = make_descriptor(
    name="newsletter",
    primary_key="id",
    columns=["email", "is_active", "subscribed_at", "unsubscribed_at"],
    sortable=["email", "is_active", "subscribed_at"],
    default_sort=SortSpec("subscribed_at", DESC),
)

SITE_TABLES: tuple[TableDescriptor, ...] = (RELEASES, EVENTS, CONTACTS, NEWSLETTER)
