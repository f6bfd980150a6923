"""
View counting and reactions for blog posts.

Both features are keyed by an anonymous browser session, never by a user:
- Views: a post is counted once per browser, remembered in a cookie that
  holds the slugs already seen. Clearing the cookie allows a recount.
- Reactions: one BlogReaction row per (post, session, type); posting the
  same reaction again removes it.

Concurrency:
- Counters are only moved with F() expressions, never read-modify-write
- The increment and its read-back happen in one transaction, so the value
  returned is the one this request produced
- Duplicate reaction inserts are stopped by the unique constraint
"""
import json
import logging
import uuid
from dataclasses import dataclass
from typing import Optional

from django.db import IntegrityError, transaction
from django.db.models import Count, F

from .models import BlogPost, BlogReaction

logger = logging.getLogger(__name__)

ReactionType = BlogReaction.Type

SESSION_COOKIE = 'engagement_session'
SESSION_COOKIE_MAX_AGE = 60 * 60 * 24 * 365  # 1 year
VIEWED_COOKIE = 'viewed_items'
VIEWED_COOKIE_MAX_AGE = 60 * 60 * 24 * 30  # 30 days
VIEWED_ITEMS_LIMIT = 50
SESSION_ID_MAX_LENGTH = 64


class InvalidReactionType(ValueError):
    """Raised for a reaction type outside like/love/fire/clap."""


@dataclass(frozen=True)
class ViewResult:
    views: int
    already_viewed: bool
    # None when the cookie does not need rewriting
    viewed_items: Optional[list]


@dataclass(frozen=True)
class ReactionSummary:
    total_likes: int
    counts: dict
    user_reactions: list


@dataclass(frozen=True)
class ToggleResult:
    action: str
    total_likes: int
    counts: dict


def parse_viewed_items(raw):
    """
    Decode the viewed-items cookie.

    Client cookies are untrusted: anything that is not a JSON list of
    strings is read as "nothing viewed yet".
    """
    if not raw:
        return []
    try:
        value = json.loads(raw)
    except (TypeError, ValueError):
        return []
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str)]


def serialize_viewed_items(items):
    return json.dumps(items, separators=(',', ':'))


def new_session_id():
    return str(uuid.uuid4())


def clean_session_id(raw):
    """Return the cookie's session id, or None when absent or implausible."""
    if not raw or len(raw) > SESSION_ID_MAX_LENGTH:
        return None
    return raw


def get_views(slug):
    """Current view count. Raises BlogPost.DoesNotExist."""
    return BlogPost.objects.values_list('views', flat=True).get(slug=slug)


def record_view(slug, viewed):
    """
    Count one view of `slug` unless `viewed` already contains it.

    Returns a ViewResult; `viewed_items` is the list to write back to the
    cookie, or None when nothing was counted. Raises BlogPost.DoesNotExist.
    """
    if slug in viewed:
        return ViewResult(views=get_views(slug), already_viewed=True, viewed_items=None)

    with transaction.atomic():
        updated = BlogPost.objects.filter(slug=slug).update(views=F('views') + 1)
        if not updated:
            raise BlogPost.DoesNotExist(f"No blog post with slug {slug!r}")
        # The UPDATE holds the row lock until commit, so this reads our own value
        views = get_views(slug)

    viewed_items = [*viewed, slug][-VIEWED_ITEMS_LIMIT:]
    return ViewResult(views=views, already_viewed=False, viewed_items=viewed_items)


def _reaction_counts(post_id):
    rows = BlogReaction.objects.filter(post_id=post_id).values('type').annotate(total=Count('id'))
    return {row['type']: row['total'] for row in rows}


def get_reactions(slug, session_id=None):
    """
    Reaction totals for a post plus the types this session has applied.

    Read-only: a missing session simply has no reactions.
    Raises BlogPost.DoesNotExist.
    """
    post = BlogPost.objects.only('id', 'likes').get(slug=slug)
    user_reactions = []
    if session_id:
        user_reactions = list(
            BlogReaction.objects.filter(post=post, session_id=session_id)
            .order_by('created_at')
            .values_list('type', flat=True)
        )
    return ReactionSummary(
        total_likes=post.likes,
        counts=_reaction_counts(post.id),
        user_reactions=user_reactions,
    )


def toggle_reaction(slug, session_id, reaction_type):
    """
    Add the reaction if this session has not made it yet, remove it otherwise.

    Only `like` reactions move BlogPost.likes. Raises InvalidReactionType
    before touching the database, and BlogPost.DoesNotExist for an unknown
    slug.
    """
    if reaction_type not in ReactionType.values:
        raise InvalidReactionType(f"Invalid reaction type: {reaction_type!r}")

    post_id = BlogPost.objects.values_list('id', flat=True).get(slug=slug)
    is_like = reaction_type == ReactionType.LIKE
    posts = BlogPost.objects.filter(pk=post_id)

    with transaction.atomic():
        deleted, _ = BlogReaction.objects.filter(
            post_id=post_id, session_id=session_id, type=reaction_type
        ).delete()

        if deleted:
            action = 'removed'
            if is_like:
                posts.filter(likes__gt=0).update(likes=F('likes') - 1)
        else:
            action = 'added'
            try:
                with transaction.atomic():
                    BlogReaction.objects.create(
                        post_id=post_id, session_id=session_id, type=reaction_type
                    )
            except IntegrityError:
                # A concurrent request from the same session inserted it first
                # and has already moved the counter.
                logger.info(
                    "Duplicate %s reaction on %s for session %s ignored",
                    reaction_type, slug, session_id,
                )
            else:
                if is_like:
                    posts.update(likes=F('likes') + 1)

    total_likes = posts.values_list('likes', flat=True).get()
    return ToggleResult(action=action, total_likes=total_likes, counts=_reaction_counts(post_id))
