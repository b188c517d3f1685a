"""Who may see a post.

Each visibility kind has one :class:`AudienceRule` carrying both renderings of
the rule: ``decide`` for a single loaded post and ``clause`` for a bulk SQL
filter. :class:`VisibilityResolver` and the post query planner dispatch through
the same :data:`AUDIENCE_RULES` table, so a single post and a listing can never
disagree.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Protocol

from sqlalchemy import ColumnElement, and_, or_

from content_portal.core.errors import ForbiddenError
from content_portal.models import Post, PostVisibility, UserRole
from content_portal.services.membership import MembershipIndex

logger = logging.getLogger(__name__)

NOT_VISIBLE = "Post is not visible to this user"
NO_GROUP_ASSIGNED = "Post has no group assigned"
UNKNOWN_RULE = "Unknown visibility rule"


class Actor(Protocol):
    """The account a decision is made for."""

    id: str
    role: UserRole


class PostShape(Protocol):
    """The persisted audience columns of a post."""

    visibility: PostVisibility | str
    owner_user_id: str | None
    group_id: str | None


@dataclass(frozen=True)
class Allow:
    """Positive decision."""

    allowed = True


@dataclass(frozen=True)
class Deny:
    """Negative decision with the reason reported to the caller."""

    reason: str
    allowed = False


Decision = Allow | Deny


class AudienceRule:
    """Visibility rule for one :class:`PostVisibility` kind."""

    visibility: PostVisibility

    def decide(self, post: PostShape, actor: Actor, memberships: MembershipIndex) -> Decision:
        raise NotImplementedError

    def clause(self, actor: Actor) -> ColumnElement[bool]:
        raise NotImplementedError


class PublicRule(AudienceRule):
    visibility = PostVisibility.PUBLIC

    def decide(self, post: PostShape, actor: Actor, memberships: MembershipIndex) -> Decision:
        return Allow()

    def clause(self, actor: Actor) -> ColumnElement[bool]:
        return Post.visibility == PostVisibility.PUBLIC


class UserRule(AudienceRule):
    visibility = PostVisibility.USER

    def decide(self, post: PostShape, actor: Actor, memberships: MembershipIndex) -> Decision:
        if post.owner_user_id is not None and post.owner_user_id == actor.id:
            return Allow()
        return Deny(NOT_VISIBLE)

    def clause(self, actor: Actor) -> ColumnElement[bool]:
        return and_(
            Post.visibility == PostVisibility.USER,
            Post.owner_user_id == actor.id,
        )


class GroupRule(AudienceRule):
    visibility = PostVisibility.GROUP

    def decide(self, post: PostShape, actor: Actor, memberships: MembershipIndex) -> Decision:
        if not post.group_id:
            return Deny(NO_GROUP_ASSIGNED)
        if memberships.is_member(post.group_id, actor.id):
            return Allow()
        return Deny(NOT_VISIBLE)

    def clause(self, actor: Actor) -> ColumnElement[bool]:
        return and_(
            Post.visibility == PostVisibility.GROUP,
            MembershipIndex.exists_clause(Post.group_id, actor.id),
        )


AUDIENCE_RULES: dict[PostVisibility, AudienceRule] = {
    rule.visibility: rule for rule in (PublicRule(), UserRule(), GroupRule())
}

# Category listings never reveal group-scoped categories to non-admins.
CATEGORY_VISIBILITIES = (PostVisibility.PUBLIC, PostVisibility.USER)


class VisibilityResolver:
    """Single source of truth for post (and therefore media) access."""

    def __init__(self, memberships: MembershipIndex) -> None:
        self.memberships = memberships

    def can_view(self, post: PostShape, actor: Actor) -> Decision:
        """Decide whether ``actor`` may view ``post``.

        Admins are allowed unconditionally; everyone else goes through the
        rule registered for the post's visibility kind.
        """
        if actor.role == UserRole.ADMIN:
            return Allow()
        rule = AUDIENCE_RULES.get(post.visibility)  # type: ignore[call-overload]
        if rule is None:
            return Deny(UNKNOWN_RULE)
        return rule.decide(post, actor, self.memberships)

    def ensure_can_view(self, post: PostShape, actor: Actor) -> None:
        """Raise :class:`ForbiddenError` unless ``actor`` may view ``post``."""
        decision = self.can_view(post, actor)
        if isinstance(decision, Deny):
            logger.debug(
                "Denied actor %s on post %s: %s",
                actor.id,
                getattr(post, "id", None),
                decision.reason,
            )
            raise ForbiddenError(decision.reason)

    @staticmethod
    def visibility_clause(
        actor: Actor,
        kinds: Iterable[PostVisibility] = tuple(PostVisibility),
    ) -> ColumnElement[bool] | None:
        """Return the SQL filter equivalent to :meth:`can_view` for ``actor``.

        ``None`` means no filtering is needed (admins).
        """
        if actor.role == UserRole.ADMIN:
            return None
        return or_(*(AUDIENCE_RULES[kind].clause(actor) for kind in kinds))
