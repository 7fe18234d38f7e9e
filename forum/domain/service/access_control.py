"""Access-control evaluator.

Decides whether an actor may perform an action on a user, thread or
comment, and owns the two ban transforms (duration parsing and lazy expiry
reconciliation). Everything here is pure: callers load records, ask for a
decision, then persist.

Rules are checked in precedence order and the first match decides. Roles
compare by privilege (``Role.USER < Role.ADMIN_LEVEL_1 < Role.ADMIN_LEVEL_2``).
"""

import math
from datetime import datetime, timedelta

from forum.domain.error import (
    AuthenticationError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from forum.domain.model.user import User
from forum.domain.value import (
    Action,
    ActorContext,
    Decision,
    DenialKind,
    Deny,
    Permit,
    Role,
    TargetContext,
    TargetKind,
    ThreadStatus,
)

FOREVER = "forever"

_PERMIT = Permit()
_UNAUTHENTICATED = Deny(reason="Authentication required", kind=DenialKind.UNAUTHENTICATED)

_RESOURCE_NAMES = {
    TargetKind.USER: "User",
    TargetKind.THREAD: "Thread",
    TargetKind.COMMENT: "Comment",
}


def _not_found(target: TargetContext) -> Deny:
    return Deny(
        reason=f"{_RESOURCE_NAMES[target.kind]} not found", kind=DenialKind.NOT_FOUND
    )


def _is_owner(actor: ActorContext, target: TargetContext) -> bool:
    return actor.is_authenticated and actor.user_id == target.owner_id


def _is_hidden(target: TargetContext) -> bool:
    """Whether non-admins should see this target as absent."""
    if not target.is_active or not target.owner_active:
        return True
    return target.kind == TargetKind.THREAD and target.status != ThreadStatus.APPROVED


def _evaluate_read(actor: ActorContext, target: TargetContext) -> Decision:
    if _is_owner(actor, target):
        return _PERMIT
    if _is_hidden(target) and not actor.is_admin:
        return _not_found(target)
    return _PERMIT


def _evaluate_edit(actor: ActorContext, target: TargetContext) -> Decision:
    if target.kind == TargetKind.USER:
        if _is_owner(actor, target):
            return _PERMIT
        if not actor.is_admin:
            return Deny(reason="You can only edit your own profile")
        # Admins manage users strictly below them; level 2 is untouchable
        if target.current_role is not None and target.current_role >= actor.role:
            return Deny(reason="Cannot edit a user with an equal or higher role")
        return _PERMIT

    if not target.is_active and not actor.is_admin:
        return _not_found(target)
    if _is_owner(actor, target) or actor.is_admin:
        return _PERMIT
    return Deny(reason=f"You can only edit your own {target.kind.value}s")


def _evaluate_delete(actor: ActorContext, target: TargetContext) -> Decision:
    if target.kind == TargetKind.USER:
        if not actor.has_role(Role.ADMIN_LEVEL_2):
            return Deny(reason="Only Admin Level 2 can delete users")
        if actor.user_id == target.target_id:
            return Deny(reason="Cannot delete your own account")
        if target.current_role == Role.ADMIN_LEVEL_2:
            return Deny(reason="Cannot delete Admin Level 2 users")
        return _PERMIT

    if not target.is_active and not actor.is_admin:
        return _not_found(target)
    if _is_owner(actor, target):
        return _PERMIT
    if actor.has_role(Role.ADMIN_LEVEL_2):
        return _PERMIT
    if actor.is_admin:
        return Deny(reason=f"Only Admin Level 2 can delete other users' {target.kind.value}s")
    return Deny(reason=f"You can only delete your own {target.kind.value}s")


def _evaluate_restore(actor: ActorContext, target: TargetContext) -> Decision:
    if not actor.has_role(Role.ADMIN_LEVEL_2):
        return Deny(reason=f"Only Admin Level 2 can restore {target.kind.value}s")
    return _PERMIT


def _evaluate_ban(actor: ActorContext, action: Action, target: TargetContext) -> Decision:
    verb = action.value
    if target.kind != TargetKind.USER:
        return Deny(reason=f"Only users can be {verb}ned")
    if not actor.is_admin:
        return Deny(reason="Admin access required")
    if actor.user_id == target.target_id:
        return Deny(reason=f"Cannot {verb} yourself")
    if target.current_role == Role.ADMIN_LEVEL_2:
        return Deny(reason=f"Cannot {verb} Admin Level 2 users")
    if target.current_role is not None and target.current_role.is_admin:
        if not actor.has_role(Role.ADMIN_LEVEL_2):
            return Deny(reason=f"Admin Level 1 can only {verb} regular users")
    return _PERMIT


def _evaluate_review(actor: ActorContext, target: TargetContext) -> Decision:
    if target.kind != TargetKind.THREAD:
        return Deny(reason="Only threads go through moderation")
    if not actor.is_admin:
        return Deny(reason="Admin access required")
    if not target.is_active:
        return _not_found(target)
    if target.status != ThreadStatus.PENDING:
        return Deny(reason="Thread is not pending review")
    return _PERMIT


def _evaluate_promote(actor: ActorContext, target: TargetContext) -> Decision:
    if target.kind != TargetKind.USER:
        return Deny(reason="Only users have roles")
    if not actor.has_role(Role.ADMIN_LEVEL_2):
        return Deny(reason="Only Admin Level 2 can change user roles")
    if actor.user_id == target.target_id:
        return Deny(reason="Cannot change your own role")
    if target.current_role == Role.ADMIN_LEVEL_2:
        return Deny(reason="Cannot change the role of Admin Level 2 users")
    return _PERMIT


def _evaluate_comment(actor: ActorContext, target: TargetContext) -> Decision:
    if target.kind != TargetKind.THREAD:
        return Deny(reason="Comments can only be added to threads")
    if not target.is_active:
        return _not_found(target)
    if target.status != ThreadStatus.APPROVED:
        return Deny(reason="Cannot comment on threads that are not approved")
    if not target.owner_active and not actor.is_admin:
        return _not_found(target)
    return _PERMIT


def evaluate(
    actor: ActorContext, action: Action, target: TargetContext | None = None
) -> Decision:
    """Decide whether ``actor`` may perform ``action`` on ``target``.

    Args:
        actor: Requesting identity (may be anonymous)
        action: Requested action
        target: Entity acted upon; ``None`` only for ``Action.CREATE_ADMIN``

    Returns:
        ``Permit`` or ``Deny`` carrying the reason and how to surface it
    """
    if action == Action.READ:
        if target is None:
            raise ValueError("READ requires a target")
        return _evaluate_read(actor, target)

    if not actor.is_authenticated:
        return _UNAUTHENTICATED

    if action == Action.CREATE_ADMIN:
        if not actor.has_role(Role.ADMIN_LEVEL_2):
            return Deny(reason="Only Admin Level 2 can create admin users")
        return _PERMIT

    if target is None:
        raise ValueError(f"{action.value} requires a target")

    if action == Action.EDIT:
        return _evaluate_edit(actor, target)
    if action == Action.DELETE:
        return _evaluate_delete(actor, target)
    if action == Action.RESTORE:
        return _evaluate_restore(actor, target)
    if action in (Action.BAN, Action.UNBAN):
        return _evaluate_ban(actor, action, target)
    if action in (Action.APPROVE, Action.REJECT):
        return _evaluate_review(actor, target)
    if action == Action.PROMOTE:
        return _evaluate_promote(actor, target)
    if action == Action.COMMENT:
        return _evaluate_comment(actor, target)
    raise ValueError(f"Unknown action: {action}")


def require_permission(
    actor: ActorContext, action: Action, target: TargetContext | None = None
) -> None:
    """Evaluate and raise the matching domain error on denial.

    Raises:
        AuthenticationError: Anonymous actor attempting a protected action
        NotFoundError: Target hidden from this actor
        PermissionDeniedError: Any other rule mismatch
    """
    decision = evaluate(actor, action, target)
    if isinstance(decision, Permit):
        return
    if decision.kind == DenialKind.UNAUTHENTICATED:
        raise AuthenticationError(decision.reason)
    if decision.kind == DenialKind.NOT_FOUND and target is not None:
        raise NotFoundError(_RESOURCE_NAMES[target.kind], str(target.target_id))
    raise PermissionDeniedError(decision.reason)


def parse_ban_duration(duration: object, now: datetime) -> datetime | None:
    """Turn a caller-supplied ban duration into ``banned_until``.

    Args:
        duration: Positive number of hours, ``"forever"``, or ``None``
        now: Reference time

    Returns:
        Absolute expiry, or ``None`` for a permanent ban

    Raises:
        ValidationError: For any other value
    """
    if duration is None or duration == FOREVER:
        return None
    if (
        isinstance(duration, (int, float))
        and not isinstance(duration, bool)
        and math.isfinite(duration)
        and duration > 0
    ):
        return now + timedelta(hours=duration)
    raise ValidationError(
        'Invalid ban duration. Must be a positive number of hours or "forever"'
    )


def reconcile_ban_expiry(user: User, now: datetime) -> User:
    """Lift a timed ban whose expiry has passed.

    Returns the same instance when nothing changes, so callers can persist
    only when ``result is not user``.
    """
    if (
        not user.is_active
        and user.banned_until is not None
        and user.banned_until <= now
    ):
        return user.model_copy(
            update={"is_active": True, "banned_until": None, "updated_at": now}
        )
    return user


def require_admin(actor: ActorContext) -> None:
    """Gate for admin-only listings that have no single target.

    Raises:
        AuthenticationError: Anonymous actor
        PermissionDeniedError: Authenticated non-admin
    """
    if not actor.is_authenticated:
        raise AuthenticationError(_UNAUTHENTICATED.reason)
    if not actor.is_admin:
        raise PermissionDeniedError("Admin access required")
