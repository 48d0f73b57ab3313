"""
User Service - directory queries over active users.
"""
from typing import List, Optional
from sqlalchemy.orm import Session, joinedload

from ..auth.models import User, UserRole

def list_active_users(db: Session, role: Optional[UserRole] = None) -> List[User]:
    """
    List active users, optionally restricted to one role.

    Args:
        db: Database session
        role: Only return users with this role

    Returns:
        List[User]: Ordered by role, first name, last name (all ascending)
    """
    query = (
        db.query(User)
        .options(joinedload(User.patient), joinedload(User.provider))
        .filter(User.is_active.is_(True))
    )
    if role is not None:
        query = query.filter(User.role == role)
    return query.order_by(User.role.asc(), User.first_name.asc(), User.last_name.asc()).all()
