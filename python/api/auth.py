"""
Authentication Module

Delegates identity to the hosted auth service and resolves roles from the
user's profile row and config/access_control.yaml.
"""

import logging
import os
from pathlib import Path
from typing import Any

import requests
import yaml
from fastapi import Depends, HTTPException, Header, status
from pydantic import BaseModel

from .database import execute_query

logger = logging.getLogger(__name__)

DEFAULT_ACCESS_CONFIG = {
    "permissions": {
        "admin": ["*"],
        "accountant": ["view", "edit", "report", "export"],
        "user": ["view", "edit", "report", "export"],
        "viewer": ["view", "report"],
    },
    "reports": {
        "admin": ["*"],
        "accountant": ["profitloss", "cashflow", "sales_by_customer", "expenses_by_vendor", "custom"],
        "user": ["profitloss", "cashflow"],
        "viewer": [],
    },
}


class User(BaseModel):
    """Authenticated user model."""

    id: str
    email: str | None = None
    role: str = "user"
    is_admin: bool = False
    metadata_role: str | None = None
    permissions: list[str] = []

    @property
    def is_admin_user(self) -> bool:
        """Admin flag on the profile, or an admin role in the auth metadata."""
        return self.is_admin or self.metadata_role == "admin"


class HostedAuthError(Exception):
    """Raised when the hosted auth service cannot answer."""


class AccessConfig:
    """Role configuration loaded from access_control.yaml."""

    def __init__(self, config_path: Path | str | None = None):
        """Initialize access config.

        Args:
            config_path: Path to access_control.yaml
        """
        if config_path is None:
            config_path = Path(__file__).parent.parent.parent / "config" / "access_control.yaml"

        self.config_path = Path(config_path)
        self._load_config()

    def _load_config(self) -> None:
        """Load configuration from YAML."""
        if self.config_path.exists():
            with open(self.config_path) as f:
                self.config = yaml.safe_load(f) or {}
        else:
            self.config = DEFAULT_ACCESS_CONFIG

    def permissions_for(self, role: str) -> list[str]:
        return list(self.config.get("permissions", {}).get(role, ["view"]))

    def reports_for(self, role: str) -> list[str]:
        return list(self.config.get("reports", {}).get(role, []))

    def has_permission(self, user: User, permission: str) -> bool:
        """Check if user has a specific permission.

        Args:
            user: User object
            permission: Permission to check

        Returns:
            True if user has permission
        """
        if user.is_admin_user or "*" in user.permissions:
            return True

        return permission in user.permissions


class HostedAuthClient:
    """Client for the hosted auth service user endpoint."""

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        timeout: float = 10.0,
    ):
        self.base_url = (base_url or os.getenv("SUPABASE_URL", "")).rstrip("/")
        self.api_key = api_key or os.getenv("SUPABASE_ANON_KEY", "")
        self.timeout = timeout

    def get_user(self, access_token: str) -> dict[str, Any] | None:
        """Resolve an access token to the hosted user record.

        Args:
            access_token: JWT issued by the hosted auth service

        Returns:
            User record, or None if the token is rejected

        Raises:
            HostedAuthError: If the service is unreachable or misconfigured
        """
        if not self.base_url:
            raise HostedAuthError("SUPABASE_URL is not configured")

        try:
            response = requests.get(
                f"{self.base_url}/auth/v1/user",
                headers={
                    "apikey": self.api_key,
                    "Authorization": f"Bearer {access_token}",
                },
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error(f"Auth service request failed: {e}")
            raise HostedAuthError(str(e)) from e

        if response.status_code in (401, 403):
            return None

        if response.status_code != 200:
            logger.error(f"Auth service returned {response.status_code}: {response.text}")
            raise HostedAuthError(f"Auth service returned {response.status_code}")

        return response.json()


# Global instances
access_config = AccessConfig()
auth_client = HostedAuthClient()


def load_profile(user_id: str) -> dict | None:
    """Fetch the profile row for a user id."""
    rows = execute_query(
        "SELECT id::text, email, role, is_admin FROM profiles WHERE id = :id",
        {"id": user_id},
    )
    return rows[0] if rows else None


def build_user(auth_user: dict, profile: dict | None) -> User:
    """Combine the hosted auth record and the profile row into a User."""
    metadata_role = (auth_user.get("user_metadata") or {}).get("role")
    profile = profile or {}
    role = profile.get("role") or metadata_role or "user"

    return User(
        id=str(auth_user["id"]),
        email=auth_user.get("email") or profile.get("email"),
        role=role,
        is_admin=bool(profile.get("is_admin")),
        metadata_role=metadata_role,
        permissions=access_config.permissions_for(role),
    )


async def get_current_user(
    authorization: str | None = Header(None),
) -> User:
    """Get current authenticated user from the Authorization header.

    Args:
        authorization: Bearer token issued by the hosted auth service

    Returns:
        Authenticated User

    Raises:
        HTTPException: If authentication fails
    """
    token = None
    if authorization and authorization.lower().startswith("bearer "):
        token = authorization[7:].strip()

    # Development mode: allow anonymous requests as a local admin
    if os.getenv("ENVIRONMENT", "development") == "development" and not token:
        return User(
            id="00000000-0000-0000-0000-000000000000",
            email="dev@localhost",
            role="admin",
            is_admin=True,
            permissions=["*"],
        )

    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing bearer token",
        )

    try:
        auth_user = auth_client.get_user(token)
    except HostedAuthError:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Authentication service unavailable",
        )

    if not auth_user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )

    return build_user(auth_user, load_profile(str(auth_user["id"])))


def require_permission(permission: str):
    """Dependency factory for permission checks.

    Args:
        permission: Required permission

    Returns:
        Dependency function
    """
    async def check_permission(user: User = Depends(get_current_user)) -> User:
        if not access_config.has_permission(user, permission):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Permission '{permission}' required",
            )
        return user

    return check_permission


def require_role(*roles: str):
    """Dependency factory allowing admins and the listed roles."""
    async def check_role(user: User = Depends(get_current_user)) -> User:
        if roles and not (user.is_admin or user.role in roles):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Role not permitted",
            )
        return user

    return check_role


async def require_admin(user: User = Depends(get_current_user)) -> User:
    """Allow only admins."""
    if not user.is_admin_user:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return user


# Common permission dependencies
require_view = require_permission("view")
require_edit = require_permission("edit")
require_export = require_permission("export")
