"""
Core module - Security, token revocation, pagination and logging utilities.
"""
from recipe_api.core.security import (
    hash_password,
    verify_password,
    create_access_token,
    decode_token,
)
from recipe_api.core.revocation import RevokedTokenSet, TokenRevocationStore
from recipe_api.core.pagination import (
    Pagination,
    calculate_pagination,
    build_page_links,
    link_header,
)

__all__ = [
    "hash_password",
    "verify_password",
    "create_access_token",
    "decode_token",
    "RevokedTokenSet",
    "TokenRevocationStore",
    "Pagination",
    "calculate_pagination",
    "build_page_links",
    "link_header",
]
