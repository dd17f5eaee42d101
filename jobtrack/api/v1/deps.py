"""Shared route dependencies: configured codec and hasher from app state."""

from fastapi import Request

from jobtrack.core.security import PasswordHasher, TokenCodec


def get_token_codec(request: Request) -> TokenCodec:
    return request.app.state.token_codec


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.password_hasher
