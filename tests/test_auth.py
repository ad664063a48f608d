import uuid

import pytest
from jose import JWTError, jwt

from invoicer.config.settings import settings
from invoicer.domain.services.auth import (
    ACCESS_TOKEN_TYPE,
    REFRESH_TOKEN_TYPE,
    create_access_token,
    create_refresh_token,
    decode_token,
    hash_password,
    verify_password,
)


def test_password_round_trip():
    hashed = hash_password("s3cret-pass")
    assert hashed != "s3cret-pass"
    assert verify_password("s3cret-pass", hashed)
    assert not verify_password("wrong", hashed)


def test_verify_without_hash():
    assert verify_password("anything", "") is False


def test_access_token_claims():
    user_id = uuid.uuid4()
    token, expires_in = create_access_token(str(user_id))
    payload = decode_token(token)
    assert payload["sub"] == str(user_id)
    assert payload["type"] == ACCESS_TOKEN_TYPE
    assert expires_in == settings.USER_JWT_ACCESS_EXPIRE_MINUTES * 60


def test_refresh_token_type():
    payload = decode_token(create_refresh_token("abc"))
    assert payload["type"] == REFRESH_TOKEN_TYPE


def test_foreign_signature_is_rejected():
    forged = jwt.encode({"sub": "x", "type": ACCESS_TOKEN_TYPE}, "not-the-secret", algorithm="HS256")
    with pytest.raises(JWTError):
        decode_token(forged)
