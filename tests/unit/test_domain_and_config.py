"""Domain exceptions, HTTP status mapping, cached profile payloads and settings validation."""

import pytest
from pydantic import ValidationError

from nearh.application.dtos.profile import CachedProfile
from nearh.core.config import Settings
from nearh.core.exception_handlers import status_for
from nearh.domain.enums import ApprovalStatus, UserRole
from nearh.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    ConflictException,
    DuplicateResourceException,
    MasterDataFetchError,
    NearHException,
    ResourceInUseException,
    ResourceNotFoundException,
    SqlNotConfiguredException,
    ValidationException,
)


@pytest.mark.parametrize(
    ("exc", "status"),
    [
        (ResourceNotFoundException("location", "loc-1"), 404),
        (DuplicateResourceException("location", "This city already exists in this state."), 409),
        (ResourceInUseException("service", "svc-1", "Cannot delete."), 409),
        (ConflictException("This user is already approved."), 409),
        (AuthenticationException(), 401),
        (AuthorizationException(required_role="superadmin"), 403),
        (ValidationException("bad", field="city"), 400),
        (SqlNotConfiguredException(), 503),
        (MasterDataFetchError("locations"), 503),
        (NearHException("unmapped"), 400),
    ],
)
def test_status_for(exc: NearHException, status: int) -> None:
    assert status_for(exc) == status


def test_exception_body_shape() -> None:
    body = ResourceInUseException(
        "location", "loc-1", "Cannot delete. Hospitals are currently registered in this location."
    ).to_dict()

    assert body == {
        "error": "RESOURCE_IN_USE",
        "message": "Cannot delete. Hospitals are currently registered in this location.",
        "details": {"resource_type": "location", "resource_id": "loc-1"},
    }


def test_master_data_fetch_error_keeps_cause() -> None:
    cause = OSError("connection reset")
    err = MasterDataFetchError("services", cause)
    assert err.original_error is cause
    assert err.details == {"list_type": "services"}


def test_cached_profile_payload_round_trip() -> None:
    profile = CachedProfile(
        id="u1", role=UserRole.ADMIN, status=ApprovalStatus.APPROVED, associated_hospital_id="h1"
    )
    payload = profile.to_cache()

    assert payload == {
        "id": "u1",
        "role": "admin",
        "status": "approved",
        "associated_hospital_id": "h1",
    }
    assert CachedProfile.from_cache(payload) == profile


@pytest.mark.parametrize(
    "payload",
    [
        "profile",
        ["u1"],
        {"id": "u1", "role": "admin"},
        {"id": "u1", "role": "owner", "status": "approved"},
    ],
)
def test_cached_profile_rejects_bad_payload(payload) -> None:
    with pytest.raises(ValueError):
        CachedProfile.from_cache(payload)


def test_incompletely_provisioned_only_for_admins_without_hospital() -> None:
    assert CachedProfile("u1", UserRole.ADMIN, ApprovalStatus.PENDING).is_incompletely_provisioned
    assert not CachedProfile(
        "u1", UserRole.ADMIN, ApprovalStatus.PENDING, "h1"
    ).is_incompletely_provisioned
    assert not CachedProfile(
        "s1", UserRole.SUPERADMIN, ApprovalStatus.APPROVED
    ).is_incompletely_provisioned


def test_settings_require_secret_key() -> None:
    with pytest.raises(ValidationError, match="SECRET_KEY"):
        Settings(secret_key="")


@pytest.mark.parametrize(
    "overrides",
    [
        {"cache_backend": "memcached"},
        {"profile_cache_timeout_seconds": 0},
        {"master_fetch_retries": 0},
        {"master_fetch_retry_base_delay": -1},
    ],
)
def test_settings_reject_invalid_cache_policy(overrides) -> None:
    with pytest.raises(ValidationError):
        Settings(secret_key="k", **overrides)


def test_settings_cache_defaults() -> None:
    settings = Settings(secret_key="k", cache_backend="redis")
    assert settings.cache_version == "v1"
    assert settings.cache_ttl_profile == 3600
    assert settings.cache_ttl_master == 86400
    assert settings.master_fetch_retries == 3
