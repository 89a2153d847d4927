from __future__ import annotations

import pytest
from argon2 import PasswordHasher as Argon2Hasher

from app.api.dependencies import user_repo
from app.main import DEV_ADMIN_EMAIL, DEV_ADMIN_PASSWORD, _seed_dev_admin
from app.models.user import ROLE_ADMIN, User
from app.repos.user_repo import InMemoryUserRepo
from app.services.auth_service import (
    Argon2PasswordHasher,
    authenticate_user,
    hash_password,
    verify_password,
)

# ---- hashing ----


def test_hash_and_verify() -> None:
    h = hash_password("s3cret")
    assert h != "s3cret"
    assert verify_password("s3cret", h)
    assert not verify_password("wrong", h)


def test_hashes_are_salted() -> None:
    assert hash_password("same") != hash_password("same")


def test_hash_rejects_empty() -> None:
    with pytest.raises(ValueError):
        hash_password("")


def test_verify_tolerates_garbage_hash() -> None:
    assert verify_password("pw", "not-a-hash") is False
    assert verify_password("", hash_password("pw")) is False


def test_argon2_hasher_adapter() -> None:
    assert verify_password("pw", Argon2PasswordHasher().hash("pw"))


# ---- authenticate_user ----


def _repo_with(password: str = "pw", enabled: bool = True) -> InMemoryUserRepo:
    repo = InMemoryUserRepo()
    user = User("a@example.com", "A", password=hash_password(password))
    user.enabled = enabled
    repo.save(user)
    return repo


def test_authenticate_success() -> None:
    user = authenticate_user(_repo_with(), " A@Example.com ", "pw")
    assert user is not None
    assert user.email == "a@example.com"


def test_authenticate_wrong_password() -> None:
    assert authenticate_user(_repo_with(), "a@example.com", "nope") is None


def test_authenticate_unknown_email() -> None:
    assert authenticate_user(_repo_with(), "b@example.com", "pw") is None


def test_authenticate_disabled() -> None:
    assert authenticate_user(_repo_with(enabled=False), "a@example.com", "pw") is None


def test_authenticate_upgrades_weak_hash() -> None:
    repo = InMemoryUserRepo()
    weak = Argon2Hasher(time_cost=1, memory_cost=8, parallelism=1).hash("pw")
    repo.save(User("a@example.com", "A", password=weak))

    assert authenticate_user(repo, "a@example.com", "pw") is not None
    upgraded = repo.get_by_email("a@example.com").password  # type: ignore[union-attr]
    assert upgraded != weak
    assert verify_password("pw", upgraded)


# ---- dev seed ----


def test_seed_dev_admin_is_idempotent() -> None:
    _seed_dev_admin()
    _seed_dev_admin()
    admins = [u for u in user_repo.list_all() if u.email == DEV_ADMIN_EMAIL]
    assert len(admins) == 1
    assert admins[0].has_role(ROLE_ADMIN)
    assert verify_password(DEV_ADMIN_PASSWORD, admins[0].password)
