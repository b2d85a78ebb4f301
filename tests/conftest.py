import pytest

from networknote.models.domain.session_domain import RolePolicy
from networknote.services.notifications import NotificationChannel
from tests.fakes import FakeAuthService, FakeUserAccountsRepository, make_user


@pytest.fixture
def policy():
    return RolePolicy(
        admin_emails=frozenset({"boss@example.com"}),
        manager_email="manager@example.com",
        default_manager_name="Sarah Johnson",
    )


@pytest.fixture
def notifier():
    return NotificationChannel()


@pytest.fixture
def fake_auth():
    return FakeAuthService()


@pytest.fixture
def five_users():
    return [
        make_user("u1", "Ann Lee"),
        make_user("u2", "Bob Stone", manager="Sarah Johnson"),
        make_user("u3", "Cara Diaz", status="paid"),
        make_user("u4", "Dan Fox", manager="Michael Chen"),
        make_user("u5", "Eve Park", manager="Sarah Johnson", status="paid"),
    ]


@pytest.fixture
def user_repo(five_users):
    return FakeUserAccountsRepository(five_users)
