import pytest

from portal.errors import Forbidden, Unauthorized
from portal.models.user import Role, User, is_admin
from portal.services.guard import Requirement, authorize
from portal.services.id_card import build_id_card, initials_for


def _user(role: Role, **fields) -> User:
    data = {
        "id": 1,
        "username": "u",
        "password": "x.y",
        "full_name": "Jane Q Public",
        "badge_number": "B9",
    }
    data.update(fields)
    return User(role=role.value, **data)


def test_no_principal_is_unauthorized():
    for requirement in Requirement:
        with pytest.raises(Unauthorized):
            authorize(None, requirement)


def test_moderator_forbidden_from_admin_operations():
    with pytest.raises(Forbidden):
        authorize(_user(Role.MODERATOR), Requirement.ADMIN)


def test_principal_passed_through():
    moderator = _user(Role.MODERATOR)
    admin = _user(Role.ADMIN)
    assert authorize(moderator, Requirement.AUTHENTICATED) is moderator
    assert authorize(admin, Requirement.AUTHENTICATED) is admin
    assert authorize(admin, Requirement.ADMIN) is admin


def test_is_admin():
    assert is_admin(_user(Role.ADMIN))
    assert not is_admin(_user(Role.MODERATOR))


def test_unknown_role_is_an_error():
    with pytest.raises(ValueError):
        is_admin(User(username="u", password="x", full_name="U", badge_number="B", role="root"))


# ==================== ID card ====================


@pytest.mark.parametrize(
    "name, expected",
    [("Jane Q Public", "JQP"), ("mona  lisa", "ML"), ("Cher", "C"), ("", "")],
)
def test_initials(name, expected):
    assert initials_for(name) == expected


def test_id_card_defaults():
    card = build_id_card(_user(Role.MODERATOR))
    assert card.designation == "Moderator"
    assert card.initials == "JQP"
    assert card.badge_number == "B9"
    assert card.department is None


def test_id_card_fields():
    card = build_id_card(
        _user(
            Role.MODERATOR,
            designation="Senior Moderator",
            department="Ops",
            join_date="2024-01-02",
            contact_info="555-0100",
        )
    )
    dumped = card.model_dump(by_alias=True)
    assert dumped["designation"] == "Senior Moderator"
    assert dumped["joinDate"] == "2024-01-02"
    assert dumped["contactInfo"] == "555-0100"
    assert dumped["fullName"] == "Jane Q Public"
