from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from portal.models.user import User

DEFAULT_DESIGNATION = "Moderator"


class IdCard(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    full_name: str
    initials: str
    designation: str
    badge_number: str
    username: str
    department: str | None = None
    join_date: str | None = None
    contact_info: str | None = None
    profile_image: str | None = None


def initials_for(full_name: str) -> str:
    return "".join(part[0] for part in full_name.split()).upper()


def build_id_card(user: User) -> IdCard:
    return IdCard(
        full_name=user.full_name,
        initials=initials_for(user.full_name),
        designation=user.designation or DEFAULT_DESIGNATION,
        badge_number=user.badge_number,
        username=user.username,
        department=user.department,
        join_date=user.join_date,
        contact_info=user.contact_info,
        profile_image=user.profile_image,
    )
