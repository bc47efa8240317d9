# models/user.py
from pydantic import BaseModel, ConfigDict

EDITABLE_FIELDS = ("name", "email", "phone")
MISSING_FIELDS_MESSAGE = "Please fill in all fields"


class User(BaseModel):
    # passthrough fields from the API (username, website, address, ...) are kept as-is
    model_config = ConfigDict(extra="allow", frozen=True)

    id: int
    name: str = ""
    email: str = ""
    phone: str = ""


class UserForm(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = ""
    email: str = ""
    phone: str = ""

    @classmethod
    def from_user(cls, user: User | None) -> "UserForm":
        if user is None:
            return cls()
        return cls(name=user.name or "", email=user.email or "", phone=user.phone or "")

    def validate_required(self) -> str | None:
        """Return the validation message when any field is blank, else None."""
        if not self.name.strip() or not self.email.strip() or not self.phone.strip():
            return MISSING_FIELDS_MESSAGE
        return None
