from typing import ClassVar

from ..store import Record

class User(Record):
    filename: ClassVar[str] = "users.txt"

    username: str
    phone: str

class UserProfile(Record):
    filename: ClassVar[str] = "user_profiles.txt"

    username: str
    full_name: str = ""
    id_number: str = ""
    email: str = ""
    address: str = ""
    phone: str = ""

    @property
    def is_complete(self) -> bool:
        """A booking needs at least a name and an identity document number."""
        return bool(self.full_name.strip()) and bool(self.id_number.strip())

class AdminCredential(Record):
    filename: ClassVar[str] = "admin_pass.txt"
    greedy_field: ClassVar[str] = "password"

    password: str
