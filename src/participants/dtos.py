from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from uuid import UUID


class ParticipantNotFoundError(Exception):
    """Raised when a username has no matching participant for the requested role."""

    def __init__(self, username: str) -> None:
        self.username = username
        super().__init__("Bạn chưa được mời tham dự")


class InvalidParticipantError(ValueError):
    """Raised when a participant would be stored without a username or display name."""

    def __init__(self) -> None:
        super().__init__("Username và tên hiển thị không được để trống")


class UsernameTakenError(ValueError):
    """Raised when renaming a participant to a username another participant owns."""

    def __init__(self, username: str) -> None:
        self.username = username
        super().__init__(f"Username '{username}' đã tồn tại")


class EmptySelectionError(ValueError):
    """Raised when a bulk operation receives no usable participant ids."""

    def __init__(self) -> None:
        super().__init__("Không có người tham gia nào được chọn")


class NotInvitedToDinnerError(Exception):
    """Raised when a participant answers the dinner invitation without being invited."""

    def __init__(self, participant_id: UUID) -> None:
        self.participant_id = participant_id
        super().__init__("Bạn chưa được mời dự tiệc tối")


class ImportFileError(ValueError):
    """Raised when an uploaded participant sheet cannot be read."""


class ParticipantRole(str, Enum):
    USER = "user"
    ADMIN = "admin"


class CeremonyState(str, Enum):
    PENDING = "pending"
    YES = "yes"
    NO = "no"


class DinnerState(str, Enum):
    NOT_INVITED = "not_invited"
    PENDING = "pending"
    YES = "yes"
    NO = "no"


class ParticipantGroup(str, Enum):
    INVITED = "invited"
    NOT_INVITED = "not_invited"


@dataclass(frozen=True)
class RSVPDTO:
    """A participant's answers. None means the question is still open."""

    user_id: UUID
    name: str
    email: str
    will_attend: bool | None = None
    will_attend_dinner: bool | None = None
    phone: str | None = None
    id: UUID | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class ParticipantDTO:
    """DTO for a participant with at most one embedded RSVP."""

    id: UUID
    username: str
    display_name: str
    email: str
    role: ParticipantRole = ParticipantRole.USER
    salutation: str | None = None
    invited_to_dinner: bool = False
    rsvp: RSVPDTO | None = None
    created_at: datetime | None = None

    @property
    def friendly_name(self) -> str:
        salutation = (self.salutation or "").strip()
        if salutation:
            return f"{salutation} {self.display_name}"
        return self.display_name


@dataclass(frozen=True)
class ParticipantUpsertDTO:
    """Input for creating or updating a participant."""

    username: str
    display_name: str
    salutation: str | None = None
    invited_to_dinner: bool = False
    id: UUID | None = None


@dataclass(frozen=True)
class ImportResultDTO:
    processed: int
    added: int
    updated: int


@dataclass(frozen=True)
class Cohorts:
    """Participants partitioned by ceremony and dinner state."""

    ceremony_yes: list[ParticipantDTO] = field(default_factory=list)
    ceremony_no: list[ParticipantDTO] = field(default_factory=list)
    ceremony_pending: list[ParticipantDTO] = field(default_factory=list)
    dinner_yes: list[ParticipantDTO] = field(default_factory=list)
    dinner_no: list[ParticipantDTO] = field(default_factory=list)
    dinner_pending: list[ParticipantDTO] = field(default_factory=list)
    dinner_not_invited: list[ParticipantDTO] = field(default_factory=list)
    total_participants: int = 0
    dinner_invitees_count: int = 0

    @property
    def total_responses(self) -> int:
        return len(self.ceremony_yes) + len(self.ceremony_no)

    @property
    def attendance_rate(self) -> int:
        if self.total_responses == 0:
            return 0
        return round_half_up(100 * len(self.ceremony_yes) / self.total_responses)


def round_half_up(value: float) -> int:
    # round() rounds half to even, rates round half up (62.5 -> 63)
    return int(value + 0.5)
