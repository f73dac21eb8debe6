"""
Request and response bodies.

Wire names follow the JSON the web client already speaks (``userId``,
``isActive``, ``familyID``); ORM attributes keep snake_case and are mapped
through field aliases.
"""

from datetime import date, datetime, timezone
from typing import Annotated, List, Optional

from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, EmailStr, Field

from .db.models import Role, TaskStatus


def first_of_month(value):
    """Coerce a date, datetime or ISO string to the first day of its month."""
    if isinstance(value, datetime):
        value = value.date()
    elif isinstance(value, str):
        value = date.fromisoformat(value.strip()[:10])
    if isinstance(value, date):
        return value.replace(day=1)
    raise ValueError("month must be a date or an ISO date string")


Month = Annotated[date, BeforeValidator(first_of_month)]


def as_utc(value: datetime) -> datetime:
    """Naive datetimes are taken to be UTC already."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


UtcDateTime = Annotated[datetime, AfterValidator(as_utc)]


class WireModel(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


# --- Auth ---

class SignInRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6)


class SignUpRequest(SignInRequest):
    username: str = Field(min_length=1)


class SignInResponse(BaseModel):
    token: str
    userID: str
    userRole: Role
    username: str


class MenuItem(BaseModel):
    title: str
    navigate: str


class SessionResponse(BaseModel):
    userID: str
    userRole: Role
    username: str
    menu: List[MenuItem]


class Message(BaseModel):
    message: str
    id: Optional[str] = None


# --- Users ---

class UserOut(WireModel):
    id: str
    username: str
    email: str
    role: Role
    family_id: str = Field(alias="familyID")


class UserIn(WireModel):
    id: Optional[str] = None
    requesting_user_id: Optional[str] = Field(None, alias="userId")
    username: str = Field(min_length=1)
    email: EmailStr
    password: Optional[str] = Field(None, min_length=6)
    role: Role = Role.USER


class UserList(BaseModel):
    users: List[UserOut]


class DeleteRequest(WireModel):
    id: Optional[str] = None
    user_id: Optional[str] = Field(None, alias="userId")


# --- Tasks ---

class TaskIn(WireModel):
    id: Optional[str] = None
    name: str = ""
    description: str = ""
    amount: float = Field(0, ge=0)
    user_id: Optional[str] = Field(None, alias="userId")
    start_date: Optional[UtcDateTime] = None
    end_date: Optional[UtcDateTime] = None
    is_active: bool = Field(False, alias="isActive")
    status: TaskStatus = TaskStatus.PENDING


class TaskOut(WireModel):
    id: str
    name: str
    description: Optional[str] = None
    amount: float
    user_id: str = Field(alias="userId")
    start_date: Optional[UtcDateTime] = None
    end_date: Optional[UtcDateTime] = None
    is_active: bool = Field(alias="isActive")
    status: TaskStatus


class TaskList(BaseModel):
    tasks: List[TaskOut]


# --- Budget and pocket money ---

class BudgetEntry(WireModel):
    id: Optional[str] = None
    month: Month
    amount: float = Field(ge=0)


class BudgetOut(WireModel):
    id: str
    family_id: str = Field(alias="familyID")
    month: date
    amount: float


class BudgetIn(WireModel):
    user_id: Optional[str] = Field(None, alias="userId")
    budget: List[BudgetEntry] = []


class BudgetList(BaseModel):
    budget: List[BudgetOut]


class PocketMoneyEntry(WireModel):
    id: Optional[str] = None
    user_id: str = Field(alias="userId")
    month: Month
    amount: float = Field(ge=0)


class PocketMoneyOut(WireModel):
    id: str
    user_id: str = Field(alias="userId")
    month: date
    amount: float


class PocketMoneyIn(WireModel):
    user_id: Optional[str] = Field(None, alias="userId")
    pocket_money: List[PocketMoneyEntry] = Field([], alias="pocketMoney")


class PocketMoneyList(WireModel):
    pocket_money: List[PocketMoneyOut] = Field(alias="pocketMoney")
    exceeded: List[date] = []


class Overview(WireModel):
    month: date
    pocket_money: float = Field(alias="pocketMoney")
    income: float
    total_income: float = Field(alias="totalIncome")
    expense: float
    total: float


# --- Cash flow ---

class CashFlowIn(WireModel):
    id: Optional[str] = None
    name: str = ""
    amount: float
    day: date = Field(alias="date")
    user_id: Optional[str] = Field(None, alias="userId")


class CashFlowOut(WireModel):
    id: str
    name: str
    amount: float
    day: date = Field(alias="date")
    user_id: str = Field(alias="userId")


class CashFlowList(WireModel):
    cash_flow: List[CashFlowOut] = Field(alias="cashFlow")


# --- Goals ---

class GoalIn(WireModel):
    id: Optional[str] = None
    name: str = Field(min_length=1)
    description: str = ""
    amount: float = Field(0, ge=0)
    user_id: Optional[str] = Field(None, alias="userId")
    start_date: Optional[UtcDateTime] = None
    end_date: Optional[UtcDateTime] = None
    is_active: bool = Field(True, alias="isActive")


class GoalOut(WireModel):
    id: str
    name: str
    description: Optional[str] = None
    amount: float
    user_id: str = Field(alias="userId")
    start_date: Optional[UtcDateTime] = None
    end_date: Optional[UtcDateTime] = None
    is_active: bool = Field(alias="isActive")


class GoalList(BaseModel):
    goals: List[GoalOut]
