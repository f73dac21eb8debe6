import enum
import uuid

from sqlalchemy import Boolean, Column, Date, DateTime, Enum, Float, ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


def new_id() -> str:
    return uuid.uuid4().hex


class Role(str, enum.Enum):
    USER = "USER"
    ADMIN = "ADMIN"


class TaskStatus(str, enum.Enum):
    PENDING = "PENDING"
    IN_REVIEW = "IN_REVIEW"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class Family(Base):
    __tablename__ = "families"

    id = Column(String, primary_key=True, index=True, default=new_id)
    name = Column(String, nullable=False, default="")

    users = relationship("User", back_populates="family")
    budgets = relationship("Budget", back_populates="family", cascade="all, delete-orphan")


class User(Base):
    __tablename__ = "users"

    id = Column(String, primary_key=True, index=True, default=new_id)
    username = Column(String, index=True, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    password = Column(String)  # Hashed password
    role = Column(Enum(Role), nullable=False, default=Role.USER)
    family_id = Column(String, ForeignKey("families.id"), nullable=False, index=True)

    family = relationship("Family", back_populates="users")
    tasks = relationship("Task", back_populates="owner", cascade="all, delete-orphan")
    pocket_money = relationship("PocketMoney", back_populates="owner", cascade="all, delete-orphan")
    cash_flow = relationship("CashFlow", back_populates="owner", cascade="all, delete-orphan")
    goals = relationship("Goal", back_populates="owner", cascade="all, delete-orphan")


class Task(Base):
    __tablename__ = "tasks"

    id = Column(String, primary_key=True, index=True, default=new_id)
    name = Column(String, nullable=False)
    description = Column(Text, default="")
    amount = Column(Float, nullable=False, default=0)  # reward
    start_date = Column(DateTime(timezone=True))
    end_date = Column(DateTime(timezone=True))
    is_active = Column(Boolean, nullable=False, default=False)
    status = Column(Enum(TaskStatus), nullable=False, default=TaskStatus.PENDING)
    user_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)

    owner = relationship("User", back_populates="tasks")


class Budget(Base):
    __tablename__ = "budgets"
    __table_args__ = (UniqueConstraint("family_id", "month"),)

    id = Column(String, primary_key=True, index=True, default=new_id)
    month = Column(Date, nullable=False)  # first day of the month
    amount = Column(Float, nullable=False, default=0)
    family_id = Column(String, ForeignKey("families.id"), nullable=False, index=True)

    family = relationship("Family", back_populates="budgets")


class PocketMoney(Base):
    __tablename__ = "pocket_money"
    __table_args__ = (UniqueConstraint("user_id", "month"),)

    id = Column(String, primary_key=True, index=True, default=new_id)
    month = Column(Date, nullable=False)  # first day of the month
    amount = Column(Float, nullable=False, default=0)
    user_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)

    owner = relationship("User", back_populates="pocket_money")


class CashFlow(Base):
    __tablename__ = "cash_flow"

    id = Column(String, primary_key=True, index=True, default=new_id)
    name = Column(String, nullable=False, default="")
    amount = Column(Float, nullable=False)  # > 0 income, < 0 expense
    date = Column(Date, nullable=False, index=True)
    user_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)

    owner = relationship("User", back_populates="cash_flow")


class Goal(Base):
    __tablename__ = "goals"

    id = Column(String, primary_key=True, index=True, default=new_id)
    name = Column(String, nullable=False)
    description = Column(Text, default="")
    amount = Column(Float, nullable=False, default=0)  # target
    start_date = Column(DateTime(timezone=True))
    end_date = Column(DateTime(timezone=True))
    is_active = Column(Boolean, nullable=False, default=True)
    user_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)

    owner = relationship("User", back_populates="goals")
