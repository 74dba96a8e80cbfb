from sqlalchemy import Column, String, Enum
from utils.database import Base
import enum


class StaffRole(str, enum.Enum):
    WAITER = "waiter"      # Takes orders and runs tables
    MANAGER = "manager"    # Manages reservations, menu and floor
    CHEF = "chef"          # Accepts and prepares orders


class Staff(Base):
    __tablename__ = "staff"

    id = Column(String(50), primary_key=True, index=True)
    username = Column(String(50), unique=True, index=True, nullable=False)
    password = Column(String(255), nullable=False)  # passlib hash
    role = Column(Enum(StaffRole, native_enum=False, values_callable=lambda e: [m.value for m in e]), nullable=False)
    name = Column(String(100), nullable=False)
