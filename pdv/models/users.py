import enum
from sqlalchemy import Column, Integer, String, Boolean, Enum, DateTime
from sqlalchemy.sql import func
from pdv.database import Base

class Role(str, enum.Enum):
    ADMINISTRADOR = "ADMINISTRADOR"
    GERENTE = "GERENTE"
    FUNCIONARIO = "FUNCIONARIO"

class User(Base):
    """Funcionário que opera o PDV."""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String, unique=True, index=True, nullable=False)
    full_name = Column(String, nullable=True)

    password_hash = Column(String, nullable=False)

    role = Column(Enum(Role), default=Role.FUNCIONARIO, nullable=False)

    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    @property
    def display_name(self):
        return self.full_name or self.username
