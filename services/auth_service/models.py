from sqlalchemy import Column, Integer, String

from shared.config.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(255), unique=True, nullable=False, index=True)
    # Stored exactly as submitted; see AuthService._verify_password
    password = Column(String(255), nullable=False)
