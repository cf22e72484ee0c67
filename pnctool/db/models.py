# pnctool/db/models.py
from sqlalchemy import BigInteger, Column, Integer, String, Text, DateTime, func
from sqlalchemy.orm import declarative_base

Base = declarative_base()

class CameraModel(Base):
    __tablename__ = "cameras"

    # SQLite only autoincrements INTEGER primary keys
    id = Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    name = Column(Text, nullable=False)
    mac_address = Column(String(12), nullable=False)
    site_name = Column(Text, nullable=False)
    model_no = Column(Text, nullable=False, default="")
    username = Column(Text, nullable=False, default="")
    password = Column(Text, nullable=False, default="")
    version = Column(Integer, nullable=False, default=1, server_default="1")
