from sqlalchemy import Column, Integer, String, Text, Date, DateTime, Boolean
from database import Base
from datetime import datetime


class StudentDB(Base):
    __tablename__ = "students"

    id = Column(Integer, primary_key=True, index=True)
    full_name = Column(String(100), nullable=False)
    dob = Column(Date, nullable=False)
    gender = Column(String(20), nullable=False)
    email = Column(String(100), nullable=False, index=True)
    phone = Column(String(20), nullable=False)
    address = Column(Text, nullable=False)
    previous_school = Column(String(200), nullable=True)
    result = Column(String(100), nullable=False)
    class_applying = Column(String(50), nullable=False)
    photo = Column(String(500), nullable=True)  # uploads/ altındaki dosya yolu
    agreed = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    def __repr__(self):
        return f"<Student {self.email}>"
