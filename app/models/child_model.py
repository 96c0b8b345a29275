from sqlalchemy import Column, String, ForeignKey
from sqlalchemy.orm import relationship
from config.database import Base

class Classroom(Base):
    __tablename__ = "classes"

    id = Column(String, primary_key=True, index=True)
    daycare_id = Column(String, nullable=False)
    location_id = Column(String, nullable=False)
    name = Column(String, nullable=False)

    children = relationship("Child", back_populates="classroom")


class Child(Base):
    __tablename__ = "children"

    id = Column(String, primary_key=True, index=True)
    daycare_id = Column(String, nullable=False)
    location_id = Column(String, nullable=False)
    class_id = Column(String, ForeignKey("classes.id"), nullable=True, index=True)
    name = Column(String, nullable=False)

    classroom = relationship("Classroom", back_populates="children")
