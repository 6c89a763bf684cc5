from sqlalchemy import (
    BigInteger,
    Column,
    Integer,
    String,
    Float,
    DateTime,
    ForeignKey,
    UniqueConstraint,
)
from sqlalchemy.orm import declarative_base, relationship
from datetime import datetime


Base = declarative_base()



class User(Base):
    __tablename__ = "users"
    id = Column(String, primary_key=True, index=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    # Aggregate stats
    total_xp = Column(Integer, default=0, nullable=False)
    completed_courses = Column(Integer, default=0, nullable=False)
    current_streak = Column(Integer, default=0, nullable=False)

    # Relationships
    course_progress = relationship("CourseProgress", back_populates="user")
    quiz_attempts = relationship("QuizAttempt", back_populates="user")


class CourseProgress(Base):
    __tablename__ = "course_progress"
    __table_args__ = (UniqueConstraint("user_id", "course_id"),)
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, ForeignKey("users.id"), index=True)
    course_id = Column(String, index=True)
    percentage = Column(Integer, default=0, nullable=False)
    last_updated = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationship
    user = relationship("User", back_populates="course_progress")


class QuizAttempt(Base):
    __tablename__ = "quiz_attempts"
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, ForeignKey("users.id"), index=True)
    course_id = Column(String, index=True)

    # Epoch milliseconds, as measured by the session clock
    started_at_ms = Column(BigInteger)
    ended_at_ms = Column(BigInteger)

    # Outcome
    score = Column(Integer)
    scorable_questions = Column(Integer)
    percentage = Column(Integer)
    xp_gained = Column(Integer)
    average_response_ms = Column(Float)

    # Relationship
    user = relationship("User", back_populates="quiz_attempts")
