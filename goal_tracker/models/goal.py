from sqlalchemy import Column, Integer, String, Text, DateTime, Date, JSON, ForeignKey, UniqueConstraint, func
from goal_tracker.database import Base

class Goal(Base):
    __tablename__ = "goals"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    category = Column(String, nullable=False, default="")
    title = Column(String, nullable=False)
    floor = Column(Text, nullable=False, default="")     # free text, not necessarily numeric
    ceiling = Column(Text, nullable=False, default="")
    unit = Column(String, nullable=False, default="")
    start_date = Column(Date, nullable=False)

    frequency_type = Column(String, nullable=False)  # daily, specific_days, days_per_period, repeating_n_days
    specific_days = Column(JSON, nullable=True)      # ["monday", "wednesday"]
    days_per_period = Column(Integer, nullable=True)
    period_unit = Column(String, nullable=True)      # week, month, year
    repeat_every_n_days = Column(Integer, nullable=True)

    target_date = Column(Date, nullable=True)
    target_successes = Column(Integer, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

class GoalLog(Base):
    __tablename__ = "goal_logs"

    id = Column(Integer, primary_key=True, index=True)
    goal_id = Column(Integer, ForeignKey("goals.id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    date = Column(Date, nullable=False)
    status = Column(String, nullable=False)    # achieved, failed, not_logged
    rating = Column(Integer, nullable=True)    # 1–10, only when achieved
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        UniqueConstraint("goal_id", "user_id", "date", name="uq_goal_user_date"),
    )
