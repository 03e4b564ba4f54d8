import uuid
from sqlalchemy import (
    Column,
    String,
    Text,
    DateTime,
    Integer,
    ForeignKey,
    Index,
    Boolean,
    CheckConstraint,
)
from sqlalchemy.orm import declarative_base
from datetime import datetime, UTC


def now_utc():
    """Return an aware UTC datetime for default/updated timestamps."""
    return datetime.now(UTC)


def new_id() -> str:
    return str(uuid.uuid4())


Base = declarative_base()

"""
Portfolio content and admin inbox tables.

- Projects link to Technologies through the `project_technologies` join table
  (and Experiences through `experience_technologies`); join rows are managed
  explicitly by the repositories, no ORM cascades.
- Connections, Feedback and Reviews carry a small status workflow enforced by
  check constraints and by the repositories.
"""


class Technology(Base):
    __tablename__ = 'technologies'
    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(255), nullable=False)
    icon_name = Column(String(255), nullable=True)
    category = Column(String(100), nullable=True)
    created_at = Column(DateTime(timezone=True), default=now_utc)

    __table_args__ = (
        Index('idx_technologies_category_name', 'category', 'name'),
    )


class Project(Base):
    __tablename__ = 'projects'
    id = Column(String(36), primary_key=True, default=new_id)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default='')
    image_url = Column(Text, nullable=True)
    project_url = Column(Text, nullable=True)  # live demo
    github_url = Column(Text, nullable=True)  # source repository
    live_url = Column(Text, nullable=True)
    repo_url = Column(Text, nullable=True)
    is_featured = Column(Boolean, nullable=False, default=False)
    sort_order = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)

    __table_args__ = (
        Index('idx_projects_sort_order', 'sort_order'),
        Index('idx_projects_is_featured', 'is_featured'),
    )


class ProjectTechnology(Base):
    __tablename__ = 'project_technologies'
    project_id = Column(String(36), ForeignKey('projects.id'), primary_key=True)
    technology_id = Column(String(36), ForeignKey('technologies.id'), primary_key=True)

    __table_args__ = (
        Index('idx_project_technologies_technology_id', 'technology_id'),
    )


class Connection(Base):
    __tablename__ = 'connections'
    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(255), nullable=False)
    email = Column(String(320), nullable=False)
    subject = Column(String(255), nullable=False)
    message = Column(Text, nullable=False)
    status = Column(String(20), nullable=False, default='unread')
    reply_message = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)

    __table_args__ = (
        Index('idx_connections_created_at', 'created_at'),
        Index('idx_connections_status', 'status'),
        CheckConstraint("status in ('unread','read','replied')", name='ck_connections_status'),
    )


class Feedback(Base):
    __tablename__ = 'feedback'
    id = Column(String(36), primary_key=True, default=new_id)
    type = Column(String(20), nullable=False, default='feedback')
    content = Column(Text, nullable=False)
    priority = Column(String(20), nullable=True)
    status = Column(String(20), nullable=False, default='unread')
    reply_message = Column(Text, nullable=True)
    connection_id = Column(String(36), ForeignKey('connections.id', ondelete='SET NULL'), nullable=True)
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)

    __table_args__ = (
        Index('idx_feedback_created_at', 'created_at'),
        Index('idx_feedback_connection_id', 'connection_id'),
        CheckConstraint("type in ('feedback','complaint','suggestion')", name='ck_feedback_type'),
        CheckConstraint("status in ('unread','read','replied')", name='ck_feedback_status'),
        CheckConstraint("priority is null or priority in ('low','medium','high')", name='ck_feedback_priority'),
    )


class Review(Base):
    __tablename__ = 'reviews'
    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(255), nullable=False)
    role = Column(String(255), nullable=False)
    company = Column(String(255), nullable=True)
    content = Column(Text, nullable=False)
    rating = Column(Integer, nullable=True)
    status = Column(String(20), nullable=False, default='pending')
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)

    __table_args__ = (
        Index('idx_reviews_status_created_at', 'status', 'created_at'),
        CheckConstraint("status in ('pending','approved','rejected')", name='ck_reviews_status'),
        CheckConstraint("rating is null or (rating >= 1 and rating <= 5)", name='ck_reviews_rating'),
    )


class PortfolioStat(Base):
    __tablename__ = 'portfolio_stats'
    metric_name = Column(String(100), primary_key=True)
    metric_value = Column(Integer, nullable=False, default=0)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)


# Public profile content (read-only through this service)

class Profile(Base):
    __tablename__ = 'profiles'
    id = Column(String(36), primary_key=True, default=new_id)
    full_name = Column(String(255), nullable=False)
    headline = Column(String(255), nullable=True)
    bio = Column(Text, nullable=True)
    email = Column(String(320), nullable=True)
    location = Column(String(255), nullable=True)
    avatar_url = Column(Text, nullable=True)
    resume_url = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), default=now_utc)


class Experience(Base):
    __tablename__ = 'experiences'
    id = Column(String(36), primary_key=True, default=new_id)
    company = Column(String(255), nullable=False)
    role = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    start_date = Column(String(32), nullable=True)
    end_date = Column(String(32), nullable=True)
    is_current = Column(Boolean, nullable=False, default=False)
    sort_order = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), default=now_utc)


class ExperienceTechnology(Base):
    __tablename__ = 'experience_technologies'
    experience_id = Column(String(36), ForeignKey('experiences.id'), primary_key=True)
    technology_id = Column(String(36), ForeignKey('technologies.id'), primary_key=True)


class Education(Base):
    __tablename__ = 'education'
    id = Column(String(36), primary_key=True, default=new_id)
    institution = Column(String(255), nullable=False)
    degree = Column(String(255), nullable=False)
    field_of_study = Column(String(255), nullable=True)
    start_date = Column(String(32), nullable=True)
    end_date = Column(String(32), nullable=True)
    description = Column(Text, nullable=True)
    sort_order = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), default=now_utc)


class Certification(Base):
    __tablename__ = 'certifications'
    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(255), nullable=False)
    issuer = Column(String(255), nullable=False)
    issued_date = Column(String(32), nullable=True)
    credential_url = Column(Text, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    sort_order = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), default=now_utc)


class FunFact(Base):
    __tablename__ = 'fun_facts'
    id = Column(String(36), primary_key=True, default=new_id)
    category = Column(String(100), nullable=False)
    category_icon_name = Column(String(100), nullable=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    sort_order = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), default=now_utc)

    __table_args__ = (
        Index('idx_fun_facts_category_sort_order', 'category', 'sort_order'),
    )
