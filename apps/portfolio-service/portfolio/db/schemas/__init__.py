"""
Domain-split Pydantic schemas with a single aggregator.

Import from `portfolio.db.schemas`; the submodules are an implementation
detail.
"""

# Import order: technologies first, projects and content embed them
from .technologies import (
    TechnologyBase,
    TechnologyCreate,
    TechnologyUpdate,
    Technology,
    TechnologyCategory,
)
from .projects import ProjectBase, ProjectCreate, ProjectUpdate, Project
from .connections import ConnectionBase, ConnectionCreate, Connection, InboxStatusUpdate, ReplyCreate
from .feedback import FeedbackBase, FeedbackCreate, Feedback, FeedbackSender, FeedbackWithSender
from .reviews import ReviewBase, ReviewCreate, Review
from .content import (
    Profile,
    Experience,
    Education,
    Certification,
    FunFact,
    FunFactCategory,
)

__all__ = [
    "TechnologyBase",
    "TechnologyCreate",
    "TechnologyUpdate",
    "Technology",
    "TechnologyCategory",
    "ProjectBase",
    "ProjectCreate",
    "ProjectUpdate",
    "Project",
    "ConnectionBase",
    "ConnectionCreate",
    "Connection",
    "InboxStatusUpdate",
    "ReplyCreate",
    "FeedbackBase",
    "FeedbackCreate",
    "Feedback",
    "FeedbackSender",
    "FeedbackWithSender",
    "ReviewBase",
    "ReviewCreate",
    "Review",
    "Profile",
    "Experience",
    "Education",
    "Certification",
    "FunFact",
    "FunFactCategory",
]
