# Import all models so Alembic can discover them via Base.metadata
from .aligner_case import AlignerCase
from .blog import Blog
from .contact import ContactQuery
from .course import Course
from .ebook import Ebook
from .enrollment import Enrollment
from .live_session import LiveSession
from .map_user import MapUser
from .showcase import AlignerProcess, CaseStudy, Testimonial
from .user import User

__all__ = [
    "AlignerCase",
    "AlignerProcess",
    "Blog",
    "CaseStudy",
    "ContactQuery",
    "Course",
    "Ebook",
    "Enrollment",
    "LiveSession",
    "MapUser",
    "Testimonial",
    "User",
]
