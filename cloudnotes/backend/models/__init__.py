# Importing the models registers every table on Base.metadata
from cloudnotes.backend.models.base import Base
from cloudnotes.backend.models.note import Note
from cloudnotes.backend.models.user import User

__all__ = ["Base", "Note", "User"]
