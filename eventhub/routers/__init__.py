# Import all router modules to make them available
from . import auth
from . import users
from . import events
from . import venues
from . import organizers
from . import organizer
from . import admin

__all__ = [
    "auth",
    "users",
    "events",
    "venues",
    "organizers",
    "organizer",
    "admin",
]
